"""Identity domain layer - port for the host application's identity provider"""

from .auth_state import AuthEvent, AuthStateChange, AuthStateStream, AuthStateSubscription
from .ports import IdentityError, IdentityProviderPort, IdentityUser, UserRole

__all__ = [
    "AuthEvent",
    "AuthStateChange",
    "AuthStateStream",
    "AuthStateSubscription",
    "IdentityError",
    "IdentityProviderPort",
    "IdentityUser",
    "UserRole",
]
