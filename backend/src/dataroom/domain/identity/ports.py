"""Identity Provider Port - hosted sign-in service used by the host application.

The data room gate does not depend on this provider; it is consumed by the
surrounding application (profile pages, sign-in modal). Only the interface
lives here.

Architecture: Hexagonal - Port interface in domain layer
"""

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .auth_state import AuthStateStream


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class IdentityUser:
    """A signed-in user as reported by the provider."""
    id: str
    email: str
    role: UserRole = UserRole.USER
    profile: Dict[str, Any] = field(default_factory=dict)


class IdentityError(Exception):
    """Raised by providers when a sign-in/sign-up call fails."""


class IdentityProviderPort(ABC):
    """Port interface for a hosted identity provider."""

    @abstractmethod
    async def get_current_user(self) -> Optional[IdentityUser]:
        """Return the signed-in user, or None."""

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> IdentityUser:
        """Sign in with email and password.

        Raises:
            IdentityError: If the provider rejects the credentials
        """

    @abstractmethod
    async def sign_up(
        self,
        email: str,
        password: str,
        profile: Optional[Dict[str, Any]] = None,
    ) -> IdentityUser:
        """Register a new account.

        Raises:
            IdentityError: If the provider rejects the registration
        """

    @abstractmethod
    async def sign_in_with_oauth(self, provider: str) -> str:
        """Start an OAuth flow and return the provider redirect URL."""

    @abstractmethod
    async def sign_out(self) -> None:
        """End the current provider session."""

    @abstractmethod
    def auth_state_changes(self) -> AuthStateStream:
        """Stream of sign-in/sign-out events for subscribers."""
