"""Session token generation and validation

An unlocked gate hands the client a signed session token. The token only
names the server-side session; exiting the gate discards that session, which
invalidates the token even before it expires.

Token Claims:
- sid: Data room session ID (random, URL-safe)
- iat: Unix timestamp when token was created
- exp: Unix timestamp when token expires (iat + JWT_EXPIRY_MINUTES)

Security Properties:
- Algorithm: HS256 (HMAC-SHA256 symmetric signing)
- Secret: JWT_SECRET setting
- Token tamper-proof (signature validation fails if claims modified)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt


@dataclass(frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime
    expires_in: int


def create_session_token(
    session_id: str,
    secret: str,
    expiry_minutes: int = 60,
    algorithm: str = "HS256",
) -> IssuedToken:
    """Create a signed token for a data room session.

    Args:
        session_id: Server-side session ID
        secret: Signing secret
        expiry_minutes: Token lifetime
        algorithm: JWT signing algorithm

    Returns:
        IssuedToken: Encoded token with its expiry
    """
    if not secret:
        raise ValueError("JWT secret is not configured")

    now = datetime.now(timezone.utc)
    expiration = now + timedelta(minutes=expiry_minutes)

    payload = {
        "sid": session_id,
        "iat": int(now.timestamp()),
        "exp": int(expiration.timestamp()),
    }

    token = jwt.encode(payload, secret, algorithm=algorithm)
    return IssuedToken(token=token, expires_at=expiration, expires_in=expiry_minutes * 60)


def decode_session_token(token: str, secret: str, algorithm: str = "HS256") -> Dict[str, Any]:
    """Decode and validate a session token.

    Returns:
        dict: Decoded token payload with claims

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid, tampered, or has no sid
    """
    payload = jwt.decode(token, secret, algorithms=[algorithm])
    if not payload.get("sid"):
        raise jwt.InvalidTokenError("Invalid token: missing session claim")
    return payload
