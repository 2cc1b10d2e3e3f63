"""FastAPI dependencies for the access gate.

Usage:
    @router.get("/documents")
    async def list_documents(session: UnlockedSession):
        return session.repository.catalog
"""

from typing import Annotated, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config import Settings
from ..dependencies import get_app_settings, get_session_registry
from ..domain.errors import GateLocked
from .sessions import DataRoomSession, SessionRegistry
from .tokens import decode_session_token


# Missing tokens are reported as a locked gate, not as FastAPI's 403
security = HTTPBearer(auto_error=False)


async def get_session_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_app_settings),
) -> str:
    """Extract the session ID from the bearer token.

    Raises:
        GateLocked: If the token is missing, invalid or expired
    """
    if credentials is None:
        raise GateLocked()

    try:
        payload = decode_session_token(
            credentials.credentials,
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
    except jwt.ExpiredSignatureError:
        raise GateLocked("Session has expired. Enter the credentials again.")
    except jwt.InvalidTokenError:
        raise GateLocked()

    return payload["sid"]


async def get_unlocked_session(
    session_id: str = Depends(get_session_id),
    registry: SessionRegistry = Depends(get_session_registry),
) -> DataRoomSession:
    """Resolve the caller's session and require its gate to be unlocked.

    Declared async so registry lookups run on the event loop, not the threadpool.

    Raises:
        GateLocked: If the session is gone (exited or expired) or locked
    """
    session = registry.get(session_id)
    if session is None:
        raise GateLocked()
    session.gate.require_unlocked()
    return session


UnlockedSession = Annotated[DataRoomSession, Depends(get_unlocked_session)]
