"""Gate endpoints

Unlock with the shared credential pair, inspect the gate, and exit. Exiting
discards the session along with its catalog and viewer selection.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from ..config import Settings
from ..dependencies import get_app_settings, get_session_registry
from ..documents.schemas import CatalogResponse
from ..domain.errors import InvalidCredentials, StoreUnavailable
from ..observability import metrics
from .dependencies import UnlockedSession
from .schemas import GateStateResponse, UnlockRequest, UnlockResponse
from .sessions import SessionRegistry
from .tokens import create_session_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/gate", tags=["Gate"])


@router.post("/unlock", response_model=UnlockResponse)
async def unlock(
    credentials: UnlockRequest,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Pass the gate and open a data room session.

    The catalog is fetched right after unlocking. If that first listing
    fails the session is still open; ``catalog_error`` says why and the
    client refreshes manually.

    Raises:
        InvalidCredentials: 401, without saying which field was wrong
    """
    session = registry.new_session()
    try:
        state = session.gate.submit(credentials.username, credentials.password)
    except InvalidCredentials:
        metrics.gate_attempts_total.labels(outcome="rejected").inc()
        raise
    metrics.gate_attempts_total.labels(outcome="unlocked").inc()

    issued = create_session_token(
        session.session_id,
        settings.JWT_SECRET.get_secret_value(),
        expiry_minutes=settings.JWT_EXPIRY_MINUTES,
        algorithm=settings.JWT_ALGORITHM,
    )
    registry.register(session, issued.expires_at)

    catalog_error = None
    try:
        await session.repository.list_documents()
        metrics.catalog_refresh_total.labels(status="success").inc()
    except StoreUnavailable as e:
        metrics.catalog_refresh_total.labels(status="error").inc()
        catalog_error = e.message

    return UnlockResponse(
        access_token=issued.token,
        token_type="bearer",
        expires_in=issued.expires_in,
        state=state,
        catalog=CatalogResponse.from_catalog(session.repository.catalog, session.repository),
        catalog_error=catalog_error,
    )


@router.get("", response_model=GateStateResponse)
async def get_gate_state(session: UnlockedSession):
    return GateStateResponse(state=session.gate.state)


@router.post("/exit", response_model=GateStateResponse)
async def exit_gate(
    session: UnlockedSession,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
):
    """Lock the gate and discard the session (catalog and viewer included)."""
    state = session.gate.exit()
    registry.discard(session.session_id)
    metrics.gate_exits_total.inc()
    return GateStateResponse(state=state)
