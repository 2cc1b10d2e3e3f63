"""Data room sessions.

Each client that passes the gate gets its own session: one gate, one
document repository (and so one catalog), one viewer selection. The
registry owns them explicitly; there is no module-level catalog.
"""

import logging
import secrets
import threading
from datetime import datetime, timezone
from typing import Dict, Optional

from ..domain.documents.ports.object_storage_port import ObjectStoragePort
from ..domain.documents.repository import DocumentRepository
from ..domain.gate.access_gate import AccessGate, GateCredentials
from ..domain.viewer.selection import ViewerSession

logger = logging.getLogger(__name__)


class DataRoomSession:
    """Gate, catalog and viewer state for one client."""

    def __init__(self, session_id: str, gate: AccessGate, repository: DocumentRepository):
        self.session_id = session_id
        self.gate = gate
        self.repository = repository
        self.viewer = ViewerSession()
        self.expires_at: Optional[datetime] = None

        gate.on_exit(repository.clear)
        gate.on_exit(self.viewer.clear)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        return (now or datetime.now(timezone.utc)) >= self.expires_at


class SessionRegistry:
    """Live sessions keyed by session ID.

    Sessions are created locked; only unlocked sessions are registered.
    Expired sessions are pruned whenever a new one is registered.

    The session map is guarded by a lock because request dependencies may
    run in the server's threadpool. Gate exit hooks run outside the lock.
    """

    def __init__(
        self,
        credentials: GateCredentials,
        storage: ObjectStoragePort,
        page_size: int = 100,
        max_upload_size: Optional[int] = None,
    ):
        self._credentials = credentials
        self._storage = storage
        self._page_size = page_size
        self._max_upload_size = max_upload_size
        self._sessions: Dict[str, DataRoomSession] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def new_session(self) -> DataRoomSession:
        """Create a locked, unregistered session."""
        repository = DocumentRepository(
            self._storage,
            page_size=self._page_size,
            max_upload_size=self._max_upload_size,
        )
        return DataRoomSession(
            session_id=secrets.token_urlsafe(24),
            gate=AccessGate(self._credentials),
            repository=repository,
        )

    def register(self, session: DataRoomSession, expires_at: datetime) -> None:
        self.prune_expired()
        session.expires_at = expires_at
        with self._lock:
            self._sessions[session.session_id] = session
            session_count = len(self._sessions)
        logger.info(
            f"Session registered: active_sessions={session_count}",
            extra={"session_count": session_count},
        )

    def get(self, session_id: str) -> Optional[DataRoomSession]:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is not None and session.is_expired():
            self.discard(session_id)
            return None
        return session

    def discard(self, session_id: str) -> None:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is not None and session.gate.is_unlocked:
            session.gate.exit()

    def prune_expired(self) -> int:
        now = datetime.now(timezone.utc)
        with self._lock:
            expired = [sid for sid, session in self._sessions.items() if session.is_expired(now)]
        for session_id in expired:
            self.discard(session_id)
        if expired:
            logger.info(f"Pruned expired sessions: count={len(expired)}")
        return len(expired)
