"""Access gate - shared-credential check in front of the data room.

A deliberately low-assurance gate: one credential pair shared by a handful
of trusted parties. The pair is injected at start-up and compared in
constant time. There is no lockout and no attempt audit.
"""

import enum
import hmac
import logging
from dataclasses import dataclass, field
from typing import Callable, List

from ..errors import GateLocked, InvalidCredentials

logger = logging.getLogger(__name__)


class GateState(str, enum.Enum):
    """Gate states. LOCKED -> UNLOCKED on submit, UNLOCKED -> LOCKED on exit."""
    LOCKED = "LOCKED"
    UNLOCKED = "UNLOCKED"


@dataclass(frozen=True)
class GateCredentials:
    username: str
    password: str = field(repr=False)

    def __post_init__(self):
        if not self.username or not self.password:
            raise ValueError("Gate username and password must both be configured")

    def matches(self, username: str, password: str) -> bool:
        # Evaluate both comparisons so timing does not reveal which field failed
        username_ok = hmac.compare_digest(username.encode("utf-8"), self.username.encode("utf-8"))
        password_ok = hmac.compare_digest(password.encode("utf-8"), self.password.encode("utf-8"))
        return username_ok and password_ok


class AccessGate:
    """Two-state gate guarding one data room session.

    Reset hooks registered with ``on_exit`` run when the gate is exited, so
    session-scoped state (catalog, viewer selection) is wiped along with it.
    """

    def __init__(self, credentials: GateCredentials):
        self._credentials = credentials
        self._state = GateState.LOCKED
        self._exit_hooks: List[Callable[[], None]] = []

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def is_unlocked(self) -> bool:
        return self._state is GateState.UNLOCKED

    def on_exit(self, hook: Callable[[], None]) -> None:
        self._exit_hooks.append(hook)

    def submit(self, username: str, password: str) -> GateState:
        """Check a credential pair and unlock on an exact match.

        Raises:
            InvalidCredentials: If either field does not match; state is unchanged
        """
        if not self._credentials.matches(username or "", password or ""):
            logger.info("Gate unlock rejected")
            raise InvalidCredentials()

        self._state = GateState.UNLOCKED
        logger.info("Gate unlocked")
        return self._state

    def exit(self) -> GateState:
        """Lock the gate and reset all session-scoped state."""
        self._state = GateState.LOCKED
        for hook in self._exit_hooks:
            hook()
        logger.info("Gate exited")
        return self._state

    def require_unlocked(self) -> None:
        if not self.is_unlocked:
            raise GateLocked()
