"""Auth state change stream.

Subscribers receive every change published after they subscribe, as an async
iterator, and must unsubscribe on teardown. Example:

    async with provider.auth_state_changes().subscribe() as changes:
        async for change in changes:
            if change.event is AuthEvent.SIGNED_OUT:
                break
"""

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Set

if TYPE_CHECKING:
    from .ports import IdentityUser

logger = logging.getLogger(__name__)


class AuthEvent(str, enum.Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"


@dataclass(frozen=True)
class AuthStateChange:
    event: AuthEvent
    user: Optional["IdentityUser"] = None


_CLOSED: Any = object()


class AuthStateSubscription:
    """One subscriber's view of the stream."""

    def __init__(self, stream: "AuthStateStream"):
        self._stream = stream
        self._queue: "asyncio.Queue[Any]" = asyncio.Queue()
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        """Stop receiving changes. Pending iteration ends after queued items."""
        if not self._active:
            return
        self._active = False
        self._stream._discard(self)
        self._queue.put_nowait(_CLOSED)

    def _deliver(self, change: AuthStateChange) -> None:
        if self._active:
            self._queue.put_nowait(change)

    def __aiter__(self) -> "AuthStateSubscription":
        return self

    async def __anext__(self) -> AuthStateChange:
        item = await self._queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        return item

    async def __aenter__(self) -> "AuthStateSubscription":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.unsubscribe()


class AuthStateStream:
    """Fan-out of auth state changes to any number of subscribers."""

    def __init__(self):
        self._subscribers: Set[AuthStateSubscription] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self) -> AuthStateSubscription:
        subscription = AuthStateSubscription(self)
        self._subscribers.add(subscription)
        return subscription

    def publish(self, change: AuthStateChange) -> None:
        logger.debug(f"Auth state change: event={change.event.value}, subscribers={len(self._subscribers)}")
        for subscription in list(self._subscribers):
            subscription._deliver(change)

    def close(self) -> None:
        """Unsubscribe everyone, ending their iteration."""
        for subscription in list(self._subscribers):
            subscription.unsubscribe()

    def _discard(self, subscription: AuthStateSubscription) -> None:
        self._subscribers.discard(subscription)
