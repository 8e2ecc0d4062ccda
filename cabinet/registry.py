from __future__ import annotations

"""Process-wide bookkeeping of live cabinet sessions.

Each rendered cabinet message owns at most one :class:`SessionHandler` and
one expiry timer.  Registering a new handler for a message that already has
one cancels the old timer and detaches the old handler before the new one
attaches.  ``register`` and ``expire`` never await, so on a single event
loop they cannot interleave.
"""

import asyncio
from dataclasses import dataclass
import itertools
import logging
from typing import Any, Awaitable, Callable, Dict, Hashable, Optional, Protocol

__all__ = ["SessionRegistry", "SessionLike", "TimerHandle", "DEFAULT_TTL"]

logger = logging.getLogger(__name__)

# Seconds a cabinet message stays interactive.
DEFAULT_TTL = 300.0


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class SessionLike(Protocol):
    def attach(self) -> None: ...

    def detach(self) -> None: ...

    async def clear_controls(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]
Spawner = Callable[[Awaitable[Any]], Any]


def _loop_scheduler(delay: float, callback: Callable[[], None]) -> TimerHandle:
    return asyncio.get_running_loop().call_later(delay, callback)


@dataclass
class _Entry:
    handler: SessionLike
    timer: TimerHandle
    token: int


class SessionRegistry:
    """Maps message ids to their live session handler and expiry timer.

    Parameters
    ----------
    ttl:
        Default lifetime of a session in seconds.  Activity does not extend it.
    scheduler:
        ``scheduler(delay, callback)`` arms a timer and returns a handle with
        ``cancel()``.  Defaults to the running loop's ``call_later``.
    spawn:
        Runs the best-effort clean-up coroutine.  Defaults to
        :func:`asyncio.ensure_future`.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        *,
        scheduler: Optional[Scheduler] = None,
        spawn: Optional[Spawner] = None,
    ) -> None:
        self.ttl = ttl
        self._scheduler = scheduler or _loop_scheduler
        self._spawn = spawn or asyncio.ensure_future
        self._entries: Dict[Hashable, _Entry] = {}
        self._tokens = itertools.count(1)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._entries

    def active(self, message_id: Hashable) -> Optional[SessionLike]:
        entry = self._entries.get(message_id)
        return entry.handler if entry is not None else None

    # ------------------------------------------------------------------
    def register(
        self,
        message_id: Hashable,
        handler: SessionLike,
        ttl: Optional[float] = None,
    ) -> None:
        """Install ``handler`` for ``message_id``, replacing any existing one."""

        previous = self._entries.pop(message_id, None)
        if previous is not None:
            previous.timer.cancel()
            previous.handler.detach()
            logger.debug("Replaced cabinet session for message %s", message_id)

        token = next(self._tokens)
        delay = self.ttl if ttl is None else ttl
        handler.attach()
        timer = self._scheduler(delay, lambda: self._on_timer(message_id, token))
        self._entries[message_id] = _Entry(handler=handler, timer=timer, token=token)

    def _on_timer(self, message_id: Hashable, token: int) -> None:
        entry = self._entries.get(message_id)
        if entry is None or entry.token != token:
            # Timer of a session that was already replaced or expired.
            return
        self.expire(message_id)

    def expire(self, message_id: Hashable) -> Any:
        """Tear down the session for ``message_id``.

        Returns whatever ``spawn`` returned for the clean-up coroutine, or
        ``None`` when no session was registered.
        """

        entry = self._entries.pop(message_id, None)
        if entry is None:
            return None
        entry.timer.cancel()
        entry.handler.detach()
        logger.debug("Cabinet session for message %s expired", message_id)
        return self._spawn(self._clear_controls(message_id, entry.handler))

    async def _clear_controls(self, message_id: Hashable, handler: SessionLike) -> None:
        try:
            await handler.clear_controls()
        except Exception as exc:
            # The message may already be gone; the session is over regardless.
            logger.debug("Could not clear controls on message %s: %s", message_id, exc)
