"""State machine behind an interactive cabinet message.

:func:`transition` is pure: it maps ``(state, event)`` onto a new state and
the effects the caller has to perform.  :class:`~cabinet.handler.SessionHandler`
executes those effects against Discord and only commits the new state once
they succeeded.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple, Union

from .models import PaginationState
from .pagination import NAVIGATION_ACTIONS, navigate

__all__ = [
    "CODE_CATALOG_ACTION",
    "SessionStatus",
    "SessionState",
    "Action",
    "Close",
    "Render",
    "SendCodes",
    "transition",
]

CODE_CATALOG_ACTION = "code_catalog"


class SessionStatus(Enum):
    ACTIVE = "active"
    EXPIRED = "expired"


@dataclass(frozen=True)
class SessionState:
    status: SessionStatus
    pagination: PaginationState

    @classmethod
    def active(cls, pagination: PaginationState) -> "SessionState":
        return cls(SessionStatus.ACTIVE, pagination)

    @property
    def is_active(self) -> bool:
        return self.status is SessionStatus.ACTIVE


@dataclass(frozen=True)
class Action:
    """A button press identified by its custom id."""

    action_id: str


@dataclass(frozen=True)
class Close:
    """The session timed out or was replaced."""


@dataclass(frozen=True)
class Render:
    pagination: PaginationState


@dataclass(frozen=True)
class SendCodes:
    pagination: PaginationState


Event = Union[Action, Close]
Effect = Union[Render, SendCodes]


def transition(state: SessionState, event: Event) -> Tuple[SessionState, Tuple[Effect, ...]]:
    if not state.is_active:
        return state, ()
    if isinstance(event, Close):
        return replace(state, status=SessionStatus.EXPIRED), ()
    if isinstance(event, Action):
        if event.action_id in NAVIGATION_ACTIONS:
            pagination = navigate(state.pagination, event.action_id)
            return replace(state, pagination=pagination), (Render(pagination),)
        if event.action_id == CODE_CATALOG_ACTION:
            return state, (SendCodes(state.pagination),)
    return state, ()
