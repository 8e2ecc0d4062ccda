"""Card cabinet: query a user's card collection and page through it."""

from .aliases import TermExpander
from .models import Card, Condition, PaginationState, QueryOptions, Rarity
from .pagination import navigate, paginate
from .query import run_query
from .registry import SessionRegistry

__all__ = [
    "Card",
    "Condition",
    "PaginationState",
    "QueryOptions",
    "Rarity",
    "SessionRegistry",
    "TermExpander",
    "navigate",
    "paginate",
    "run_query",
    "CabinetCommand",
    "SessionHandler",
]


def __getattr__(name):  # pragma: no cover - thin wrapper
    # discord.py is only imported when the Discord-facing pieces are needed.
    if name == "CabinetCommand":
        from .command import CabinetCommand

        return CabinetCommand
    if name == "SessionHandler":
        from .handler import SessionHandler

        return SessionHandler
    raise AttributeError(name)
