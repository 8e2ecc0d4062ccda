"""Page arithmetic for cabinet result sets."""

from __future__ import annotations

import math

from .models import PaginationState

__all__ = ["paginate", "navigate", "NAVIGATION_ACTIONS"]

NAVIGATION_ACTIONS = ("first", "prev", "next", "last")


def paginate(total_items: int, page_size: int, requested_page: int) -> PaginationState:
    """Clamp ``requested_page`` into the valid range for ``total_items``.

    There is always at least one page, even for an empty result.
    """
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    total_items = max(0, int(total_items))
    total_pages = max(1, math.ceil(total_items / page_size))
    current_page = min(max(int(requested_page), 1), total_pages)
    return PaginationState(
        current_page=current_page,
        total_pages=total_pages,
        page_size=page_size,
        total_items=total_items,
    )


def navigate(state: PaginationState, action: str) -> PaginationState:
    """Return the pagination reached by pressing ``action`` on ``state``."""
    if action == "first":
        target = 1
    elif action == "prev":
        target = state.current_page - 1
    elif action == "next":
        target = state.current_page + 1
    elif action == "last":
        target = state.total_pages
    else:
        target = state.current_page
    return paginate(state.total_items, state.page_size, target)
