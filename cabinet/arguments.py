"""Parse the raw argument tokens of a cabinet invocation."""

from __future__ import annotations

import re
from typing import Iterable

from .models import QueryOptions

__all__ = ["parse_arguments", "DUPLICATE_FLAGS"]

DUPLICATE_FLAGS = frozenset({"duplicates", "dupes", "dupe"})

_MENTION_RE = re.compile(r"^<@!?(\d+)>$")
_PAGE_RE = re.compile(r"^(?:page:|p:|#)(-?\d+)$", re.IGNORECASE)


def parse_arguments(args: Iterable[str], default_owner_id: int) -> QueryOptions:
    """Turn ``args`` into :class:`QueryOptions`.

    ``default_owner_id`` is used unless a mention selects another owner; a
    later mention wins over an earlier one, as does a later page token.
    """

    owner_id = default_owner_id
    page = 1
    duplicates = False
    include: list[str] = []
    exclude: list[str] = []

    for arg in args:
        token = arg.strip()
        if not token:
            continue
        mention = _MENTION_RE.match(token)
        if mention:
            owner_id = int(mention.group(1))
            continue
        page_match = _PAGE_RE.match(token)
        if page_match:
            page = max(1, int(page_match.group(1)))
            continue
        if token.lower() in DUPLICATE_FLAGS:
            duplicates = True
            continue
        if token.startswith("-"):
            term = token[1:].lower()
            if term:
                exclude.append(term)
            continue
        include.append(token.lower())

    return QueryOptions(
        owner_id=owner_id,
        include_terms=tuple(include),
        exclude_terms=tuple(exclude),
        page=page,
        duplicates_only=duplicates,
    )
