"""Value objects shared by the cabinet query engine and session handling."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping, Optional


class Rarity(str, Enum):
    MYTHIC = "mythic"
    GLYPH = "glyph"
    UNIQUE = "unique"
    STANDARD = "standard"

    @classmethod
    def parse(cls, value: Any) -> Optional["Rarity"]:
        """Return the member for ``value`` (case-insensitive) or ``None``."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @property
    def rank(self) -> int:
        return RARITY_RANKS[self]


class Condition(str, Enum):
    PRISTINE = "pristine"
    MINT = "mint"
    GOOD = "good"
    WORN = "worn"
    DAMAGED = "damaged"

    @classmethod
    def parse(cls, value: Any) -> Optional["Condition"]:
        """Return the member for ``value`` (case-insensitive) or ``None``."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @property
    def rank(self) -> int:
        return CONDITION_RANKS[self]


# Higher rank sorts first.
RARITY_RANKS = {
    Rarity.MYTHIC: 4,
    Rarity.GLYPH: 3,
    Rarity.UNIQUE: 2,
    Rarity.STANDARD: 1,
}

# Lower rank is the better condition and sorts first.
CONDITION_RANKS = {
    Condition.PRISTINE: 1,
    Condition.MINT: 2,
    Condition.GOOD: 3,
    Condition.WORN: 4,
    Condition.DAMAGED: 5,
}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _optional_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True, slots=True)
class Card:
    """One owned card as fetched for a cabinet session."""

    name: str
    group: str
    rarity: Rarity
    condition: Condition
    image_key: str
    code: str
    owner_id: Optional[int] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Optional["Card"]:
        """Build a card from a raw storage record.

        Returns ``None`` when ``name``, ``group``, ``rarity`` or ``condition``
        is missing, or when rarity/condition is outside the known sets.
        """

        name = _text(record.get("name"))
        group = _text(record.get("group"))
        rarity = Rarity.parse(record.get("rarity"))
        condition = Condition.parse(record.get("condition"))
        if not name or not group or rarity is None or condition is None:
            return None
        return cls(
            name=name,
            group=group,
            rarity=rarity,
            condition=condition,
            image_key=_text(record.get("image_key")),
            code=_text(record.get("code")),
            owner_id=_optional_int(record.get("owner_id")),
        )

    def search_fields(self) -> tuple[str, ...]:
        """Lower-cased fields consulted by include/exclude terms."""
        return (
            self.name.lower(),
            self.group.lower(),
            self.rarity.value,
            self.condition.value,
            self.code.lower(),
        )


@dataclass(frozen=True)
class QueryOptions:
    """Parsed arguments of one cabinet invocation."""

    owner_id: int
    include_terms: tuple[str, ...] = ()
    exclude_terms: tuple[str, ...] = ()
    page: int = 1
    duplicates_only: bool = False

    def with_page(self, page: int) -> "QueryOptions":
        return replace(self, page=page)


@dataclass(frozen=True)
class PaginationState:
    current_page: int
    total_pages: int
    page_size: int
    total_items: int

    @property
    def is_first(self) -> bool:
        return self.current_page <= 1

    @property
    def is_last(self) -> bool:
        return self.current_page >= self.total_pages

    def bounds(self) -> tuple[int, int]:
        start = (self.current_page - 1) * self.page_size
        return start, start + self.page_size

    def page_items(self, items):
        """Return the slice of ``items`` shown on the current page."""
        start, end = self.bounds()
        return items[start:end]
