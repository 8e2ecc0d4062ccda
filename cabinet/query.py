"""Filtering and ordering of a user's cards.

The pipeline is ``validate -> include -> exclude -> duplicates -> sort``.
None of the steps raise on odd input; they shrink the result instead.
Records whose rarity or condition is not one of the known values are
dropped by :func:`validate` so every card that reaches :func:`sort_cards`
has a defined rank.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from .aliases import TermExpander
from .models import Card, QueryOptions

__all__ = [
    "validate",
    "card_matches_term",
    "filter_include",
    "filter_exclude",
    "filter_duplicates_only",
    "sort_cards",
    "run_query",
]


def validate(records: Iterable[Mapping[str, Any] | Card]) -> List[Card]:
    """Return the well-formed cards among ``records`` in their original order."""
    cards: List[Card] = []
    for record in records:
        if isinstance(record, Card):
            cards.append(record)
            continue
        if not isinstance(record, Mapping):
            continue
        card = Card.from_record(record)
        if card is not None:
            cards.append(card)
    return cards


def card_matches_term(card: Card, term: str) -> bool:
    needle = term.lower()
    return any(needle in field for field in card.search_fields())


def filter_include(cards: Sequence[Card], terms: Sequence[str]) -> List[Card]:
    """Keep cards matched by every term."""
    if not terms:
        return list(cards)
    return [card for card in cards if all(card_matches_term(card, t) for t in terms)]


def filter_exclude(cards: Sequence[Card], terms: Sequence[str]) -> List[Card]:
    """Drop cards matched by any term."""
    if not terms:
        return list(cards)
    return [card for card in cards if not any(card_matches_term(card, t) for t in terms)]


def filter_duplicates_only(cards: Sequence[Card]) -> List[Card]:
    """Keep cards whose image key appears at least twice in ``cards``.

    Cards without an image key never count as duplicates.
    """
    counts = Counter(card.image_key for card in cards if card.image_key)
    return [card for card in cards if card.image_key and counts[card.image_key] > 1]


def _sort_key(card: Card) -> tuple[int, int, str, str]:
    return (
        -card.rarity.rank,
        card.condition.rank,
        card.group.casefold(),
        card.name.casefold(),
    )


def sort_cards(cards: Iterable[Card]) -> List[Card]:
    return sorted(cards, key=_sort_key)


def run_query(
    records: Iterable[Mapping[str, Any] | Card],
    options: QueryOptions,
    expander: Optional[TermExpander] = None,
) -> tuple[Card, ...]:
    """Run the whole pipeline and return the immutable result set."""

    expander = expander or TermExpander()
    cards = validate(records)
    cards = filter_include(cards, expander.expand_all(options.include_terms))
    cards = filter_exclude(cards, expander.expand_all(options.exclude_terms))
    if options.duplicates_only:
        cards = filter_duplicates_only(cards)
    return tuple(sort_cards(cards))
