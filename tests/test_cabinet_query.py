from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from cabinet.aliases import TermExpander
from cabinet.models import Card, Condition, QueryOptions, Rarity
from cabinet.query import (
    filter_duplicates_only,
    filter_exclude,
    filter_include,
    run_query,
    sort_cards,
    validate,
)


def record(name, group, rarity, condition, code, image_key="img", owner_id=1):
    return {
        "name": name,
        "group": group,
        "rarity": rarity,
        "condition": condition,
        "code": code,
        "image_key": image_key,
        "owner_id": owner_id,
    }


@pytest.fixture()
def collection():
    return [
        record("Xia", "Aurora", "standard", "worn", "AX1", "i1"),
        record("Yun", "Borealis", "mythic", "good", "BY1", "i2"),
        record("Zed", "aurora", "glyph", "pristine", "AZ1", "i3"),
        record("Abe", "Borealis", "mythic", "pristine", "BA1", "i2"),
        record("Kai", "Comet", "unique", "damaged", "CK1", "i4"),
        record("Kai", "Comet", "unique", "mint", "CK2", "i4"),
    ]


def codes(cards):
    return [card.code for card in cards]


def test_validate_drops_incomplete_records():
    cards = validate(
        [
            record("A", "G", "mythic", "mint", "A1"),
            record("", "G", "mythic", "mint", "A2"),
            record("B", None, "mythic", "mint", "A3"),
            {"name": "C", "group": "G", "rarity": "mythic", "code": "A4"},
            "not a record",
        ]
    )
    assert codes(cards) == ["A1"]


def test_validate_rejects_unknown_rarity_and_condition():
    cards = validate(
        [
            record("A", "G", "legendary", "mint", "A1"),
            record("B", "G", "mythic", "shiny", "B1"),
            record("C", "G", "MYTHIC", "Mint", "C1"),
        ]
    )
    assert codes(cards) == ["C1"]
    assert cards[0].rarity is Rarity.MYTHIC
    assert cards[0].condition is Condition.MINT


def test_validate_keeps_missing_code_as_empty_string():
    cards = validate([{"name": "A", "group": "G", "rarity": "glyph", "condition": "good"}])
    assert cards[0].code == ""
    assert cards[0].image_key == ""


def test_include_requires_every_term(collection):
    cards = validate(collection)
    assert codes(filter_include(cards, ["borealis", "pristine"])) == ["BA1"]
    assert codes(filter_include(cards, ["kai"])) == ["CK1", "CK2"]
    assert filter_include(cards, []) == cards


def test_include_matches_any_field_case_insensitively(collection):
    cards = validate(collection)
    assert codes(filter_include(cards, ["AURORA"])) == ["AX1", "AZ1"]
    assert codes(filter_include(cards, ["ck2"])) == ["CK2"]
    assert codes(filter_include(cards, ["glyph"])) == ["AZ1"]


def test_include_is_idempotent(collection):
    cards = validate(collection)
    once = filter_include(cards, ["o"])
    assert filter_include(once, ["o"]) == once


def test_exclude_drops_on_any_match(collection):
    cards = validate(collection)
    assert codes(filter_exclude(cards, ["comet", "worn"])) == ["BY1", "AZ1", "BA1"]
    assert filter_exclude(cards, []) == cards


def test_duplicates_only_is_relative_to_filtered_set(collection):
    cards = validate(collection)
    assert codes(filter_duplicates_only(cards)) == ["BY1", "BA1", "CK1", "CK2"]
    # Once the filter leaves a single i4 card it is no longer a duplicate.
    assert filter_duplicates_only(filter_exclude(cards, ["damaged"])) == [
        card for card in cards if card.image_key == "i2"
    ]


def test_duplicates_ignore_missing_image_keys():
    cards = validate([record("A", "G", "mythic", "mint", "A1", ""), record("B", "G", "mythic", "mint", "B1", "")])
    assert filter_duplicates_only(cards) == []


def test_sort_orders_by_rarity_condition_group_name(collection):
    ordered = sort_cards(validate(collection))
    assert codes(ordered) == ["BA1", "BY1", "AZ1", "CK2", "CK1", "AX1"]


def test_sort_breaks_ties_on_group_then_name_case_insensitively():
    cards = validate(
        [
            record("beta", "Zeta", "unique", "mint", "C3"),
            record("Alpha", "zeta", "unique", "mint", "C2"),
            record("Omega", "alpha", "unique", "mint", "C1"),
        ]
    )
    assert codes(sort_cards(cards)) == ["C1", "C2", "C3"]


def test_sort_is_a_fixed_point(collection):
    once = sort_cards(validate(collection))
    assert sort_cards(once) == once


def test_scenario_mythic_before_standard():
    records = [
        record("X", "A", "mythic", "pristine", "X1", "i1"),
        record("Y", "B", "standard", "good", "Y1", "i1"),
    ]
    result = run_query(records, QueryOptions(owner_id=1))
    assert codes(result) == ["X1", "Y1"]


def test_scenario_exclude_wins_over_include():
    records = [
        record("abc xyz", "G", "mythic", "mint", "M1"),
        record("abc", "G", "mythic", "mint", "M2"),
    ]
    options = QueryOptions(owner_id=1, include_terms=("abc",), exclude_terms=("xyz",))
    assert codes(run_query(records, options)) == ["M2"]


def test_scenario_duplicates_keep_sorted_relative_order():
    records = [
        record("D", "G", "standard", "mint", "K3", "k"),
        record("U", "G", "mythic", "mint", "U1", "unique-key"),
        record("B", "G", "mythic", "mint", "K1", "k"),
        record("C", "G", "glyph", "worn", "K2", "k"),
    ]
    result = run_query(records, QueryOptions(owner_id=1, duplicates_only=True))
    assert codes(result) == ["K1", "K2", "K3"]


def test_run_query_expands_aliases():
    records = [
        record("A", "G", "mythic", "mint", "A1"),
        record("B", "G", "standard", "damaged", "B1"),
    ]
    expander = TermExpander({"legendary": ["mythic"], "broken": ["damaged"]})
    assert codes(run_query(records, QueryOptions(owner_id=1, include_terms=("legendary",)), expander)) == ["A1"]
    assert codes(run_query(records, QueryOptions(owner_id=1, exclude_terms=("broken",)), expander)) == ["A1"]


def test_run_query_returns_immutable_result_and_leaves_input_alone(collection):
    snapshot = [dict(r) for r in collection]
    result = run_query(collection, QueryOptions(owner_id=1))
    assert isinstance(result, tuple)
    assert all(isinstance(card, Card) for card in result)
    assert collection == snapshot


def test_run_query_on_empty_input():
    assert run_query([], QueryOptions(owner_id=1, include_terms=("x",))) == ()
