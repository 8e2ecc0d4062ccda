import os
import sys
from unittest.mock import MagicMock

import pytest

discord = pytest.importorskip("discord")

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from cabinet import render
from cabinet.models import Card, Condition, QueryOptions, Rarity
from cabinet.pagination import paginate


def _card(code, rarity=Rarity.MYTHIC, condition=Condition.MINT, group="Aurora", name="Nova"):
    return Card(name=name, group=group, rarity=rarity, condition=condition, image_key=code, code=code)


def _owner(name="Mira"):
    owner = MagicMock()
    owner.name = name
    owner.display_avatar.url = "https://cdn.example/mira.png"
    return owner


def test_page_title_marks_duplicates():
    pagination = paginate(30, 12, 2)
    assert render.page_title("Mira", pagination, False) == "Mira's Cabinet (Page 2/3)"
    assert render.page_title("Mira", pagination, True) == "Mira's Cabinet (Duplicates) (Page 2/3)"


def test_description_groups_by_rarity():
    cards = [
        _card("M1"),
        _card("M2", condition=Condition.PRISTINE),
        _card("S1", rarity=Rarity.STANDARD, condition=Condition.DAMAGED, group="Comet", name="Kai"),
    ]
    text = render.build_card_description(cards)
    lines = text.splitlines()
    assert lines[0].endswith("MYTHIC (2 cards)")
    assert lines[1] == "[🟢] **Aurora** • Nova — `M1`"
    assert lines[2].startswith("[✨]")
    assert lines[3] == ""
    assert lines[4].endswith("STANDARD (1 card)")
    assert lines[5] == "[🔴] **Comet** • Kai — `S1`"


def test_empty_page_description():
    assert render.build_card_description([]) == render.EMPTY_PAGE_TEXT


def test_description_is_truncated():
    cards = [_card(f"C{i:03d}", name="N" * 80) for i in range(100)]
    text = render.build_card_description(cards, limit=500)
    assert len(text) <= 500
    assert text.endswith("\n...")


def test_embed_footer_counts_pristine_cards():
    cards = [_card("A", condition=Condition.PRISTINE), _card("B"), _card("C", condition=Condition.PRISTINE)]
    embed = render.build_embed(cards, paginate(len(cards), 12, 1), _owner(), QueryOptions(owner_id=1))
    assert embed.author.name == "Mira's Cabinet (Page 1/1)"
    assert embed.author.icon_url == "https://cdn.example/mira.png"
    assert embed.footer.text == "Total: 3 cards • ✨ 2 Pristine"


def test_embed_footer_without_pristine():
    embed = render.build_embed([_card("B")], paginate(1, 12, 1), _owner(), QueryOptions(owner_id=1))
    assert embed.footer.text == "Total: 1 cards"


def test_embed_for_empty_result():
    embed = render.build_embed((), paginate(0, 12, 1), _owner(), QueryOptions(owner_id=1, duplicates_only=True))
    assert embed.description == render.EMPTY_PAGE_TEXT
    assert embed.author.name == "Mira's Cabinet (Duplicates) (Page 1/1)"


def test_code_catalog_lists_current_page():
    cards = [_card(f"C{i}") for i in range(14)]
    text = render.build_code_catalog(cards, paginate(14, 12, 2))
    assert text == "**Card codes for Page 2:**\n```C12 C13```"
    assert render.build_code_catalog([], paginate(0, 12, 1)).endswith("```No codes```")


def test_registration_embed_mentions_prefix():
    embed = render.build_registration_embed("?")
    assert embed.title == "🚫 Uncharted Territory"
    assert "`?register`" in embed.description
    assert embed.footer.text == "Your epic saga awaits!"


@pytest.mark.asyncio
async def test_controls_disable_edges():
    view = render.build_controls(paginate(30, 12, 1))
    states = {item.custom_id: item.disabled for item in view.children}
    assert states == {
        "first": True,
        "prev": True,
        "next": False,
        "last": False,
        "code_catalog": False,
    }

    last = render.build_controls(paginate(30, 12, 3))
    states = {item.custom_id: item.disabled for item in last.children}
    assert states["next"] and states["last"]
    assert not states["first"] and not states["code_catalog"]
