"""Discord presentation of a cabinet page.

Everything here is a pure function of the result set and pagination; the
session handler decides when to call it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

import discord

from config.embed_constants import BUTTON_EMOJIS, CONDITION_EMOJIS, EMBED_COLORS, RARITY_EMOJIS

from .models import Card, Condition, PaginationState, QueryOptions
from .session import CODE_CATALOG_ACTION

__all__ = [
    "DESCRIPTION_LIMIT",
    "EMPTY_PAGE_TEXT",
    "page_title",
    "build_card_description",
    "build_embed",
    "build_controls",
    "build_code_catalog",
    "build_registration_embed",
]

# Discord rejects embed descriptions longer than this.
DESCRIPTION_LIMIT = 4096

EMPTY_PAGE_TEXT = "No cards found for this page."


def page_title(owner_name: str, pagination: PaginationState, duplicates_only: bool) -> str:
    dupes = "(Duplicates) " if duplicates_only else ""
    return (
        f"{owner_name}'s Cabinet {dupes}"
        f"(Page {pagination.current_page}/{pagination.total_pages})"
    )


def build_card_description(cards: Sequence[Card], limit: int = DESCRIPTION_LIMIT) -> str:
    """List ``cards`` grouped under one heading per rarity."""

    if not cards:
        return EMPTY_PAGE_TEXT

    grouped: Dict[str, List[Card]] = {}
    for card in cards:
        grouped.setdefault(card.rarity.value, []).append(card)

    lines: List[str] = []
    for rarity, members in grouped.items():
        emoji = RARITY_EMOJIS.get(rarity, "")
        plural = "s" if len(members) > 1 else ""
        lines.append(f"### {emoji} {rarity.upper()} ({len(members)} card{plural})")
        for card in members:
            condition = CONDITION_EMOJIS.get(card.condition.value, "")
            lines.append(f"[{condition}] **{card.group}** • {card.name} — `{card.code}`")
        lines.append("")

    description = "\n".join(lines).strip()
    if len(description) > limit:
        description = description[: limit - 6] + "\n..."
    return description


def build_embed(
    cards: Sequence[Card],
    pagination: PaginationState,
    owner: Any,
    options: QueryOptions,
    *,
    limit: int = DESCRIPTION_LIMIT,
) -> discord.Embed:
    """Render the page of ``cards`` selected by ``pagination``."""

    page_cards = pagination.page_items(cards)
    pristine = sum(1 for card in cards if card.condition is Condition.PRISTINE)

    embed = discord.Embed(
        description=build_card_description(page_cards, limit),
        color=EMBED_COLORS["DEFAULT"],
    )
    avatar = getattr(owner, "display_avatar", None)
    embed.set_author(
        name=page_title(getattr(owner, "name", "Unknown"), pagination, options.duplicates_only),
        icon_url=getattr(avatar, "url", None),
    )
    footer = f"Total: {len(cards)} cards"
    if pristine:
        footer += f" • ✨ {pristine} Pristine"
    embed.set_footer(text=footer)
    return embed


def build_controls(pagination: PaginationState) -> discord.ui.View:
    """Navigation buttons plus the code catalog button.

    The buttons carry no callbacks; presses are routed by custom id to the
    message's session handler.  Must be called with a running event loop.
    """

    view = discord.ui.View(timeout=None)
    disabled = {
        "first": pagination.is_first,
        "prev": pagination.is_first,
        "next": pagination.is_last,
        "last": pagination.is_last,
        CODE_CATALOG_ACTION: False,
    }
    for custom_id, is_disabled in disabled.items():
        view.add_item(
            discord.ui.Button(
                style=discord.ButtonStyle.secondary,
                custom_id=custom_id,
                emoji=BUTTON_EMOJIS[custom_id],
                disabled=is_disabled,
            )
        )
    return view


def build_code_catalog(cards: Sequence[Card], pagination: PaginationState) -> str:
    codes = " ".join(card.code for card in pagination.page_items(cards) if card.code)
    return f"**Card codes for Page {pagination.current_page}:**\n```{codes or 'No codes'}```"


def build_registration_embed(prefix: str) -> discord.Embed:
    embed = discord.Embed(
        title="🚫 Uncharted Territory",
        description=f"Oops! It seems you haven't registered yet. Use `{prefix}register` to begin!",
        color=EMBED_COLORS["ERROR"],
    )
    embed.set_footer(text="Your epic saga awaits!")
    return embed
