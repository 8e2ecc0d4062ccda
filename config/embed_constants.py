"""Colours and emojis used when rendering cabinet embeds."""

__all__ = [
    "EMBED_COLORS",
    "RARITY_EMOJIS",
    "CONDITION_EMOJIS",
    "BUTTON_EMOJIS",
]

EMBED_COLORS = {
    "DEFAULT": 0x8E7CC3,
    "ERROR": 0xE74C3C,
}

# Keyed by the lower-case rarity / condition names.
RARITY_EMOJIS = {
    "mythic": "🌌",
    "glyph": "🔮",
    "unique": "💠",
    "standard": "⚪",
}

CONDITION_EMOJIS = {
    "pristine": "✨",
    "mint": "🟢",
    "good": "🟡",
    "worn": "🟠",
    "damaged": "🔴",
}

# Keyed by the button custom ids.
BUTTON_EMOJIS = {
    "first": "⏮️",
    "prev": "◀️",
    "next": "▶️",
    "last": "⏭️",
    "code_catalog": "📋",
}
