from __future__ import annotations

"""Small adapter over :class:`discord.Interaction` responses.

A component interaction can be answered once through
``interaction.response``; anything after that has to go through the
followup webhook or ``edit_original_response``.  :class:`InteractionResponder`
picks the right channel so callers do not need to track it.
"""

import discord

__all__ = ["InteractionResponder"]


class InteractionResponder:
    def __init__(self, interaction: discord.Interaction) -> None:
        if getattr(interaction, "response", None) is None:
            raise TypeError("Unsupported interaction source")
        self.interaction = interaction

    def response_done(self) -> bool:
        try:
            return bool(self.interaction.response.is_done())
        except Exception:
            return False

    async def edit_parent(self, **kwargs) -> None:
        """Edit the message the pressed component belongs to."""
        if self.response_done():
            await self.interaction.edit_original_response(**kwargs)
            return
        await self.interaction.response.edit_message(**kwargs)

    async def send_private(self, content: str) -> None:
        """Send an ephemeral message visible to the requester only."""
        if self.response_done():
            await self.interaction.followup.send(content, ephemeral=True)
            return
        try:
            await self.interaction.response.send_message(content, ephemeral=True)
        except discord.InteractionResponded:
            await self.interaction.followup.send(content, ephemeral=True)
