from __future__ import annotations

"""Per-message listener that reacts to cabinet button presses."""

import asyncio
import logging
from typing import Any, Optional, Sequence

import discord
from discord.ext import commands

from . import render
from .models import Card, PaginationState, QueryOptions
from .responder import InteractionResponder
from .session import Action, Close, Render, SendCodes, SessionState, transition

__all__ = ["SessionHandler", "TRANSIENT_ERROR"]

logger = logging.getLogger(__name__)

TRANSIENT_ERROR = "❌ An error occurred. Please try again."


class SessionHandler:
    """Routes component interactions on one cabinet message.

    Only presses on :attr:`message` by :attr:`owner_id` are handled.  The
    result set is fixed for the lifetime of the handler; navigation only
    changes the stored :class:`PaginationState`.
    """

    def __init__(
        self,
        client: commands.Bot,
        message: discord.Message,
        owner_id: int,
        cards: Sequence[Card],
        target: Any,
        options: QueryOptions,
        pagination: PaginationState,
        *,
        view: Optional[discord.ui.View] = None,
        description_limit: int = render.DESCRIPTION_LIMIT,
    ) -> None:
        self.client = client
        self.message = message
        self.owner_id = owner_id
        self.cards = tuple(cards)
        self.target = target
        self.options = options
        self.state = SessionState.active(pagination)
        self.description_limit = description_limit
        self._view = view
        self._listener = self.on_interaction
        self._attached = False
        # Presses on one message run one at a time.
        self._lock = asyncio.Lock()

    @property
    def pagination(self) -> PaginationState:
        return self.state.pagination

    # ------------------------------------------------------------------
    # Registry hooks
    # ------------------------------------------------------------------
    def attach(self) -> None:
        if self._attached or not self.state.is_active:
            return
        self.client.add_listener(self._listener, "on_interaction")
        self._attached = True

    def detach(self) -> None:
        if self._attached:
            self.client.remove_listener(self._listener, "on_interaction")
            self._attached = False
        self.state, _ = transition(self.state, Close())
        self._stop_view()

    async def clear_controls(self) -> None:
        await self.message.edit(view=None)

    # ------------------------------------------------------------------
    # Event handling
    # ------------------------------------------------------------------
    def _accepts(self, interaction: discord.Interaction) -> bool:
        if not self.state.is_active:
            return False
        if interaction.type is not discord.InteractionType.component:
            return False
        message = getattr(interaction, "message", None)
        if message is None or message.id != self.message.id:
            return False
        user = getattr(interaction, "user", None)
        if user is None or user.id != self.owner_id:
            logger.debug(
                "Ignoring cabinet press on message %s by non-owner %s",
                self.message.id,
                getattr(user, "id", None),
            )
            return False
        return True

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        if not self._accepts(interaction):
            return
        action_id = (interaction.data or {}).get("custom_id", "")
        async with self._lock:
            # Each press starts from the state the previous one committed.
            new_state, effects = transition(self.state, Action(action_id))
            if not effects:
                return

            responder = InteractionResponder(interaction)
            try:
                for effect in effects:
                    await self._perform(effect, responder)
            except Exception:
                logger.exception(
                    "Cabinet interaction %r failed on message %s", action_id, self.message.id
                )
                try:
                    await responder.send_private(TRANSIENT_ERROR)
                except discord.HTTPException as exc:
                    logger.warning("Failed to send error notice: %s", exc)
                return
            if self.state.is_active:
                self.state = new_state

    async def _perform(self, effect: object, responder: InteractionResponder) -> None:
        if isinstance(effect, Render):
            view = render.build_controls(effect.pagination)
            embed = render.build_embed(
                self.cards,
                effect.pagination,
                self.target,
                self.options,
                limit=self.description_limit,
            )
            try:
                await responder.edit_parent(embed=embed, view=view)
            except Exception:
                view.stop()
                raise
            self._stop_view()
            self._view = view
            if not self.state.is_active:
                # Expired while the edit was in flight.
                self._stop_view()
        elif isinstance(effect, SendCodes):
            await responder.send_private(render.build_code_catalog(self.cards, effect.pagination))

    def _stop_view(self) -> None:
        if self._view is not None:
            self._view.stop()
            self._view = None
