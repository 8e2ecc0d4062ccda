from __future__ import annotations

"""The ``cabinet`` command: query a user's cards and open a browsing session."""

import asyncio
import logging
from typing import Any, Optional, Sequence

import discord
from discord.ext import commands

from config.cabinet import CabinetSettings

from . import render
from .aliases import TermExpander
from .arguments import parse_arguments
from .handler import SessionHandler
from .pagination import paginate
from .query import run_query, validate
from .registry import SessionRegistry
from .storage import CardStore

__all__ = [
    "CabinetCommand",
    "USER_NOT_FOUND",
    "EMPTY_CABINET",
    "GENERIC_FAILURE",
]

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "❌ User not found."
EMPTY_CABINET = "This user doesn't have any cards in their cabinet."
GENERIC_FAILURE = "❌ An error occurred while displaying the cabinet."


class CabinetCommand:
    """Wires the query engine, renderer and session registry to a bot."""

    def __init__(
        self,
        client: commands.Bot,
        store: CardStore,
        registry: SessionRegistry,
        settings: CabinetSettings,
        *,
        expander: Optional[TermExpander] = None,
    ) -> None:
        self.client = client
        self.store = store
        self.registry = registry
        self.settings = settings
        self.expander = expander or TermExpander.from_file()

    async def resolve_user(self, user_id: int) -> Optional[Any]:
        user = self.client.get_user(user_id)
        if user is not None:
            return user
        try:
            return await self.client.fetch_user(user_id)
        except (discord.NotFound, discord.HTTPException):
            return None

    async def execute(self, ctx: commands.Context, args: Sequence[str]) -> None:
        author = ctx.author
        try:
            registered = await asyncio.to_thread(self.store.is_registered, author.id)
            if not registered:
                await ctx.send(
                    embed=render.build_registration_embed(self.settings.command_prefix),
                    reference=ctx.message,
                )
                return
            await self._show_cabinet(ctx, args)
        except Exception:
            logger.exception("Cabinet command failed for user %s", author.id)
            try:
                await ctx.send(GENERIC_FAILURE)
            except discord.HTTPException as exc:
                logger.warning("Failed to send cabinet error notice: %s", exc)

    async def _show_cabinet(self, ctx: commands.Context, args: Sequence[str]) -> None:
        author = ctx.author
        options = parse_arguments(args, author.id)
        if options.owner_id == author.id:
            target = author
        else:
            target = await self.resolve_user(options.owner_id)
        if target is None:
            await ctx.send(USER_NOT_FOUND)
            return

        records = await asyncio.to_thread(self.store.fetch_cards, target.id)
        cards = validate(records)
        if not cards:
            await ctx.send(EMPTY_CABINET)
            return

        result = run_query(cards, options, self.expander)
        pagination = paginate(len(result), self.settings.page_size, options.page)
        logger.debug(
            "Cabinet for %s: %d of %d cards, page %d/%d",
            target.id,
            len(result),
            len(cards),
            pagination.current_page,
            pagination.total_pages,
        )

        embed = render.build_embed(
            result, pagination, target, options, limit=self.settings.description_limit
        )
        view = render.build_controls(pagination)
        try:
            message = await ctx.send(embed=embed, view=view, reference=ctx.message)
        except Exception:
            view.stop()
            raise

        handler = SessionHandler(
            self.client,
            message,
            author.id,
            result,
            target,
            options,
            pagination,
            view=view,
            description_limit=self.settings.description_limit,
        )
        self.registry.register(message.id, handler, self.settings.collector_timeout)
