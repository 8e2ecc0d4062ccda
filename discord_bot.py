from __future__ import annotations

import argparse
import logging
import os
from typing import Optional

import discord
from discord.ext import commands

from cabinet.aliases import TermExpander
from cabinet.command import CabinetCommand
from cabinet.registry import SessionRegistry
from cabinet.storage import CardStore
from config.cabinet import CabinetSettings, get_settings
from config.discord_token import get_token

logger = logging.getLogger("discord_bot")

# A simple list the UI scrapes to display available commands
COMMAND_SUMMARIES = [
    ("cabinet [@user] [terms] [-exclude] [dupes] [page:n]", "Browse a card collection"),
]


class CabinetBot(commands.Bot):
    """Prefix-command bot exposing the ``cabinet`` command (alias ``cab``)."""

    def __init__(
        self,
        *,
        settings: Optional[CabinetSettings] = None,
        store: Optional[CardStore] = None,
        registry: Optional[SessionRegistry] = None,
        expander: Optional[TermExpander] = None,
    ) -> None:
        self.settings = settings or get_settings()
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(command_prefix=self.settings.command_prefix, intents=intents)
        self.store = store or CardStore(self.settings.database_path)
        self.sessions = registry or SessionRegistry(ttl=self.settings.collector_timeout)
        self.cabinet = CabinetCommand(
            self,
            self.store,
            self.sessions,
            self.settings,
            expander=expander,
        )
        self.add_command(
            commands.Command(
                _cabinet_command,
                name="cabinet",
                aliases=["cab"],
                help="Displays your card collection",
            )
        )

    async def on_ready(self) -> None:
        logger.info("Logged in as %s (prefix %r)", self.user, self.settings.command_prefix)


async def _cabinet_command(ctx: commands.Context, *args: str) -> None:
    await ctx.bot.cabinet.execute(ctx, args)


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the card cabinet Discord bot")
    parser.add_argument(
        "--log-level",
        default=os.getenv("CABINET_LOG_LEVEL", "INFO"),
        help="Logging level (default: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    token = get_token()
    if not token:
        raise SystemExit("Set DISCORD_TOKEN or store a token via config.discord_token.set_token().")
    bot = CabinetBot()
    logger.info("Starting bot (token length %d)", len(token))
    bot.run(token, log_handler=None)


if __name__ == "__main__":
    main()
