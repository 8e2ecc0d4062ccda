from __future__ import annotations

"""Resolve the Discord bot token for the cabinet bot."""

import os
from pathlib import Path

from . import secrets as secrets_cfg

__all__ = ["get_token", "set_token", "TOKEN_FILE"]

TOKEN_FILE = Path(__file__).with_name("discord_token.txt")
PROJECT_ROOT = secrets_cfg.PROJECT_ROOT

_TOKEN: str | None = None


def get_token() -> str | None:
    """Return the Discord token.

    ``DISCORD_TOKEN`` always wins.  Otherwise the first hit among
    :data:`TOKEN_FILE` and the ``discord.botToken`` entry of each
    ``secrets.json`` candidate is cached for the life of the process.
    """

    global _TOKEN
    env_token = (os.getenv("DISCORD_TOKEN") or "").strip()
    if env_token:
        return env_token
    if _TOKEN is None:
        _TOKEN = _read_token_file() or secrets_cfg.find_secret(
            "discord", "botToken", project_root=PROJECT_ROOT
        )
    return _TOKEN


def set_token(token: str) -> str:
    """Write ``token`` to :data:`TOKEN_FILE`; refuses to overwrite."""

    global _TOKEN
    token = token.strip()
    if not token:
        raise ValueError("Token must not be empty")
    if TOKEN_FILE.exists():
        raise RuntimeError("Token already set")

    TOKEN_FILE.write_text(token, encoding="utf-8")
    try:
        TOKEN_FILE.chmod(0o400)
    except OSError:
        pass  # e.g. filesystems without POSIX permissions
    _TOKEN = token
    return token


def _read_token_file() -> str | None:
    try:
        token = TOKEN_FILE.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    return token or None
