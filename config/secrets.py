from __future__ import annotations

"""Locate and read ``secrets.json`` files holding bot credentials."""

from collections.abc import Iterable, Iterator
import json
import os
from pathlib import Path
import sys
from typing import Any

__all__ = [
    "SECRETS_FILE_NAME",
    "APP_IDENTIFIER",
    "PROJECT_ROOT",
    "iter_candidate_files",
    "read_secrets_file",
    "lookup",
    "find_secret",
]

SECRETS_FILE_NAME = "secrets.json"
# Directory name used below the per-user config locations.
APP_IDENTIFIER = "cabinet-bot"

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def iter_candidate_files(
    platform: str | None = None,
    project_root: Path | None = None,
) -> Iterator[Path]:
    """Yield ``secrets.json`` locations, project root first."""

    yield (project_root or PROJECT_ROOT) / SECRETS_FILE_NAME

    platform = platform or sys.platform
    user_dirs: list[Path] = []
    if platform.startswith("win"):
        appdata = os.environ.get("APPDATA")
        if appdata:
            user_dirs.append(Path(appdata))
    elif platform == "darwin":
        user_dirs.append(Path.home() / "Library" / "Application Support")
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        user_dirs.append(Path(xdg))
    user_dirs.append(Path.home() / ".config")

    yielded: set[Path] = set()
    for base in user_dirs:
        path = base / APP_IDENTIFIER / SECRETS_FILE_NAME
        if path not in yielded:
            yielded.add(path)
            yield path


def read_secrets_file(path: Path) -> dict[str, Any] | None:
    """Return the JSON object stored at ``path`` or ``None``.

    Missing, unreadable and malformed files all count as absent.
    """

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    return data if isinstance(data, dict) else None


def lookup(data: dict[str, Any] | None, *keys: str) -> str | None:
    """Walk nested ``keys`` and return a non-blank string value."""

    node: Any = data
    for key in keys:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    if isinstance(node, str) and node.strip():
        return node.strip()
    return None


def find_secret(
    *keys: str,
    project_root: Path | None = None,
    candidates: Iterable[Path] | None = None,
) -> str | None:
    """Return the first value found under ``keys`` across secrets files."""

    paths = candidates if candidates is not None else iter_candidate_files(project_root=project_root)
    for path in paths:
        value = lookup(read_secrets_file(path), *keys)
        if value is not None:
            return value
    return None
