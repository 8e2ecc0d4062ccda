from __future__ import annotations

"""Load and cache runtime settings for the cabinet command.

Settings are read from ``config/cabinet.yaml`` (when present) and can be
overridden with environment variables::

    CABINET_PAGE_SIZE=12
    CABINET_COLLECTOR_TIMEOUT=300
    CABINET_PREFIX=?
    CABINET_DB_PATH=data/cabinet.sqlite

Values that fail to parse or are out of range fall back to the defaults.
"""

from dataclasses import dataclass, replace
import os
from pathlib import Path
from typing import Any, Dict

import mini_yaml as yaml

__all__ = ["CabinetSettings", "get_settings", "SETTINGS_FILE"]

# Location of the settings file.
SETTINGS_FILE = Path(__file__).with_name("cabinet.yaml")

# Internal cache of the resolved settings.
_SETTINGS: "CabinetSettings | None" = None


@dataclass(frozen=True)
class CabinetSettings:
    page_size: int = 12
    collector_timeout: float = 300.0
    command_prefix: str = "?"
    database_path: str = "data/cabinet.sqlite"
    description_limit: int = 4096


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _positive_float(value: Any, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _non_empty(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def _load_file() -> Dict[str, Any]:
    if not SETTINGS_FILE.exists():
        return {}
    return yaml.safe_load(SETTINGS_FILE.read_text(encoding="utf-8"))


def _resolve(raw: Dict[str, Any]) -> CabinetSettings:
    defaults = CabinetSettings()
    merged = dict(raw)
    env_map = {
        "CABINET_PAGE_SIZE": "page_size",
        "CABINET_COLLECTOR_TIMEOUT": "collector_timeout",
        "CABINET_PREFIX": "command_prefix",
        "CABINET_DB_PATH": "database_path",
    }
    for env_name, key in env_map.items():
        value = os.getenv(env_name)
        if value is not None and value.strip():
            merged[key] = value.strip()

    return replace(
        defaults,
        page_size=_positive_int(merged.get("page_size"), defaults.page_size),
        collector_timeout=_positive_float(
            merged.get("collector_timeout"), defaults.collector_timeout
        ),
        command_prefix=_non_empty(merged.get("command_prefix"), defaults.command_prefix),
        database_path=_non_empty(merged.get("database_path"), defaults.database_path),
        description_limit=_positive_int(
            merged.get("description_limit"), defaults.description_limit
        ),
    )


def get_settings() -> CabinetSettings:
    """Return cached cabinet settings."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = _resolve(_load_file())
    return _SETTINGS
