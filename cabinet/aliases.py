from __future__ import annotations

"""Search term expansion driven by a static alias table."""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Sequence

import mini_yaml as yaml

__all__ = ["TermExpander", "load_aliases", "ALIASES_FILE"]

logger = logging.getLogger(__name__)

# Default alias table shipped with the bot.
ALIASES_FILE = Path(__file__).resolve().parents[1] / "config" / "search_aliases.yaml"


def load_aliases(path: Path | str = ALIASES_FILE) -> Dict[str, List[str]]:
    """Read ``term: [synonym, ...]`` entries from ``path``.

    Missing files yield an empty table.  Scalar values are treated as a
    single synonym.  Keys and synonyms are lower-cased.
    """

    path = Path(path)
    if not path.exists():
        logger.debug("Alias file %s not found; search terms will not expand", path)
        return {}
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    table: Dict[str, List[str]] = {}
    for key, value in raw.items():
        synonyms = value if isinstance(value, list) else [value]
        cleaned = [str(s).strip().lower() for s in synonyms if str(s).strip()]
        if cleaned:
            table[str(key).strip().lower()] = cleaned
    return table


class TermExpander:
    """Expands user search terms into the terms the query engine matches.

    A term with configured synonyms is replaced by those synonyms; any other
    term passes through unchanged.
    """

    def __init__(self, aliases: Mapping[str, Sequence[str]] | None = None) -> None:
        self._aliases: Dict[str, tuple[str, ...]] = {
            key.lower(): tuple(values) for key, values in (aliases or {}).items()
        }

    @classmethod
    def from_file(cls, path: Path | str = ALIASES_FILE) -> "TermExpander":
        return cls(load_aliases(path))

    def expand(self, term: str) -> List[str]:
        synonyms = self._aliases.get(term.lower())
        if not synonyms:
            return [term]
        return list(synonyms)

    def expand_all(self, terms: Iterable[str]) -> List[str]:
        expanded: List[str] = []
        for term in terms:
            expanded.extend(self.expand(term))
        return expanded
