from __future__ import annotations

"""Very small YAML subset parser for the bot's configuration files.

Only :func:`safe_load` and :class:`YAMLError` are provided.  The supported
subset is a flat mapping whose keys are plain or quoted strings and whose
values are one of:

* scalars (``page_size: 12``); integers and floats are coerced, everything
  else stays a string with surrounding quotes removed,
* inline lists (``legendary: [mythic, "glyph"]``),
* block lists written as ``- item`` lines below an empty ``key:``.

It is **not** a full YAML parser.
"""

from typing import Any, Dict, List, Optional

__all__ = ["YAMLError", "safe_load"]


class YAMLError(Exception):
    pass


def _strip_comment(value: str) -> str:
    """Drop a trailing ``# comment`` that is not inside quotes."""
    quote: Optional[str] = None
    for index, char in enumerate(value):
        if quote:
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif char == "#" and (index == 0 or value[index - 1].isspace()):
            return value[:index].rstrip()
    return value.strip()


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _coerce_scalar(value: str) -> Any:
    stripped = value.strip()
    if stripped and stripped[0] in ("'", '"'):
        return _unquote(stripped)
    try:
        return int(stripped)
    except ValueError:
        pass
    try:
        return float(stripped)
    except ValueError:
        return stripped


def _parse_inline_list(value: str) -> List[str]:
    if not value.endswith("]"):
        raise YAMLError("Unclosed list")
    return [_unquote(v) for v in value[1:-1].split(",") if v.strip()]


def safe_load(text: str) -> Dict[str, Any]:
    """Parse ``text`` into a flat mapping."""

    result: Dict[str, Any] = {}
    block_key: Optional[str] = None

    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        stripped = _strip_comment(raw_line.strip())
        if not stripped:
            continue

        if stripped.startswith("-"):
            if block_key is None:
                raise YAMLError(f"Line {lineno}: list item without a key")
            items = result.setdefault(block_key, [])
            if not isinstance(items, list):
                raise YAMLError(f"Line {lineno}: list item after scalar value")
            items.append(_unquote(stripped[1:]))
            continue

        if ":" not in stripped:
            raise YAMLError(f"Line {lineno}: missing ':'")

        key, value = stripped.split(":", 1)
        key = _unquote(key)
        if not key:
            raise YAMLError(f"Line {lineno}: empty key")

        value = value.strip()
        if not value:
            # Value follows as a block list; an empty block stays an empty list.
            block_key = key
            result[key] = []
            continue

        block_key = None
        if value.startswith("["):
            result[key] = _parse_inline_list(value)
        else:
            result[key] = _coerce_scalar(value)

    return result
