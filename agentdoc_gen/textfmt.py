from __future__ import annotations

import json
import math
import re
from typing import Any


def literal(text: str) -> str:
    """Render field text into Markdown/HTML output.

    Every interpolation site goes through here. Text is passed through
    unescaped; an escaping policy, if one is ever introduced, belongs here.
    """
    return text


def format_number(value: int | float) -> str:
    """Format a JSON number the way a browser template would print it."""
    if isinstance(value, float) and math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def display_text(value: Any) -> str:
    """Best-effort display string for an arbitrary parsed JSON value."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if value is None:
        return "null"
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def humanize_key(key: str) -> str:
    """`maxCallDuration` -> `Max Call Duration` (snake_case keys keep underscores)."""
    spaced = re.sub(r"([A-Z])", r" \1", key)
    return spaced[:1].upper() + spaced[1:]


def pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def truncate(text: str, limit: int, suffix: str = "") -> str:
    if len(text) > limit:
        return text[:limit] + suffix
    return text
