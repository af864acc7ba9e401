"""Normalization helpers.

Centralizes defensive coercion of raw payload values.
"""

from __future__ import annotations

import math
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or value == "--" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text else None


def clamp_percent(value: int | None) -> int | None:
    """Clamp a percentage into 0-100, passing ``None`` through."""
    if value is None:
        return None
    return max(0, min(100, value))

