"""Redaction for debug logs.

Two things must not reach the logs verbatim: the API token sent in the
``authorization`` request header, and the ``hubDeviceId`` the status
document carries, which identifies the account's hub rather than the
sensor being polled.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

REDACTED = "<redacted>"

# Compared case-insensitively against mapping keys.
_SENSITIVE_KEYS: frozenset[str] = frozenset({"authorization", "token", "hubdeviceid"})

_MAX_DEPTH = 10


def redact_for_log(value: Any, *, max_string: int = 256, _depth: int = 0) -> Any:
    """Return a copy of a decoded JSON value (or header mapping) safe to log.

    Values under sensitive keys are replaced with ``<redacted>`` at any
    nesting level and long strings are truncated.
    """
    if _depth > _MAX_DEPTH:
        return "<max-depth>"
    if isinstance(value, Mapping):
        return {
            str(key): REDACTED
            if str(key).lower() in _SENSITIVE_KEYS
            else redact_for_log(item, max_string=max_string, _depth=_depth + 1)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact_for_log(item, max_string=max_string, _depth=_depth + 1) for item in value]
    if isinstance(value, str) and len(value) > max_string:
        return f"{value[:max_string]}...<truncated>"
    return value
