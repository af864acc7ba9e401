"""Publish sinks.

The reconciliation engine pushes canonical fields into a
:class:`PublishSink`. Mapping a field onto a host presentation framework
is the sink's job.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

_logger = logging.getLogger(__name__)


class PublishSink(Protocol):
    """Receiver of canonical field updates.

    Implementations must accept an error in place of a normal value and
    must not raise.
    """

    def publish(self, field: str, value: Any) -> None:
        ...

    def publish_error(self, field: str, error: BaseException) -> None:
        ...


class CharacteristicStore:
    """In-memory sink holding the last published value or error per field.

    ``on_change`` is called with ``(field, value_or_error)`` only when a
    field's published value actually changes, so repeated identical
    refreshes do not produce outward events.
    """

    def __init__(self, on_change: Callable[[str, Any], None] | None = None) -> None:
        self.values: dict[str, Any] = {}
        self.errors: dict[str, BaseException] = {}
        self._on_change = on_change

    def publish(self, field: str, value: Any) -> None:
        changed = field in self.errors or self.values.get(field, _MISSING) != value
        self.errors.pop(field, None)
        self.values[field] = value
        if changed:
            self._notify(field, value)

    def publish_error(self, field: str, error: BaseException) -> None:
        changed = self.errors.get(field) is not error
        self.values.pop(field, None)
        self.errors[field] = error
        if changed:
            self._notify(field, error)

    def _notify(self, field: str, value: Any) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(field, value)
        except Exception:
            _logger.debug("on_change callback failed for %s", field, exc_info=True)


_MISSING = object()
