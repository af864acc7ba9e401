"""Local radio stack interface.

The radio hardware driver is owned by the host. pysensorsync only needs
the narrow scan contract below; any object with these members can be
passed to :class:`pysensorsync.ingestion.radio.LocalRadioAdapter`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol

AdvertisementCallback = Callable[[Mapping[str, Any]], None]


class RadioStack(Protocol):
    """Advertisement scanner.

    ``on_advertisement`` is invoked once per received payload shaped like
    ``{"address": "1a:23:...", "serviceData": {...}}``.
    """

    on_advertisement: AdvertisementCallback | None

    async def start_scan(self, *, model: str, address: str) -> None:
        ...

    async def wait(self, seconds: float) -> None:
        ...

    def stop_scan(self) -> None:
        ...
