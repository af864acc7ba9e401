"""Local radio transport adapter.

One fetch is one scan: start a scan filtered to the device, collect
advertisements for a fixed window, stop the scan, and return what was
heard.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from pysensorsync._constants import DEFAULT_SCAN_WINDOW
from pysensorsync._radio import RadioStack
from pysensorsync.exceptions import RadioFailureError, RadioTimeoutError
from pysensorsync.models.advertisement import RadioAdvertisement

_logger = logging.getLogger(__name__)


class _AdvertisementCollector:
    """Merge service data of every matching advertisement, latest value per field."""

    def __init__(self, address: str) -> None:
        self.address = address
        self.service_data: dict[str, Any] = {}
        self.count = 0

    def __call__(self, advertisement: Mapping[str, Any]) -> None:
        ad_address = advertisement.get("address")
        if isinstance(ad_address, str) and ad_address.lower() != self.address:
            return
        service_data = advertisement.get("serviceData")
        if not isinstance(service_data, Mapping):
            return
        self.service_data.update(service_data)
        self.count += 1
        _logger.debug("%s: %s", self.address, dict(service_data))


class LocalRadioAdapter:
    """Fetch status by listening to a device's radio advertisements."""

    def __init__(self, radio: RadioStack) -> None:
        self._radio = radio

    async def fetch(
        self,
        address: str,
        model: str,
        scan_window: float = DEFAULT_SCAN_WINDOW,
    ) -> RadioAdvertisement:
        """Scan for *scan_window* seconds and return the merged advertisement.

        Raises :class:`RadioFailureError` if the scan cannot start or fails
        while listening, and :class:`RadioTimeoutError` if no advertisement
        from *address* arrived. The scan is stopped before returning on
        every path once it has started; a failure to stop it only surfaces
        as :class:`RadioFailureError` when the fetch would otherwise succeed.
        """
        collector = _AdvertisementCollector(address)
        self._radio.on_advertisement = collector

        try:
            await self._radio.start_scan(model=model, address=address)
        except Exception as exc:
            self._radio.on_advertisement = None
            raise RadioFailureError(f"Radio scan for {address} could not start: {exc}") from exc

        stop_error: Exception | None = None
        try:
            await self._radio.wait(scan_window)
        except Exception as exc:
            raise RadioFailureError(f"Radio scan for {address} failed: {exc}") from exc
        finally:
            stop_error = self._stop_scan(address)

        if not collector.count:
            raise RadioTimeoutError(f"No advertisement from {address} within {scan_window}s")
        if stop_error is not None:
            raise RadioFailureError(f"Radio scan for {address} could not be stopped: {stop_error}") from stop_error

        try:
            return RadioAdvertisement.model_validate(
                {"address": address, "serviceData": collector.service_data, "count": collector.count}
            )
        except ValidationError as exc:
            raise RadioFailureError(f"Unusable advertisement from {address}: {exc.error_count()} error(s)") from exc

    def _stop_scan(self, address: str) -> Exception | None:
        """Stop the scan, returning the error instead of raising it."""
        try:
            self._radio.stop_scan()
        except Exception as exc:
            _logger.warning("Radio scan for %s could not be stopped: %s", address, exc)
            return exc
        finally:
            self._radio.on_advertisement = None
        return None
