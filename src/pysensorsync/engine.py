"""Per-device reconciliation engine.

Refresh cycle::

    IDLE -> REFRESHING -> PUBLISHED
                       -> FALLBACK_REFRESHING -> PUBLISHED | ERROR_PUBLISHED
                       -> ERROR_PUBLISHED
    ... -> IDLE

Only a radio failure triggers the same-cycle fallback to the cloud API.
Transport errors, and payloads the parsers cannot turn into a snapshot,
end the cycle in ERROR_PUBLISHED and are never raised to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pysensorsync._constants import DEFAULT_SCAN_WINDOW
from pysensorsync.config import DeviceConfig
from pysensorsync.exceptions import (
    NetworkFailureError,
    RadioFailureError,
    SensorConfigError,
    SensorTransportError,
)
from pysensorsync.ingestion.parsers import ParseIssue, ParseResult, RadioStatusParser, RemoteStatusParser
from pysensorsync.ingestion.radio import LocalRadioAdapter
from pysensorsync.ingestion.remote import RemoteApiAdapter
from pysensorsync.models.device import TransportMode, profile_for
from pysensorsync.models.snapshot import SensorSnapshot
from pysensorsync.sink import PublishSink

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RefreshPhase(StrEnum):
    IDLE = "idle"
    REFRESHING = "refreshing"
    FALLBACK_REFRESHING = "fallback_refreshing"
    PUBLISHED = "published"
    ERROR_PUBLISHED = "error_published"


class ReconciliationEngine:
    """Refresh, parse and publish the state of one device.

    The engine owns the device's refresh flag and last snapshot. At most
    one refresh runs at a time; :meth:`refresh` called while another is in
    flight returns ``None`` without touching any transport.
    """

    def __init__(
        self,
        device: DeviceConfig,
        sink: PublishSink,
        *,
        remote: RemoteApiAdapter,
        radio: LocalRadioAdapter | None = None,
        scan_window: float = DEFAULT_SCAN_WINDOW,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if device.transport is TransportMode.LOCAL_RADIO and radio is None:
            raise SensorConfigError(f"{device.name} uses the local radio but no radio stack was provided")
        self._device = device
        self._profile = profile_for(device.family)
        self._sink = sink
        self._remote = remote
        self._radio = radio
        self._scan_window = scan_window
        self._remote_parser = RemoteStatusParser(device, clock=clock)
        self._radio_parser = RadioStatusParser(device, clock=clock)

        self._refresh_in_progress = False
        self._phase = RefreshPhase.IDLE
        self._snapshot: SensorSnapshot | None = None
        self._last_error: SensorTransportError | None = None
        self._last_issues: tuple[ParseIssue, ...] = ()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def device(self) -> DeviceConfig:
        return self._device

    @property
    def refresh_in_progress(self) -> bool:
        return self._refresh_in_progress

    @property
    def phase(self) -> RefreshPhase:
        return self._phase

    @property
    def snapshot(self) -> SensorSnapshot | None:
        """Last successfully parsed snapshot, kept across failed cycles."""
        return self._snapshot

    @property
    def last_error(self) -> SensorTransportError | None:
        """Error of the last cycle, ``None`` if it published a snapshot."""
        return self._last_error

    @property
    def last_issues(self) -> tuple[ParseIssue, ...]:
        return self._last_issues

    @property
    def exposed_fields(self) -> tuple[str, ...]:
        return self._profile.fields

    # ------------------------------------------------------------------
    # Refresh cycle
    # ------------------------------------------------------------------

    async def refresh(self) -> RefreshPhase | None:
        """Run one refresh cycle.

        Returns the terminal phase (``PUBLISHED`` or ``ERROR_PUBLISHED``),
        or ``None`` if a cycle was already in flight.
        """
        if self._refresh_in_progress:
            _logger.debug("%s refresh already in progress, skipping", self._device.name)
            return None

        self._refresh_in_progress = True
        self._phase = RefreshPhase.REFRESHING
        try:
            if self._device.transport is TransportMode.LOCAL_RADIO:
                return await self._refresh_radio()
            return await self._refresh_remote()
        finally:
            self._refresh_in_progress = False
            self._phase = RefreshPhase.IDLE

    async def _refresh_radio(self) -> RefreshPhase:
        assert self._radio is not None  # noqa: S101
        assert self._device.radio_address is not None  # noqa: S101
        _logger.debug("%s refreshing via local radio", self._device.name)
        try:
            advertisement = await self._radio.fetch(
                self._device.radio_address,
                self._profile.radio_model,
                self._scan_window,
            )
            result = self._parse(self._radio_parser.parse, advertisement, RadioFailureError)
        except SensorTransportError as exc:
            _logger.error("%s radio connection failed: %s", self._device.name, exc)
            _logger.warning("%s using cloud API connection", self._device.name)
            self._phase = RefreshPhase.FALLBACK_REFRESHING
            return await self._refresh_remote()
        return self._publish(result)

    async def _refresh_remote(self) -> RefreshPhase:
        _logger.debug("%s refreshing via cloud API", self._device.name)
        try:
            status = await self._remote.fetch(self._device.device_id)
            result = self._parse(self._remote_parser.parse, status, NetworkFailureError)
        except SensorTransportError as exc:
            _logger.error("%s failed to refresh status: %s", self._device.name, exc)
            return self._publish_error(exc)
        return self._publish(result)

    def _parse(
        self,
        parse: Callable[[Any], ParseResult],
        payload: Any,
        error_type: type[SensorTransportError],
    ) -> ParseResult:
        try:
            return parse(payload)
        except (ValueError, TypeError) as exc:
            _logger.debug("%s payload could not be parsed", self._device.name, exc_info=True)
            raise error_type(f"{self._device.name} payload could not be parsed: {exc}") from exc

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------

    def _publish(self, result: ParseResult) -> RefreshPhase:
        self._snapshot = result.snapshot
        self._last_issues = result.issues
        self._last_error = None
        self._phase = RefreshPhase.PUBLISHED

        values = result.snapshot.field_values()
        hidden = self._device.hidden_fields
        for field in self._profile.fields:
            value = values.get(field)
            if field in hidden:
                _logger.debug("%s %s is hidden, not published", self._device.name, field)
                continue
            if value is None:
                _logger.debug("%s %s is unset, not published", self._device.name, field)
                continue
            self._call_sink(self._sink.publish, field, value)
            _logger.debug("%s published %s: %s", self._device.name, field, value)
        return RefreshPhase.PUBLISHED

    def _publish_error(self, error: SensorTransportError) -> RefreshPhase:
        self._last_error = error
        self._last_issues = ()
        self._phase = RefreshPhase.ERROR_PUBLISHED
        # Hidden fields included.
        for field in self._profile.fields:
            self._call_sink(self._sink.publish_error, field, error)
        return RefreshPhase.ERROR_PUBLISHED

    def _call_sink(self, method: Callable[[str, Any], None], field: str, value: Any) -> None:
        try:
            method(field, value)
        except Exception:
            _logger.exception("%s sink failed for %s", self._device.name, field)
