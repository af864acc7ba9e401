"""Status parsers.

Turn a raw transport payload into a :class:`SensorSnapshot`. There is one
parser per transport; each dispatches on the device family. Parsers never
raise on unexpected values: the field is left unset and a
:class:`ParseIssue` is recorded instead.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from pysensorsync._constants import (
    LIGHT_LEVEL_BRIGHT,
    LIGHT_LEVEL_DARK,
    REMOTE_BATTERY_WITH_BODY,
    REMOTE_BATTERY_WITHOUT_BODY,
    REMOTE_LOW_BATTERY_THRESHOLD,
)
from pysensorsync.config import DeviceConfig
from pysensorsync.exceptions import ErrorKind
from pysensorsync.ingestion.normalize import clamp_percent, safe_float
from pysensorsync.models.advertisement import RadioAdvertisement
from pysensorsync.models.device import DeviceFamily, TransportMode, profile_for
from pysensorsync.models.snapshot import BatteryStatus, ContactState, SensorSnapshot, SnapshotField
from pysensorsync.models.status import RemoteStatus, RemoteStatusBody
from pysensorsync.units import to_celsius, to_fahrenheit

_logger = logging.getLogger(__name__)

UNIT_CELSIUS = 0
UNIT_FAHRENHEIT = 1


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclasses.dataclass(frozen=True)
class ParseIssue:
    """A raw value outside the recognized enumeration."""

    field: SnapshotField
    raw_value: Any
    transport: TransportMode
    kind: ErrorKind = ErrorKind.PARSE_AMBIGUOUS


@dataclasses.dataclass(frozen=True)
class ParseResult:
    snapshot: SensorSnapshot
    issues: tuple[ParseIssue, ...] = ()


# ------------------------------------------------------------------
# Field helpers
# ------------------------------------------------------------------


def contact_from_remote(open_state: Any) -> ContactState | None:
    if open_state == "open":
        return ContactState.NOT_DETECTED
    if open_state == "close":
        return ContactState.DETECTED
    return None


def contact_from_radio(door_state: Any) -> ContactState | None:
    if isinstance(door_state, bool):
        return None
    if door_state == "open" or door_state == 1:
        return ContactState.NOT_DETECTED
    if door_state == "close" or door_state == 0:
        return ContactState.DETECTED
    return None


def light_from_radio(light_level: Any) -> float:
    """Quantize the radio dark/light bit to one of two lux bands."""
    if isinstance(light_level, bool):
        return LIGHT_LEVEL_BRIGHT
    if light_level == "dark" or light_level == 0:
        return LIGHT_LEVEL_DARK
    return LIGHT_LEVEL_BRIGHT


def light_from_remote(brightness: Any) -> float | None:
    """Cloud brightness: a lux number, or ``"dim"``/``"bright"``."""
    if brightness == "dim":
        return LIGHT_LEVEL_DARK
    if brightness == "bright":
        return LIGHT_LEVEL_BRIGHT
    return safe_float(brightness)


def low_battery_status(battery_level: int | None, threshold: int) -> BatteryStatus | None:
    if battery_level is None:
        return None
    return BatteryStatus.LOW if battery_level < threshold else BatteryStatus.NORMAL


def convert_temperature(value: float | None, unit: int | None) -> float | None:
    """Apply the configured unit preference to a cloud temperature."""
    if value is None:
        return None
    if unit == UNIT_FAHRENHEIT:
        return to_fahrenheit(value)
    if unit == UNIT_CELSIUS:
        return to_celsius(value)
    return float(value)


# ------------------------------------------------------------------
# Parsers
# ------------------------------------------------------------------


class _BaseParser:
    transport: TransportMode

    def __init__(self, device: DeviceConfig, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._device = device
        self._profile = profile_for(device.family)
        self._clock = clock

    def _issue(self, issues: list[ParseIssue], field: SnapshotField, raw_value: Any) -> None:
        issues.append(ParseIssue(field=field, raw_value=raw_value, transport=self.transport))


class RemoteStatusParser(_BaseParser):
    """Parse the cloud status document."""

    transport = TransportMode.REMOTE

    def parse(self, status: RemoteStatus) -> ParseResult:
        body = status.body if status.body is not None else RemoteStatusBody()
        issues: list[ParseIssue] = []

        # The status document has no battery reading; see REMOTE_BATTERY_*.
        battery = REMOTE_BATTERY_WITH_BODY if status.has_body else REMOTE_BATTERY_WITHOUT_BODY
        fields: dict[str, Any] = {
            "battery_level": battery,
            "low_battery": low_battery_status(battery, REMOTE_LOW_BATTERY_THRESHOLD),
        }

        if self._profile.family is DeviceFamily.CONTACT:
            fields.update(self._parse_contact(body, issues))
        elif self._profile.family is DeviceFamily.METER:
            fields.update(self._parse_meter(body))

        snapshot = SensorSnapshot(**fields, captured_at=self._clock(), transport=self.transport)
        _logger.debug("%s remote snapshot: %s", self._device.name, snapshot.field_values())
        return ParseResult(snapshot=snapshot, issues=tuple(issues))

    def _parse_contact(self, body: RemoteStatusBody, issues: list[ParseIssue]) -> dict[str, Any]:
        contact_state = contact_from_remote(body.open_state)
        if contact_state is None:
            _logger.warning("%s reported unrecognized openState %r", self._device.name, body.open_state)
            self._issue(issues, SnapshotField.CONTACT_STATE, body.open_state)
        else:
            _logger.info("%s %s", self._device.name, body.open_state)
        return {
            "contact_state": contact_state,
            "motion_detected": bool(body.move_detected),
            "ambient_light_level": light_from_remote(body.brightness),
        }

    def _parse_meter(self, body: RemoteStatusBody) -> dict[str, Any]:
        return {
            "temperature": convert_temperature(body.temperature, self._device.unit),
            "humidity": body.humidity,
        }


class RadioStatusParser(_BaseParser):
    """Parse a merged radio advertisement."""

    transport = TransportMode.LOCAL_RADIO

    def parse(self, advertisement: RadioAdvertisement) -> ParseResult:
        data = advertisement.service_data
        issues: list[ParseIssue] = []

        battery = clamp_percent(data.battery)
        fields: dict[str, Any] = {
            "battery_level": battery,
            "low_battery": low_battery_status(battery, self._profile.radio_low_battery_threshold),
        }

        if self._profile.family is DeviceFamily.CONTACT:
            contact_state = contact_from_radio(data.door_state)
            if contact_state is None:
                _logger.error("%s reported unrecognized doorState %r", self._device.name, data.door_state)
                self._issue(issues, SnapshotField.CONTACT_STATE, data.door_state)
            fields.update(
                contact_state=contact_state,
                motion_detected=bool(data.movement),
                ambient_light_level=light_from_radio(data.light_level),
            )
        elif self._profile.family is DeviceFamily.METER:
            # Advertisements already carry native units.
            fields.update(temperature=data.temperature, humidity=data.humidity)

        snapshot = SensorSnapshot(**fields, captured_at=self._clock(), transport=self.transport)
        _logger.debug("%s radio snapshot: %s", self._device.name, snapshot.field_values())
        return ParseResult(snapshot=snapshot, issues=tuple(issues))
