"""Canonical sensor snapshot.

A snapshot is the normalized state of one device at one point in time.
It is rebuilt wholesale on every successful parse; ``None`` marks a field
the current transport/device combination has no data for.
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pysensorsync.models.device import TransportMode


class SnapshotField(StrEnum):
    """Canonical field names, as passed to a publish sink."""

    CONTACT_STATE = "contact_state"
    MOTION_DETECTED = "motion_detected"
    AMBIENT_LIGHT_LEVEL = "ambient_light_level"
    BATTERY_LEVEL = "battery_level"
    LOW_BATTERY = "low_battery"
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"


class ContactState(enum.IntEnum):
    """Contact sensor state (HomeKit numbering)."""

    DETECTED = 0
    NOT_DETECTED = 1


class BatteryStatus(enum.IntEnum):
    """Low-battery indicator."""

    NORMAL = 0
    LOW = 1


class SensorSnapshot(BaseModel):
    """Normalized state of a single device for one refresh cycle.

    Parameters
    ----------
    contact_state : ContactState or None
        Door/contact state.
    motion_detected : bool or None
        Presence/motion flag.
    ambient_light_level : float or None
        Ambient light in lux.
    battery_level : int or None
        Battery percentage, 0-100.
    low_battery : BatteryStatus or None
        Derived from ``battery_level`` and the family threshold.
    temperature : float or None
        Temperature in the configured unit.
    humidity : float or None
        Relative humidity in percent.
    captured_at : datetime
        UTC time the payload was parsed.
    transport : TransportMode
        Transport that actually produced the data.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    contact_state: ContactState | None = None
    motion_detected: bool | None = None
    ambient_light_level: float | None = None
    battery_level: int | None = Field(default=None, ge=0, le=100)
    low_battery: BatteryStatus | None = None
    temperature: float | None = None
    humidity: float | None = None
    captured_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    transport: TransportMode = TransportMode.REMOTE

    @field_validator("captured_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def field_values(self) -> dict[str, Any]:
        """Return the canonical fields keyed by their :class:`SnapshotField` name."""
        return {field.value: getattr(self, field.value) for field in SnapshotField}
