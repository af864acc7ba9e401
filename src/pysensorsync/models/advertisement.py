"""Local radio advertisement model.

A scan delivers payloads shaped like ``{"address": ..., "serviceData":
{...}}``. The service data fields differ per device family; the ones
read by the parsers are typed here, the rest are kept in ``raw``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field, field_validator

from pysensorsync.ingestion.normalize import safe_float, safe_int, safe_str
from pysensorsync.models._base import SensorBaseModel


class AdvertisementServiceData(SensorBaseModel):
    """Decoded service data of one advertisement.

    ``door_state`` and ``light_level`` arrive either as strings
    (``"open"``, ``"dark"``) or numeric codes, so they are kept as sent.
    """

    model: str | None = None
    model_name: str | None = None
    movement: Any = None
    door_state: Any = None
    light_level: Any = None
    battery: int | None = None
    temperature: float | None = None
    fahrenheit: bool | None = None
    humidity: float | None = None

    @field_validator("model", "model_name", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("battery", mode="before")
    @classmethod
    def _coerce_battery(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("temperature", mode="before")
    @classmethod
    def _coerce_temperature(cls, value: Any) -> float | None:
        # Meters report {"c": 21.5, "f": 70.7}; the native reading is "c".
        if isinstance(value, Mapping):
            value = value.get("c")
        return safe_float(value)

    @field_validator("humidity", mode="before")
    @classmethod
    def _coerce_humidity(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("fahrenheit", mode="before")
    @classmethod
    def _coerce_fahrenheit(cls, value: Any) -> bool | None:
        if value is None:
            return None
        return bool(value)


class RadioAdvertisement(SensorBaseModel):
    """Advertisement captured during one scan window."""

    address: str
    service_data: AdvertisementServiceData = Field(default_factory=AdvertisementServiceData)
    count: int = 0
    """Number of advertisements merged into ``service_data``."""
