"""Cloud API status document model.

Mapped from ``GET /devices/{deviceId}/status``. Only the fields used by
the supported device families are modelled; everything else stays in
``raw``.
"""

from __future__ import annotations

from typing import Any

from pydantic import field_validator

from pysensorsync.ingestion.normalize import safe_float, safe_int, safe_str
from pysensorsync.models._base import SensorBaseModel


class RemoteStatusBody(SensorBaseModel):
    """``body`` object of the status document.

    ``move_detected`` and ``brightness`` are kept as sent; the parser
    decides how to coerce them.
    """

    device_id: str | None = None
    device_type: str | None = None
    hub_device_id: str | None = None
    open_state: str | None = None
    move_detected: Any = None
    brightness: Any = None
    temperature: float | None = None
    humidity: float | None = None
    battery: int | None = None

    @field_validator("device_id", "device_type", "hub_device_id", "open_state", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("temperature", "humidity", mode="before")
    @classmethod
    def _coerce_float(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("battery", mode="before")
    @classmethod
    def _coerce_int(cls, value: Any) -> int | None:
        return safe_int(value)


class RemoteStatus(SensorBaseModel):
    """Full status document returned by the cloud API."""

    status_code: int | None = None
    message: str | None = None
    body: RemoteStatusBody | None = None

    @field_validator("status_code", mode="before")
    @classmethod
    def _coerce_status_code(cls, value: Any) -> int | None:
        return safe_int(value)

    @property
    def has_body(self) -> bool:
        """Whether the document carried a ``body`` object (even an empty one)."""
        return self.body is not None
