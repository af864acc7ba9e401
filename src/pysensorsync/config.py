"""Client and per-device configuration for pysensorsync."""

from __future__ import annotations

import dataclasses
import os
import re
from typing import Any

from pysensorsync._constants import (
    BASE_URL,
    DEFAULT_REFRESH_RATE,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SCAN_WINDOW,
)
from pysensorsync.exceptions import SensorConfigError
from pysensorsync.models.device import DeviceFamily, TransportMode

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def radio_address_from_device_id(device_id: str) -> str:
    """Derive the canonical radio address from a raw hex device id.

    The id is split into 2-character groups, joined with ``:`` and
    lowercased, e.g. ``1A23B4567890`` -> ``1a:23:b4:56:78:90``. Existing
    ``:``/``-`` separators are ignored. The radio stack matches addresses
    literally, so case and delimiter matter.

    Raises :class:`SensorConfigError` if the id is not an even-length hex
    string.
    """
    compact = device_id.strip().replace(":", "").replace("-", "")
    if not compact or len(compact) % 2 or not _HEX_RE.match(compact):
        raise SensorConfigError(f"device id {device_id!r} is not a hex radio address")
    pairs = [compact[i : i + 2] for i in range(0, len(compact), 2)]
    return ":".join(pairs).lower()


@dataclasses.dataclass(frozen=True)
class DeviceConfig:
    """Per-device configuration, read-only after construction.

    Parameters
    ----------
    device_id : str
        Cloud device id; for radio devices also the hex hardware address.
    family : DeviceFamily
        Device family, selects the parser and exposed fields.
    transport : TransportMode
        Primary transport. A failed radio cycle falls back to the cloud
        API for that cycle only; this value never changes.
    unit : int or None
        Temperature handling for cloud readings: ``0`` converts a
        Fahrenheit source to Celsius, ``1`` converts a Celsius source to
        Fahrenheit, anything else passes the number through.
    hide_temperature : bool
        Compute but never publish the temperature.
    hide_humidity : bool
        Compute but never publish the humidity.
    name : str
        Display name used in log messages. Defaults to ``device_id``.
    """

    device_id: str
    family: DeviceFamily = DeviceFamily.CONTACT
    transport: TransportMode = TransportMode.REMOTE
    unit: int | None = None
    hide_temperature: bool = False
    hide_humidity: bool = False
    name: str = ""
    radio_address: str | None = dataclasses.field(init=False, default=None)

    def __post_init__(self) -> None:
        if not self.device_id or not self.device_id.strip():
            raise SensorConfigError("device_id must be non-empty")
        object.__setattr__(self, "family", DeviceFamily(self.family))
        object.__setattr__(self, "transport", TransportMode(self.transport))
        if not self.name:
            object.__setattr__(self, "name", self.device_id)
        if self.transport is TransportMode.LOCAL_RADIO:
            object.__setattr__(self, "radio_address", radio_address_from_device_id(self.device_id))

    @property
    def hidden_fields(self) -> frozenset[str]:
        """Canonical field names that are computed but never published."""
        hidden: set[str] = set()
        if self.hide_temperature:
            hidden.add("temperature")
        if self.hide_humidity:
            hidden.add("humidity")
        return frozenset(hidden)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeviceConfig:
        """Build from a host config entry.

        Accepts ``deviceId``/``device_id``, a boolean ``ble`` flag as an
        alternative to ``transport``, and meter options either flat or
        nested under ``meter``.
        """
        meter = data.get("meter") if isinstance(data.get("meter"), dict) else {}
        transport = data.get("transport")
        if transport is None:
            transport = TransportMode.LOCAL_RADIO if data.get("ble") else TransportMode.REMOTE
        device_id = data.get("device_id", data.get("deviceId"))
        if not isinstance(device_id, str):
            raise SensorConfigError("device config requires a string deviceId")
        try:
            return cls(
                device_id=device_id,
                family=DeviceFamily(data.get("family", DeviceFamily.CONTACT)),
                transport=TransportMode(transport),
                unit=meter.get("unit", data.get("unit")),
                hide_temperature=bool(meter.get("hide_temperature", data.get("hide_temperature", False))),
                hide_humidity=bool(meter.get("hide_humidity", data.get("hide_humidity", False))),
                name=str(data.get("name", "")),
            )
        except ValueError as exc:
            raise SensorConfigError(f"invalid device config for {device_id}: {exc}") from exc


@dataclasses.dataclass(frozen=True)
class SensorSyncConfig:
    """Client configuration.

    Parameters
    ----------
    token : str
        Cloud API token, sent as the ``Authorization`` header.
    base_url : str
        Devices endpoint base URL.
    refresh_rate : float
        Seconds between scheduled refreshes.
    scan_window : float
        Seconds a radio scan listens for advertisements.
    request_timeout : float
        Total timeout for one cloud request, in seconds.
    api_trace_enabled : bool
        Log (redacted) cloud responses at DEBUG level.
    """

    token: str = ""
    base_url: str = BASE_URL
    refresh_rate: float = DEFAULT_REFRESH_RATE
    scan_window: float = DEFAULT_SCAN_WINDOW
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if self.refresh_rate <= 0:
            raise SensorConfigError(f"refresh_rate must be positive, got {self.refresh_rate}")
        if self.scan_window <= 0:
            raise SensorConfigError(f"scan_window must be positive, got {self.scan_window}")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> SensorSyncConfig:
        """Create configuration from environment variables.

        Reads ``SENSORSYNC_TOKEN`` and optional ``SENSORSYNC_*``
        variables. Explicit keyword arguments override environment
        values.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}
        _ENV_STR_MAP = {
            "SENSORSYNC_TOKEN": "token",
            "SENSORSYNC_BASE_URL": "base_url",
        }
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_FLOAT_MAP = {
            "SENSORSYNC_REFRESH_RATE": "refresh_rate",
            "SENSORSYNC_SCAN_WINDOW": "scan_window",
            "SENSORSYNC_REQUEST_TIMEOUT": "request_timeout",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                try:
                    config_kwargs[field_name] = float(val)
                except ValueError as exc:
                    raise SensorConfigError(f"{env_key} must be numeric, got {val!r}") from exc

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(
                env.get("SENSORSYNC_API_TRACE_ENABLED"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
