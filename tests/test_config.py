from __future__ import annotations

import pytest

from pysensorsync._constants import BASE_URL
from pysensorsync.config import DeviceConfig, SensorSyncConfig, radio_address_from_device_id
from pysensorsync.exceptions import SensorConfigError
from pysensorsync.models.device import DeviceFamily, TransportMode


def test_radio_address_normalization() -> None:
    assert radio_address_from_device_id("1A23B4567890") == "1a:23:b4:56:78:90"


def test_radio_address_accepts_existing_separators() -> None:
    assert radio_address_from_device_id("1A:23:B4:56:78:90") == "1a:23:b4:56:78:90"
    assert radio_address_from_device_id("1a-23-b4-56-78-90") == "1a:23:b4:56:78:90"


@pytest.mark.parametrize("device_id", ["", "ABC", "ZZ23B4567890"])
def test_radio_address_rejects_non_hex(device_id: str) -> None:
    with pytest.raises(SensorConfigError):
        radio_address_from_device_id(device_id)


def test_device_config_derives_radio_address_without_mutating_id() -> None:
    device = DeviceConfig("1A23B4567890", transport=TransportMode.LOCAL_RADIO)

    assert device.device_id == "1A23B4567890"
    assert device.radio_address == "1a:23:b4:56:78:90"
    assert device.name == "1A23B4567890"


def test_remote_device_has_no_radio_address() -> None:
    # Cloud ids need not be hex.
    device = DeviceConfig("cloud-only-id")
    assert device.radio_address is None


def test_device_config_is_frozen() -> None:
    device = DeviceConfig("1A23B4567890")
    with pytest.raises(AttributeError):
        device.unit = 1  # type: ignore[misc]


def test_hidden_fields() -> None:
    device = DeviceConfig("M1", family=DeviceFamily.METER, hide_temperature=True, hide_humidity=True)
    assert device.hidden_fields == frozenset({"temperature", "humidity"})
    assert DeviceConfig("M2", family=DeviceFamily.METER).hidden_fields == frozenset()


def test_device_config_from_host_entry() -> None:
    device = DeviceConfig.from_dict(
        {
            "deviceId": "C0FFEE123456",
            "family": "meter",
            "ble": True,
            "name": "Bedroom",
            "meter": {"unit": 1, "hide_humidity": True},
        }
    )

    assert device.transport is TransportMode.LOCAL_RADIO
    assert device.family is DeviceFamily.METER
    assert device.unit == 1
    assert device.hide_humidity is True
    assert device.hide_temperature is False
    assert device.radio_address == "c0:ff:ee:12:34:56"
    assert device.name == "Bedroom"


def test_device_config_from_host_entry_rejects_unknown_family() -> None:
    with pytest.raises(SensorConfigError):
        DeviceConfig.from_dict({"deviceId": "ABCDEF", "family": "toaster"})


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SENSORSYNC_TOKEN", "tok")
    monkeypatch.setenv("SENSORSYNC_REFRESH_RATE", "60")
    monkeypatch.setenv("SENSORSYNC_API_TRACE_ENABLED", "yes")

    config = SensorSyncConfig.from_env()

    assert config.token == "tok"
    assert config.refresh_rate == 60.0
    assert config.api_trace_enabled is True
    assert config.base_url == BASE_URL


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SENSORSYNC_SCAN_WINDOW", "5")
    config = SensorSyncConfig.from_env(scan_window=2.0, base_url="https://example.test/devices/")

    assert config.scan_window == 2.0
    assert config.base_url == "https://example.test/devices"


def test_from_env_rejects_non_numeric(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SENSORSYNC_REFRESH_RATE", "soon")
    with pytest.raises(SensorConfigError):
        SensorSyncConfig.from_env()


def test_config_rejects_non_positive_refresh_rate() -> None:
    with pytest.raises(SensorConfigError):
        SensorSyncConfig(refresh_rate=0)
