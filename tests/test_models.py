"""Tests for raw payload models."""

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from pysensorsync.models.advertisement import RadioAdvertisement
from pysensorsync.models.device import DeviceFamily, profile_for
from pysensorsync.models.snapshot import SensorSnapshot, SnapshotField
from pysensorsync.models.status import RemoteStatus


class TestRemoteStatus:
    SAMPLE_PAYLOAD: dict = {
        "statusCode": 100,
        "body": {
            "deviceId": "C0FFEE123456",
            "deviceType": "Contact Sensor",
            "hubDeviceId": "AABBCCDDEEFF",
            "moveDetected": True,
            "openState": "open",
            "brightness": "bright",
        },
        "message": "success",
    }

    def test_camel_case_mapping(self) -> None:
        status = RemoteStatus.model_validate(self.SAMPLE_PAYLOAD)

        assert status.status_code == 100
        assert status.has_body is True
        assert status.body is not None
        assert status.body.open_state == "open"
        assert status.body.move_detected is True
        assert status.body.hub_device_id == "AABBCCDDEEFF"

    def test_raw_is_preserved(self) -> None:
        status = RemoteStatus.model_validate(self.SAMPLE_PAYLOAD)
        assert status.raw["message"] == "success"
        assert status.body is not None
        assert status.body.raw["deviceType"] == "Contact Sensor"

    def test_sentinels_dropped(self) -> None:
        status = RemoteStatus.model_validate({"body": {"temperature": "--", "humidity": "", "openState": ""}})
        assert status.body is not None
        assert status.body.temperature is None
        assert status.body.humidity is None
        assert status.body.open_state is None

    def test_numeric_strings_coerced(self) -> None:
        status = RemoteStatus.model_validate({"statusCode": "100", "body": {"temperature": "22.5", "humidity": 40}})
        assert status.status_code == 100
        assert status.body is not None
        assert status.body.temperature == 22.5
        assert status.body.humidity == 40.0

    def test_missing_body(self) -> None:
        status = RemoteStatus.model_validate({"statusCode": 190, "message": "device internal error"})
        assert status.has_body is False

    def test_empty_body_counts_as_present(self) -> None:
        assert RemoteStatus.model_validate({"body": {}}).has_body is True

    def test_non_object_body_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RemoteStatus.model_validate({"body": "nope"})


class TestRadioAdvertisement:
    def test_service_data_mapping(self) -> None:
        ad = RadioAdvertisement.model_validate(
            {
                "address": "1a:23:b4:56:78:90",
                "serviceData": {"model": "d", "modelName": "WoContact", "doorState": 1, "lightLevel": "dark"},
            }
        )
        assert ad.service_data.model == "d"
        assert ad.service_data.model_name == "WoContact"
        assert ad.service_data.door_state == 1
        assert ad.service_data.light_level == "dark"

    def test_meter_temperature_object_uses_native_reading(self) -> None:
        ad = RadioAdvertisement.model_validate(
            {
                "address": "1a:23:b4:56:78:90",
                "serviceData": {"temperature": {"c": 21.5, "f": 70.7}, "fahrenheit": False, "humidity": "48"},
            }
        )
        assert ad.service_data.temperature == 21.5
        assert ad.service_data.fahrenheit is False
        assert ad.service_data.humidity == 48.0

    def test_unparseable_battery_is_unset(self) -> None:
        ad = RadioAdvertisement.model_validate({"address": "aa:bb", "serviceData": {"battery": "full"}})
        assert ad.service_data.battery is None


class TestSensorSnapshot:
    def test_defaults_are_unset(self) -> None:
        snapshot = SensorSnapshot()
        values = snapshot.field_values()
        assert set(values) == {field.value for field in SnapshotField}
        assert all(value is None for value in values.values())

    def test_naive_timestamp_becomes_utc(self) -> None:
        snapshot = SensorSnapshot(captured_at=datetime(2026, 1, 1, 12, 0))
        assert snapshot.captured_at.tzinfo is not None

    def test_battery_range_enforced(self) -> None:
        with pytest.raises(ValidationError):
            SensorSnapshot(battery_level=101)

    def test_frozen(self) -> None:
        snapshot = SensorSnapshot()
        with pytest.raises(ValidationError):
            snapshot.humidity = 10.0  # type: ignore[misc]


def test_family_profiles_expose_canonical_fields() -> None:
    canonical = {field.value for field in SnapshotField}
    for family in DeviceFamily:
        assert set(profile_for(family).fields) <= canonical
