from __future__ import annotations

from pysensorsync._redact import redact_for_log


def test_redacts_authorization_header() -> None:
    headers = {"accept": "application/json", "Authorization": "tok-123"}

    redacted = redact_for_log(headers)

    assert redacted == {"accept": "application/json", "Authorization": "<redacted>"}
    assert headers["Authorization"] == "tok-123"


def test_redacts_hub_id_in_status_document() -> None:
    status = {
        "statusCode": 100,
        "message": "success",
        "body": {
            "deviceId": "C0FFEE123456",
            "deviceType": "Contact Sensor",
            "hubDeviceId": "HUB-7F3A",
            "openState": "open",
        },
    }

    redacted = redact_for_log(status)

    assert redacted["body"]["hubDeviceId"] == "<redacted>"
    assert redacted["body"]["deviceId"] == "C0FFEE123456"
    assert redacted["body"]["openState"] == "open"
    assert redacted["statusCode"] == 100


def test_redacts_inside_lists() -> None:
    redacted = redact_for_log({"deviceList": [{"hubDeviceId": "HUB-7F3A", "deviceName": "Door"}]})
    assert redacted["deviceList"] == [{"hubDeviceId": "<redacted>", "deviceName": "Door"}]


def test_truncates_long_strings() -> None:
    redacted = redact_for_log({"message": "x" * 600}, max_string=10)
    assert redacted["message"] == "x" * 10 + "...<truncated>"
