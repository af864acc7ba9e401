"""Device families and transport selection."""

from __future__ import annotations

import dataclasses
from enum import StrEnum

from pysensorsync._constants import (
    CONTACT_RADIO_LOW_BATTERY_THRESHOLD,
    METER_RADIO_LOW_BATTERY_THRESHOLD,
    RADIO_MODEL_CONTACT,
    RADIO_MODEL_METER,
)


class TransportMode(StrEnum):
    """Channel used to obtain raw device status."""

    REMOTE = "remote"
    LOCAL_RADIO = "local_radio"


class DeviceFamily(StrEnum):
    CONTACT = "contact"
    METER = "meter"


@dataclasses.dataclass(frozen=True)
class FamilyProfile:
    """Static description of a device family.

    ``fields`` lists the canonical field names (see
    :class:`pysensorsync.models.snapshot.SnapshotField`) the family
    exposes, in publish order.
    """

    family: DeviceFamily
    radio_model: str
    fields: tuple[str, ...]
    radio_low_battery_threshold: int


_PROFILES: dict[DeviceFamily, FamilyProfile] = {
    DeviceFamily.CONTACT: FamilyProfile(
        family=DeviceFamily.CONTACT,
        radio_model=RADIO_MODEL_CONTACT,
        fields=("contact_state", "motion_detected", "ambient_light_level", "battery_level", "low_battery"),
        radio_low_battery_threshold=CONTACT_RADIO_LOW_BATTERY_THRESHOLD,
    ),
    DeviceFamily.METER: FamilyProfile(
        family=DeviceFamily.METER,
        radio_model=RADIO_MODEL_METER,
        fields=("low_battery", "battery_level", "humidity", "temperature"),
        radio_low_battery_threshold=METER_RADIO_LOW_BATTERY_THRESHOLD,
    ),
}


def profile_for(family: DeviceFamily | str) -> FamilyProfile:
    """Return the :class:`FamilyProfile` for *family*."""
    return _PROFILES[DeviceFamily(family)]
