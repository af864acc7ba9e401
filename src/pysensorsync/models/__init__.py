"""Data models for raw payloads and canonical snapshots."""

from pysensorsync.models._base import SensorBaseModel
from pysensorsync.models.advertisement import AdvertisementServiceData, RadioAdvertisement
from pysensorsync.models.device import DeviceFamily, FamilyProfile, TransportMode, profile_for
from pysensorsync.models.snapshot import BatteryStatus, ContactState, SensorSnapshot, SnapshotField
from pysensorsync.models.status import RemoteStatus, RemoteStatusBody

__all__ = [
    "AdvertisementServiceData",
    "BatteryStatus",
    "ContactState",
    "DeviceFamily",
    "FamilyProfile",
    "RadioAdvertisement",
    "RemoteStatus",
    "RemoteStatusBody",
    "SensorBaseModel",
    "SensorSnapshot",
    "SnapshotField",
    "TransportMode",
    "profile_for",
]
