"""pysensorsync - Async state sync for cloud/radio polled sensor devices."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pysensorsync")
except PackageNotFoundError:
    __version__ = "0+local"
from pysensorsync.client import SensorSyncClient
from pysensorsync.config import DeviceConfig, SensorSyncConfig, radio_address_from_device_id
from pysensorsync.engine import ReconciliationEngine, RefreshPhase
from pysensorsync.exceptions import (
    ErrorKind,
    NetworkFailureError,
    RadioFailureError,
    RadioTimeoutError,
    SensorConfigError,
    SensorSyncError,
    SensorTransportError,
)
from pysensorsync.ingestion.parsers import ParseIssue, ParseResult, RadioStatusParser, RemoteStatusParser
from pysensorsync.ingestion.radio import LocalRadioAdapter
from pysensorsync.ingestion.remote import RemoteApiAdapter
from pysensorsync.models import (
    BatteryStatus,
    ContactState,
    DeviceFamily,
    RadioAdvertisement,
    RemoteStatus,
    SensorSnapshot,
    SnapshotField,
    TransportMode,
)
from pysensorsync.scheduler import RefreshScheduler
from pysensorsync.sink import CharacteristicStore, PublishSink
from pysensorsync.units import to_celsius, to_fahrenheit

__all__ = [
    "__version__",
    "BatteryStatus",
    "CharacteristicStore",
    "ContactState",
    "DeviceConfig",
    "DeviceFamily",
    "ErrorKind",
    "LocalRadioAdapter",
    "NetworkFailureError",
    "ParseIssue",
    "ParseResult",
    "PublishSink",
    "RadioAdvertisement",
    "RadioFailureError",
    "RadioStatusParser",
    "RadioTimeoutError",
    "ReconciliationEngine",
    "RefreshPhase",
    "RefreshScheduler",
    "RemoteApiAdapter",
    "RemoteStatus",
    "RemoteStatusParser",
    "SensorConfigError",
    "SensorSnapshot",
    "SensorSyncClient",
    "SensorSyncConfig",
    "SensorSyncError",
    "SensorTransportError",
    "SnapshotField",
    "TransportMode",
    "radio_address_from_device_id",
    "to_celsius",
    "to_fahrenheit",
]
