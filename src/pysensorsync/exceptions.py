"""Custom exception hierarchy for pysensorsync."""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Failure taxonomy shared by transport errors and parse issues."""

    NETWORK_FAILURE = "network_failure"
    RADIO_TIMEOUT = "radio_timeout"
    RADIO_FAILURE = "radio_failure"
    PARSE_AMBIGUOUS = "parse_ambiguous"


class SensorSyncError(Exception):
    """Base exception for all pysensorsync errors."""


class SensorConfigError(SensorSyncError):
    """Invalid or missing configuration."""


class SensorTransportError(SensorSyncError):
    """A transport could not deliver a raw status payload."""

    kind: ErrorKind = ErrorKind.NETWORK_FAILURE

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class NetworkFailureError(SensorTransportError):
    """Remote API unreachable, non-2xx, or returned an unusable document."""

    kind = ErrorKind.NETWORK_FAILURE


class RadioTimeoutError(SensorTransportError):
    """No advertisement arrived within the scan window."""

    kind = ErrorKind.RADIO_TIMEOUT


class RadioFailureError(SensorTransportError):
    """The radio scan could not be started or broke while listening."""

    kind = ErrorKind.RADIO_FAILURE
