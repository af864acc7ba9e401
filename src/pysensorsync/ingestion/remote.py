"""Cloud API transport adapter.

Endpoint:
  - GET /devices/{deviceId}/status
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from pysensorsync._redact import redact_for_log
from pysensorsync._transport import Transport
from pysensorsync.exceptions import NetworkFailureError, SensorTransportError
from pysensorsync.models.status import RemoteStatus

_logger = logging.getLogger(__name__)


class RemoteApiAdapter:
    """Fetch a device's status document in a single request.

    There is no retry here; the next scheduled refresh is the retry.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def fetch(self, device_id: str) -> RemoteStatus:
        """Return the status document of *device_id*.

        Every failure, including unexpected errors from the transport,
        surfaces as :class:`NetworkFailureError`.
        """
        endpoint = f"/{device_id}/status"
        try:
            payload = await self._transport.get_json(endpoint)
        except SensorTransportError:
            raise
        except Exception as exc:
            _logger.debug("Transport error for %s", endpoint, exc_info=True)
            raise NetworkFailureError(f"Request to {endpoint} failed: {exc!r}", endpoint=endpoint) from exc
        try:
            status = RemoteStatus.model_validate(payload)
        except ValidationError as exc:
            _logger.debug("Unusable status document from %s: %s", endpoint, redact_for_log(payload))
            raise NetworkFailureError(
                f"Unusable status document from {endpoint}: {exc.error_count()} validation error(s)",
                endpoint=endpoint,
            ) from exc
        _logger.debug(
            "Status for %s: statusCode=%s body=%s",
            device_id,
            status.status_code,
            "present" if status.has_body else "missing",
        )
        return status
