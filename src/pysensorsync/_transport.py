"""HTTP transport for the cloud devices API."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from pysensorsync._constants import USER_AGENT
from pysensorsync._redact import redact_for_log
from pysensorsync.config import SensorSyncConfig
from pysensorsync.exceptions import NetworkFailureError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the remote adapter.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, endpoint: str) -> dict[str, Any]:
        ...


class HttpTransport:
    """Token-authenticated JSON GET transport on top of aiohttp."""

    def __init__(
        self,
        config: SensorSyncConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "accept": "application/json",
            "content-type": "application/json; charset=utf8",
            "user-agent": USER_AGENT,
        }
        if self._config.token:
            headers["authorization"] = self._config.token
        return headers

    async def get_json(self, endpoint: str) -> dict[str, Any]:
        """GET ``{base_url}{endpoint}`` and return the decoded JSON object.

        Raises :class:`NetworkFailureError` on connection errors,
        timeouts, non-2xx responses, undecodable bodies and bodies that
        are not a JSON object.
        """
        url = f"{self._config.base_url}{endpoint}"
        headers = self._headers()
        if self._config.api_trace_enabled:
            _logger.debug("GET %s headers=%s", url, redact_for_log(headers))
        else:
            _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise NetworkFailureError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except NetworkFailureError:
            raise
        except TimeoutError as exc:
            raise NetworkFailureError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise NetworkFailureError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        except UnicodeDecodeError as exc:
            raise NetworkFailureError(
                f"Undecodable response body from {endpoint}: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            result = json.loads(text)
        except json.JSONDecodeError as exc:
            raise NetworkFailureError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc

        if not isinstance(result, dict):
            raise NetworkFailureError(
                f"Expected a JSON object from {endpoint}, got {type(result).__name__}",
                endpoint=endpoint,
            )

        if self._config.api_trace_enabled:
            _logger.debug("Response from %s: %s", endpoint, redact_for_log(result))

        return result
