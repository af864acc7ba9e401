"""High-level async client tying transports, engines and schedulers together."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from pysensorsync._radio import RadioStack
from pysensorsync._transport import HttpTransport, Transport
from pysensorsync.config import DeviceConfig, SensorSyncConfig
from pysensorsync.engine import ReconciliationEngine, RefreshPhase
from pysensorsync.exceptions import SensorConfigError, SensorSyncError
from pysensorsync.ingestion.radio import LocalRadioAdapter
from pysensorsync.ingestion.remote import RemoteApiAdapter
from pysensorsync.models.device import TransportMode
from pysensorsync.scheduler import RefreshScheduler
from pysensorsync.sink import PublishSink

_logger = logging.getLogger(__name__)


class SensorSyncClient:
    """Async client keeping a set of devices in sync with their sinks.

    Usage::

        async with SensorSyncClient(config, radio=stack) as client:
            client.add_device(DeviceConfig("1A23B4567890"), sink)
            client.start()
            ...
    """

    def __init__(
        self,
        config: SensorSyncConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        radio: RadioStack | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport = transport
        self._remote: RemoteApiAdapter | None = None
        self._radio = LocalRadioAdapter(radio) if radio is not None else None
        self._engines: dict[str, ReconciliationEngine] = {}
        self._schedulers: dict[str, RefreshScheduler] = {}

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> SensorSyncClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        self._remote = RemoteApiAdapter(self._transport)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._remote = None

    # ------------------------------------------------------------------
    # Devices
    # ------------------------------------------------------------------

    def _require_remote(self) -> RemoteApiAdapter:
        if self._remote is None:
            raise SensorSyncError("Client not initialized. Use 'async with SensorSyncClient(...) as client:'")
        return self._remote

    def add_device(self, device: DeviceConfig, sink: PublishSink) -> ReconciliationEngine:
        """Register a device and return its engine."""
        remote = self._require_remote()
        if device.device_id in self._engines:
            raise SensorConfigError(f"device {device.device_id} is already registered")
        if device.transport is TransportMode.LOCAL_RADIO and self._radio is None:
            raise SensorConfigError(f"{device.name} uses the local radio but the client has no radio stack")
        engine = ReconciliationEngine(
            device,
            sink,
            remote=remote,
            radio=self._radio,
            scan_window=self._config.scan_window,
        )
        self._engines[device.device_id] = engine
        _logger.debug(
            "Registered %s (%s, %s, address=%s)",
            device.name,
            device.family,
            device.transport,
            device.radio_address,
        )
        return engine

    def get_engine(self, device_id: str) -> ReconciliationEngine:
        try:
            return self._engines[device_id]
        except KeyError:
            raise SensorConfigError(f"unknown device {device_id}") from None

    @property
    def engines(self) -> dict[str, ReconciliationEngine]:
        return dict(self._engines)

    async def refresh(self, device_id: str) -> RefreshPhase | None:
        """Run one refresh cycle for a device right now."""
        return await self.get_engine(device_id).refresh()

    async def refresh_all(self) -> dict[str, RefreshPhase | BaseException | None]:
        """Refresh every registered device concurrently.

        Devices are independent: an exception escaping one device's
        refresh is logged and returned in place of its phase.
        """
        device_ids = list(self._engines)
        results = await asyncio.gather(
            *(self._engines[d].refresh() for d in device_ids),
            return_exceptions=True,
        )
        for device_id, result in zip(device_ids, results, strict=True):
            if isinstance(result, Exception):
                _logger.error("Refresh of %s failed: %r", device_id, result)
        return dict(zip(device_ids, results, strict=True))

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def start(self, *, refresh_on_start: bool = True) -> None:
        """Start a refresh scheduler for every registered device."""
        for device_id, engine in self._engines.items():
            scheduler = self._schedulers.get(device_id)
            if scheduler is None:
                scheduler = RefreshScheduler(
                    engine,
                    self._config.refresh_rate,
                    refresh_on_start=refresh_on_start,
                )
                self._schedulers[device_id] = scheduler
            scheduler.start()

    async def stop(self) -> None:
        schedulers = list(self._schedulers.values())
        self._schedulers.clear()
        for scheduler in schedulers:
            await scheduler.stop()
