from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import pytest

from pysensorsync.config import DeviceConfig
from pysensorsync.engine import ReconciliationEngine
from pysensorsync.ingestion.remote import RemoteApiAdapter
from pysensorsync.scheduler import RefreshScheduler
from pysensorsync.sink import CharacteristicStore

STATUS: dict[str, Any] = {"statusCode": 100, "body": {"openState": "open", "moveDetected": True}}


@dataclass
class _GateTransport:
    gated: bool = False
    calls: int = 0
    release: asyncio.Event = field(default_factory=asyncio.Event)

    async def get_json(self, endpoint: str) -> dict[str, Any]:
        self.calls += 1
        if self.gated:
            await self.release.wait()
        return STATUS


class _CrashingTransport:
    async def get_json(self, endpoint: str) -> dict[str, Any]:
        raise RuntimeError("driver bug")


def _engine(transport: Any) -> ReconciliationEngine:
    return ReconciliationEngine(
        DeviceConfig("1A23B4567890"),
        CharacteristicStore(),
        remote=RemoteApiAdapter(transport),
    )


@pytest.mark.asyncio
async def test_tick_while_refreshing_is_skipped() -> None:
    transport = _GateTransport(gated=True)
    scheduler = RefreshScheduler(_engine(transport), 60, refresh_on_start=False)

    task = scheduler.tick()
    assert task is not None
    await asyncio.sleep(0)

    assert scheduler.tick() is None
    assert scheduler.tick() is None
    assert scheduler.skipped_ticks == 2

    transport.release.set()
    await task
    assert transport.calls == 1


@pytest.mark.asyncio
async def test_back_to_back_ticks_before_refresh_starts_issue_one_fetch() -> None:
    transport = _GateTransport()
    scheduler = RefreshScheduler(_engine(transport), 60, refresh_on_start=False)

    first = scheduler.tick()
    second = scheduler.tick()

    assert first is not None
    assert second is None
    await first
    assert transport.calls == 1


@pytest.mark.asyncio
async def test_tick_after_completion_refreshes_again() -> None:
    transport = _GateTransport()
    scheduler = RefreshScheduler(_engine(transport), 60, refresh_on_start=False)

    first = scheduler.tick()
    assert first is not None
    await first
    second = scheduler.tick()
    assert second is not None
    await second

    assert transport.calls == 2
    assert scheduler.skipped_ticks == 0


@pytest.mark.asyncio
async def test_crashing_refresh_is_logged_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR, logger="pysensorsync.scheduler")
    engine = _engine(_CrashingTransport())
    scheduler = RefreshScheduler(engine, 60, refresh_on_start=False)

    task = scheduler.tick()
    assert task is not None
    await task

    assert "refresh crashed" in caplog.text
    assert engine.refresh_in_progress is False


@pytest.mark.asyncio
async def test_start_and_stop() -> None:
    transport = _GateTransport()
    scheduler = RefreshScheduler(_engine(transport), 0.01)

    scheduler.start()
    assert scheduler.is_running
    await asyncio.sleep(0.05)
    await scheduler.stop()

    assert not scheduler.is_running
    calls = transport.calls
    assert calls >= 2
    await asyncio.sleep(0.03)
    assert transport.calls == calls


@pytest.mark.asyncio
async def test_stop_waits_for_in_flight_refresh() -> None:
    transport = _GateTransport(gated=True)
    engine = _engine(transport)
    scheduler = RefreshScheduler(engine, 60)

    scheduler.start()
    await asyncio.sleep(0)
    await asyncio.sleep(0)
    assert engine.refresh_in_progress

    stopper = asyncio.create_task(scheduler.stop())
    await asyncio.sleep(0)
    assert not stopper.done()
    transport.release.set()
    await stopper

    assert engine.refresh_in_progress is False
    assert engine.snapshot is not None


def test_interval_must_be_positive() -> None:
    with pytest.raises(ValueError):
        RefreshScheduler(_engine(_GateTransport()), 0)
