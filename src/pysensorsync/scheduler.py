"""Timer-driven refresh scheduling.

Each tick starts a refresh unless the device still has one in flight, in
which case the tick is dropped. Ticks are never queued.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging

from pysensorsync.engine import ReconciliationEngine

_logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Periodically refresh one :class:`ReconciliationEngine`."""

    def __init__(
        self,
        engine: ReconciliationEngine,
        interval: float,
        *,
        refresh_on_start: bool = True,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._engine = engine
        self._interval = interval
        self._refresh_on_start = refresh_on_start
        self._runner: asyncio.Task[None] | None = None
        self._refresh_tasks: set[asyncio.Task[None]] = set()
        self.skipped_ticks = 0

    @property
    def is_running(self) -> bool:
        return self._runner is not None and not self._runner.done()

    @property
    def busy(self) -> bool:
        """Whether a refresh started by this scheduler has not finished yet."""
        return self._engine.refresh_in_progress or any(not task.done() for task in self._refresh_tasks)

    def tick(self) -> asyncio.Task[None] | None:
        """Start a refresh now, or drop the tick if one is in flight."""
        if self.busy:
            self.skipped_ticks += 1
            _logger.debug("%s tick skipped, refresh in progress", self._engine.device.name)
            return None
        task = asyncio.create_task(self._run_refresh())
        self._refresh_tasks.add(task)
        task.add_done_callback(self._refresh_tasks.discard)
        return task

    async def _run_refresh(self) -> None:
        try:
            await self._engine.refresh()
        except Exception:
            _logger.exception("%s refresh crashed", self._engine.device.name)

    async def _run(self) -> None:
        if self._refresh_on_start:
            self.tick()
        while True:
            await asyncio.sleep(self._interval)
            self.tick()

    def start(self) -> None:
        if self.is_running:
            return
        self._runner = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop ticking and wait for an in-flight refresh to finish."""
        runner = self._runner
        self._runner = None
        if runner is not None:
            runner.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await runner
        if self._refresh_tasks:
            await asyncio.gather(*self._refresh_tasks, return_exceptions=True)
