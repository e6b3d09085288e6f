"""Periodic trigger for reconciliation cycles."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from typing import Any

_logger = logging.getLogger(__name__)


class SyncScheduler:
    """Run *cycle* every *interval* seconds on the running event loop.

    A tick that fires while the previous cycle is still in flight is
    skipped, so at most one cycle runs at a time. There is no backoff and
    no jitter; a failed cycle is simply retried by the next tick.
    """

    def __init__(self, cycle: Callable[[], Awaitable[Any]], interval: float) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._cycle = cycle
        self._interval = interval
        self._timer: asyncio.Task[None] | None = None
        self._in_flight: asyncio.Task[Any] | None = None
        self._skipped = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def cycle_in_flight(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    @property
    def skipped_ticks(self) -> int:
        return self._skipped

    def start(self) -> None:
        if self.is_running:
            return
        self._timer = asyncio.create_task(self._run(), name="quotesync-sync-timer")
        _logger.debug("Sync scheduler started (interval=%.1fs)", self._interval)

    def stop(self) -> None:
        """Cancel the timer and abandon an in-flight cycle."""
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
        in_flight, self._in_flight = self._in_flight, None
        if in_flight is not None and not in_flight.done():
            in_flight.cancel()
        _logger.debug("Sync scheduler stopped")

    def tick(self) -> asyncio.Task[Any] | None:
        """Start one cycle now unless one is already running.

        Returns the cycle task, or ``None`` when the tick was skipped.
        """
        if self.cycle_in_flight:
            self._skipped += 1
            _logger.debug("Previous sync cycle still running; skipping tick")
            return None
        task = asyncio.create_task(self._guarded_cycle())
        self._in_flight = task
        return task

    async def _guarded_cycle(self) -> None:
        try:
            await self._cycle()
        except asyncio.CancelledError:
            raise
        except Exception:
            _logger.exception("Sync cycle failed")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self.tick()

    async def wait_idle(self) -> None:
        """Wait until the current cycle, if any, has finished."""
        task = self._in_flight
        if task is not None and not task.done():
            with contextlib.suppress(asyncio.CancelledError):
                await task
