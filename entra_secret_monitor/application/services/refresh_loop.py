"""Periodic driver for the refresh use case."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from datetime import timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..use_cases import RefreshExpiryMetrics, RefreshResult

logger = logging.getLogger(__name__)


class RefreshLoop:
    """
    Supervised background task running the refresh use case on an interval.

    A failed cycle is logged and contained: the loop keeps running and the
    metric store keeps whatever the last successful cycle published.
    """

    def __init__(self, use_case: RefreshExpiryMetrics, interval: timedelta) -> None:
        """
        Initialize the loop.

        Args:
            use_case: Refresh use case executed once per cycle.
            interval: Pause between the end of one cycle and the start of the next.
        """
        self._use_case = use_case
        self._interval = interval
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

        self.cycles = 0
        self.consecutive_failures = 0
        self.last_result: RefreshResult | None = None
        self.last_error: BaseException | None = None

    @property
    def running(self) -> bool:
        """Whether the background task is alive."""
        return self._task is not None and not self._task.done()

    async def run_cycle(self) -> RefreshResult | None:
        """
        Run a single refresh cycle.

        Returns:
            The cycle result, or None if the cycle failed.
        """
        self.cycles += 1
        try:
            result = await self._use_case.execute()
        except Exception as e:
            self.consecutive_failures += 1
            self.last_error = e
            logger.exception(
                "Refresh cycle %d failed (%d consecutive failures), keeping previous metrics",
                self.cycles,
                self.consecutive_failures,
            )
            return None

        self.consecutive_failures = 0
        self.last_error = None
        self.last_result = result
        return result

    async def run_forever(self) -> None:
        """Run cycles until stop() is called, sleeping the interval in between."""
        logger.info("Refresh loop started with interval %s", self._interval)
        while not self._stop_event.is_set():
            await self.run_cycle()

            logger.debug("Next refresh in %s", self._interval)
            with contextlib.suppress(TimeoutError):
                await asyncio.wait_for(self._stop_event.wait(), self._interval.total_seconds())

        logger.info("Refresh loop stopped after %d cycles", self.cycles)

    def start(self) -> asyncio.Task[None]:
        """Schedule the loop as a background task on the running event loop."""
        if self.running:
            msg = "Refresh loop is already running"
            raise RuntimeError(msg)

        self._stop_event.clear()
        self._task = asyncio.create_task(self.run_forever(), name="refresh-loop")
        return self._task

    async def stop(self) -> None:
        """Signal the loop to stop and wait for the current cycle to finish."""
        self._stop_event.set()
        if self._task is None:
            return

        task, self._task = self._task, None
        await task
