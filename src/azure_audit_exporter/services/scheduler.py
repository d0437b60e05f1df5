"""Scrape scheduler firing collection cycles on a fixed interval."""

import asyncio
import logging
from typing import Optional, Set

from .collection_cycle import CollectionCycle

logger = logging.getLogger(__name__)


class ScrapeScheduler:
    """Launches a collection cycle immediately and then every ``interval``.

    Cycles are fire-and-forget: a cycle overrunning the interval keeps
    running while the next one starts. Each cycle installs its own snapshot
    atomically, so overlap only costs duplicate remote calls. With
    ``allow_overlap=False`` a tick is skipped while a cycle is in flight.
    """

    def __init__(
        self,
        cycle: CollectionCycle,
        interval: float,
        allow_overlap: bool = True
    ) -> None:
        """Initialize scrape scheduler.

        Args:
            cycle: Collection cycle to run on every tick
            interval: Seconds between two ticks
            allow_overlap: Whether to launch a cycle while another runs
        """
        if interval <= 0:
            raise ValueError("scrape interval must be positive")
        self.cycle = cycle
        self.interval = interval
        self.allow_overlap = allow_overlap
        self.ticks = 0
        self._in_flight: Set[asyncio.Task] = set()
        self._loop_task: Optional[asyncio.Task] = None

    @property
    def in_flight(self) -> int:
        """Number of cycles currently running."""
        return len(self._in_flight)

    def tick(self) -> Optional[asyncio.Task]:
        """Launch one cycle unless the overlap guard forbids it."""
        self.ticks += 1
        if self._in_flight and not self.allow_overlap:
            logger.warning(f"tick {self.ticks}: previous collection still running, skipping")
            return None

        task = asyncio.create_task(self._run_cycle())
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def _run_cycle(self) -> None:
        try:
            await self.cycle.run()
        except asyncio.CancelledError:
            raise
        except Exception:
            # Keep the loop alive; the next tick is the retry
            logger.exception("Collection cycle failed")

    async def run_forever(self) -> None:
        """Tick until cancelled."""
        while True:
            self.tick()
            await asyncio.sleep(self.interval)

    def start(self) -> asyncio.Task:
        """Start the scheduler loop in the background."""
        if self._loop_task is None or self._loop_task.done():
            self._loop_task = asyncio.create_task(self.run_forever())
        return self._loop_task

    async def stop(self) -> None:
        """Stop ticking and cancel cycles still in flight."""
        pending = [task for task in [self._loop_task, *self._in_flight] if task and not task.done()]
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        self._loop_task = None
