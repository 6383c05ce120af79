"""
Debounced Recompute

Re-runs the insights engine after input changes settle, so a burst of edits
produces one analysis of the latest snapshot.
"""

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, Optional, Union

from konterra_insights.insights.engine import NetworkInsightsEngine
from konterra_insights.models.entities import NetworkSnapshot
from konterra_insights.models.results import InsightsReport

logger = logging.getLogger(__name__)

ReportCallback = Callable[[InsightsReport], Union[None, Awaitable[None]]]


class DebouncedRecompute:
    """Schedules one analysis per quiet period.

    Each ``trigger`` cancels the pending run and schedules a new one after
    ``delay_seconds``. Must be used from a running event loop.
    """

    def __init__(
        self,
        callback: ReportCallback,
        engine: Optional[NetworkInsightsEngine] = None,
        delay_seconds: float = 0.3,
    ):
        """Initialize the scheduler.

        Args:
            callback: Receives each computed report (sync or async)
            engine: Engine to run (default configuration if omitted)
            delay_seconds: Quiet period before recomputing
        """
        self.callback = callback
        self.engine = engine or NetworkInsightsEngine()
        self.delay_seconds = delay_seconds
        self.runs = 0
        self.last_error: Optional[Exception] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def trigger(
        self,
        snapshot: NetworkSnapshot,
        reference_date: Optional[datetime] = None,
    ) -> None:
        """Schedule a recompute, replacing any run still waiting."""
        if self.pending:
            self._task.cancel()
            logger.debug("Replaced pending recompute")
        self._task = asyncio.get_running_loop().create_task(
            self._run(snapshot, reference_date)
        )

    async def _run(
        self,
        snapshot: NetworkSnapshot,
        reference_date: Optional[datetime],
    ) -> None:
        await asyncio.sleep(self.delay_seconds)

        # Analysis is CPU-bound, run it off the event loop
        try:
            report = await asyncio.to_thread(self.engine.analyze, snapshot, reference_date)
            self.runs += 1
            result = self.callback(report)
            if asyncio.iscoroutine(result):
                await result
        except Exception as e:
            self.last_error = e
            logger.warning(f"Recompute failed: {e}")

    async def flush(self) -> None:
        """Wait for the pending run, if any, to finish.

        A run cancelled by ``trigger`` or ``cancel`` is not an error here, but
        cancelling the caller still propagates.
        """
        if self._task is None:
            return
        await asyncio.wait([self._task])

    def cancel(self) -> None:
        """Drop the pending run without computing."""
        if self.pending:
            self._task.cancel()
