"""
Tests for Debounced Recompute
"""

import asyncio
import logging
import time

import pytest

from konterra_insights.insights.engine import NetworkInsightsEngine
from konterra_insights.pipeline.recompute import DebouncedRecompute


class SlowEngine(NetworkInsightsEngine):
    """Engine whose analysis holds the CPU for a while."""

    def analyze(self, snapshot, reference_date=None):
        time.sleep(0.3)
        return super().analyze(snapshot, reference_date)


class TestDebouncedRecompute:
    """Tests for burst coalescing."""

    def test_burst_runs_once(self, sample_snapshot, reference_date):
        reports = []

        async def scenario():
            recompute = DebouncedRecompute(reports.append, delay_seconds=0.01)
            for _ in range(5):
                recompute.trigger(sample_snapshot, reference_date)
            await recompute.flush()
            return recompute

        recompute = asyncio.run(scenario())

        assert recompute.runs == 1
        assert len(reports) == 1
        assert reports[0].generated_at == reference_date

    def test_async_callback(self, sample_snapshot, reference_date):
        reports = []

        async def on_report(report):
            reports.append(report)

        async def scenario():
            recompute = DebouncedRecompute(on_report, delay_seconds=0)
            recompute.trigger(sample_snapshot, reference_date)
            await recompute.flush()

        asyncio.run(scenario())

        assert len(reports) == 1

    def test_latest_snapshot_wins(self, sample_snapshot, reference_date):
        reports = []
        smaller = sample_snapshot.model_copy(update={"connections": []})

        async def scenario():
            recompute = DebouncedRecompute(reports.append, delay_seconds=0.01)
            recompute.trigger(sample_snapshot, reference_date)
            recompute.trigger(smaller, reference_date)
            await recompute.flush()

        asyncio.run(scenario())

        assert [r.metrics.total_connections for r in reports] == [0]

    def test_cancel(self, sample_snapshot, reference_date):
        reports = []

        async def scenario():
            recompute = DebouncedRecompute(reports.append, delay_seconds=0.01)
            recompute.trigger(sample_snapshot, reference_date)
            assert recompute.pending
            recompute.cancel()
            await recompute.flush()
            return recompute

        recompute = asyncio.run(scenario())

        assert recompute.runs == 0
        assert not recompute.pending
        assert reports == []

    def test_trigger_requires_running_loop(self, sample_snapshot):
        recompute = DebouncedRecompute(lambda report: None)

        with pytest.raises(RuntimeError):
            recompute.trigger(sample_snapshot)


class TestBackgroundAnalysis:
    """Tests for running analysis off the event loop."""

    def test_event_loop_keeps_running(self, sample_snapshot, reference_date):
        reports = []
        gaps = []

        async def ticker():
            last = time.monotonic()
            while True:
                await asyncio.sleep(0.02)
                now = time.monotonic()
                gaps.append(now - last)
                last = now

        async def scenario():
            recompute = DebouncedRecompute(reports.append, engine=SlowEngine(), delay_seconds=0)
            tick = asyncio.create_task(ticker())
            recompute.trigger(sample_snapshot, reference_date)
            await recompute.flush()
            tick.cancel()

        asyncio.run(scenario())

        assert len(reports) == 1
        assert gaps
        assert max(gaps) < 0.2

    def test_callback_failure_logged(self, sample_snapshot, reference_date, caplog):
        def on_report(report):
            raise ValueError("render failed")

        async def scenario():
            recompute = DebouncedRecompute(on_report, delay_seconds=0)
            recompute.trigger(sample_snapshot, reference_date)
            await recompute.flush()
            return recompute

        with caplog.at_level(logging.WARNING):
            recompute = asyncio.run(scenario())

        assert recompute.runs == 1
        assert isinstance(recompute.last_error, ValueError)
        assert "render failed" in caplog.text

    def test_cancelling_caller_propagates(self, sample_snapshot, reference_date):
        async def scenario():
            recompute = DebouncedRecompute(lambda report: None, delay_seconds=10)
            recompute.trigger(sample_snapshot, reference_date)

            waiter = asyncio.create_task(recompute.flush())
            await asyncio.sleep(0)
            waiter.cancel()

            with pytest.raises(asyncio.CancelledError):
                await waiter
            still_pending = recompute.pending
            recompute.cancel()
            return still_pending

        assert asyncio.run(scenario()) is True
