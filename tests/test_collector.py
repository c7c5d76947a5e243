"""Tests for periodic fps sampling.

Verifies that:
- A steady 60 fps surface yields one 60 fps sample per period
- The collection window always ends, even without any frame
- Concurrent collect() calls share one in-flight result
- Cancellation rejects the result and stops sampling immediately
"""

import pytest

from fps_stats.core.collector import CollectCancelled, SampleCollector
from fps_stats.core.model import CollectResult, RefreshTier
from fps_stats.core.refresh_rate import RefreshRateEstimator


@pytest.fixture
def estimator(logger) -> RefreshRateEstimator:
    return RefreshRateEstimator(logger=logger)


def make_collector(host, estimator, logger, interval=1000, duration=5000) -> SampleCollector:
    return SampleCollector(
        host,
        estimator,
        collect_interval=interval,
        collect_duration=duration,
        logger=logger,
    )


class TestSteadySampling:
    """Sampling a surface rendering at a constant rate."""

    def test_five_samples_at_60fps(self, host, estimator, logger) -> None:
        collector = make_collector(host, estimator, logger)
        future = collector.collect()

        host.run_frames(fps=60, until_ms=5000)

        assert future.done()
        result = future.result()
        assert result.samples == (60, 60, 60, 60, 60)
        assert result.frame_callback_count == 301

    def test_frame_times_feed_estimator(self, host, estimator, logger) -> None:
        collector = make_collector(host, estimator, logger)
        collector.collect()

        host.run_frames(fps=60, until_ms=5000)

        # The first callback has no previous frame to diff against
        assert estimator.counts[RefreshTier.NORMAL] == 300
        assert estimator.try_freeze() == 60

    def test_low_rate_surface(self, host, estimator, logger) -> None:
        collector = make_collector(host, estimator, logger, interval=1000, duration=3000)
        future = collector.collect()

        host.run_frames(fps=20, until_ms=3000)

        assert future.result().samples == (20, 20, 20)

    def test_partial_period_is_dropped(self, host, estimator, logger) -> None:
        collector = make_collector(host, estimator, logger, interval=1000, duration=2500)
        future = collector.collect()

        host.run_frames(fps=60, until_ms=2500)

        assert future.result().samples == (60, 60)

    def test_first_frame_only_opens_period(self, host, estimator, logger) -> None:
        collector = make_collector(host, estimator, logger)
        future = collector.collect()

        host.run_frames(fps=60, until_ms=0)
        host.advance(5000)

        result = future.result()
        assert result.samples == ()
        assert result.frame_callback_count == 1
        assert all(count == 0 for count in estimator.counts.values())

    def test_collect_starts_from_current_time(self, host, estimator, logger) -> None:
        host.now = 10_000
        collector = make_collector(host, estimator, logger, interval=1000, duration=2000)
        future = collector.collect()

        host.run_frames(fps=60, until_ms=12_000)

        assert future.result().samples == (60, 60)


class TestCompletionTimer:
    """The collection window is the only timeout."""

    def test_resolves_without_any_frame(self, host, estimator, logger) -> None:
        collector = make_collector(host, estimator, logger)
        future = collector.collect()

        host.advance(4999)
        assert not future.done()

        host.advance(1)
        assert future.done()
        assert future.result() == CollectResult(samples=(), frame_callback_count=0)

    def test_completion_withdraws_frame_loop(self, host, estimator, logger) -> None:
        collector = make_collector(host, estimator, logger)
        future = collector.collect()

        host.run_frames(fps=60, until_ms=5000)

        assert future.done()
        assert host.frames == {}
        assert host.timers == {}
        assert collector.is_collecting is False


class TestSingleFlight:
    """At most one collection in flight."""

    def test_concurrent_collect_returns_same_future(self, host, estimator, logger) -> None:
        collector = make_collector(host, estimator, logger)

        first = collector.collect()
        second = collector.collect()

        assert first is second
        assert len(host.timers) == 1
        assert len(host.frames) == 1

    def test_shared_result_not_double_counted(self, host, estimator, logger) -> None:
        collector = make_collector(host, estimator, logger)
        first = collector.collect()
        host.run_frames(fps=60, until_ms=2000)
        second = collector.collect()

        host.run_frames(fps=60, until_ms=5000)

        assert first.result() is second.result()
        assert first.result().samples == (60, 60, 60, 60, 60)

    def test_new_collection_after_completion(self, host, estimator, logger) -> None:
        collector = make_collector(host, estimator, logger)
        first = collector.collect()
        host.run_frames(fps=60, until_ms=5000)

        second = collector.collect()

        assert second is not first
        assert collector.is_collecting


class TestCancel:
    """Explicit cancellation."""

    def test_cancel_rejects_with_reason(self, host, estimator, logger) -> None:
        collector = make_collector(host, estimator, logger)
        future = collector.collect()
        host.run_frames(fps=60, until_ms=500)

        assert collector.cancel("lost focus") is True

        assert future.done()
        error = future.exception()
        assert isinstance(error, CollectCancelled)
        assert error.reason == "lost focus"

    def test_cancel_stops_sampling(self, host, estimator, logger) -> None:
        collector = make_collector(host, estimator, logger, interval=100)
        future = collector.collect()
        host.run_frames(fps=60, until_ms=500)
        counts_before = estimator.counts

        collector.cancel("stop")
        host.run_frames(fps=60, until_ms=5000)

        assert host.frames == {}
        assert host.timers == {}
        assert estimator.counts == counts_before
        assert isinstance(future.exception(), CollectCancelled)

    def test_stale_frame_callback_is_noop(self, host, estimator, logger) -> None:
        """A frame callback captured before cancel must not touch state."""
        collector = make_collector(host, estimator, logger)
        collector.collect()
        host.run_frames(fps=60, until_ms=100)
        stale = list(host.frames.values())
        counts_before = estimator.counts

        collector.cancel("stop")
        for callback in stale:
            callback(200.0)

        assert host.frames == {}
        assert estimator.counts == counts_before

    def test_cancel_when_idle_is_noop(self, host, estimator, logger) -> None:
        collector = make_collector(host, estimator, logger)
        assert collector.cancel("nothing") is False

    def test_collect_after_cancel_starts_fresh(self, host, estimator, logger) -> None:
        collector = make_collector(host, estimator, logger)
        first = collector.collect()
        host.run_frames(fps=60, until_ms=500)
        collector.cancel("stop")
        host.advance(500)

        second = collector.collect()
        host.run_frames(fps=60, until_ms=6000)

        assert second is not first
        assert second.result().samples == (60, 60, 60, 60, 60)
