"""Periodic fps sampling over a bounded collection window.

A collection runs a frame-callback loop on the host: frames are counted
per aggregation period and each completed period yields one fps sample.
Raw inter-frame durations feed the refresh-rate estimator. A completion
timer ends the window; an explicit cancel rejects it instead.

At most one collection is in flight. Concurrent collect() calls share
the in-flight result handle.
"""

from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Optional

from .host import MonitorHost
from .logging import Logger, get_logger
from .model import CollectResult
from .refresh_rate import RefreshRateEstimator
from .stats import period_fps


class FpsStatsError(Exception):
    """Base error for fps monitoring."""


class CollectCancelled(FpsStatsError):
    """A collection was cancelled before its window elapsed."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass
class _CollectSession:
    """State of the in-flight collection."""

    future: "Future[CollectResult]"
    start_time: float
    period_start: Optional[float] = None
    last_frame_time: float = 0.0
    frames: int = 0
    frame_callback_count: int = 0
    samples: list[int] = field(default_factory=list)
    frame_handle: Any = None
    timer_handle: Any = None


class SampleCollector:
    """Drives the frame-callback loop and produces fps samples."""

    def __init__(
        self,
        host: MonitorHost,
        estimator: RefreshRateEstimator,
        collect_interval: float,
        collect_duration: float,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialize the collector.

        Args:
            host: Frame scheduler and timer provider
            estimator: Shared refresh-rate estimator (written by this collector)
            collect_interval: Aggregation period in ms
            collect_duration: Collection window in ms
            logger: Logger instance (uses global if None)
        """
        self._host = host
        self._estimator = estimator
        self._collect_interval = collect_interval
        self._collect_duration = collect_duration
        self._logger = logger if logger is not None else get_logger()

        self._session: Optional[_CollectSession] = None

    @property
    def is_collecting(self) -> bool:
        """Whether a collection is in flight."""
        return self._session is not None

    def collect(self) -> "Future[CollectResult]":
        """Start a collection, or join the one already in flight.

        Returns:
            Future resolving to a CollectResult when the window elapses,
            or failing with CollectCancelled when cancelled
        """
        if self._session is not None:
            return self._session.future

        session = _CollectSession(future=Future(), start_time=self._host.now_ms())
        session.future.set_running_or_notify_cancel()
        self._session = session

        session.frame_handle = self._host.request_frame(
            lambda timestamp: self._on_frame(session, timestamp)
        )
        session.timer_handle = self._host.call_later(
            self._collect_duration, lambda: self._on_timeout(session)
        )
        self._logger.debug(f"开始采集: 时长={self._collect_duration}ms, 间隔={self._collect_interval}ms")
        return session.future

    def cancel(self, reason: str) -> bool:
        """Reject the in-flight collection.

        Args:
            reason: Description handed to CollectCancelled

        Returns:
            True if a collection was cancelled, False if none was running
        """
        session = self._release()
        if session is None:
            return False

        self._logger.info(f"采集中止: {reason}")
        session.future.set_exception(CollectCancelled(reason))
        return True

    def _on_frame(self, session: _CollectSession, timestamp: float) -> None:
        """Frame callback; a no-op for sessions that are no longer active."""
        if self._session is not session:
            return

        session.frame_callback_count += 1
        if session.period_start is None:
            session.period_start = timestamp
        else:
            session.frames += 1
            self._estimator.observe(timestamp - session.last_frame_time)

            elapsed = timestamp - session.period_start
            if elapsed >= self._collect_interval:
                fps = period_fps(session.frames, elapsed)
                session.samples.append(fps)
                self._logger.sample(fps)
                session.period_start = timestamp
                session.frames = 0

        session.last_frame_time = timestamp
        session.frame_handle = self._host.request_frame(
            lambda ts: self._on_frame(session, ts)
        )

    def _on_timeout(self, session: _CollectSession) -> None:
        """Completion timer; resolves with the samples collected so far."""
        if self._session is not session:
            return

        self._release()
        result = CollectResult(
            samples=tuple(session.samples),
            frame_callback_count=session.frame_callback_count,
        )
        self._logger.debug(
            f"采集结束: 样本数={len(result.samples)}, 帧回调次数={result.frame_callback_count}"
        )
        session.future.set_result(result)

    def _release(self) -> Optional[_CollectSession]:
        """Clear the active slot and withdraw its scheduled callbacks."""
        session = self._session
        if session is None:
            return None

        self._session = None
        self._host.cancel_frame(session.frame_handle)
        self._host.cancel_timer(session.timer_handle)
        return session
