"""Fps monitor with trigger-driven collection.

Implements the monitor lifecycle:
- State machine (Idle/Armed/Collecting)
- Trigger dedup, trigger ceiling and focus-loss cancellation
- Low-fps classification and reporting
"""

from concurrent.futures import Future
from typing import Callable, Iterable, Optional

from .collector import CollectCancelled, SampleCollector
from .constants import REASON_LOST_FOCUS, REASON_MONITOR_STOPPED
from .host import EventHandler, MonitorHost
from .logging import Logger, get_logger
from .model import (
    CollectResult,
    EventKind,
    FpsStats,
    MonitorConfig,
    ReportData,
    State,
    TriggerEvent,
)
from .refresh_rate import RefreshRateEstimator
from .stats import classify_samples, effective_threshold, round_half_up
from .validation import validate_monitor_config


class FpsMonitor:
    """Collects fps samples when the user interacts with a surface and
    reports whether the session ran at low fps.

    An invalid configuration leaves the instance inert: every public
    operation becomes a no-op.
    """

    def __init__(
        self,
        host: MonitorHost,
        config: Optional[MonitorConfig] = None,
        logger: Optional[Logger] = None,
        on_state_changed: Optional[Callable[[State], None]] = None,
    ) -> None:
        """Initialize the monitor.

        Args:
            host: Surface collaborators (events, frames, timers, queries)
            config: Monitor configuration (defaults if None)
            logger: Logger instance (uses global if None)
            on_state_changed: Called with the new state on every transition
        """
        self._host = host
        self._config = config or MonitorConfig()
        self._logger = logger if logger is not None else get_logger()
        self._on_state_changed = on_state_changed

        self._state = State.Idle
        self._handlers: dict[EventKind, EventHandler] = {}
        self._trigger_count = 0
        self._busy = False

        self._estimator = RefreshRateEstimator(logger=self._logger)
        self._collector = SampleCollector(
            host,
            self._estimator,
            collect_interval=self._config.collect_interval,
            collect_duration=self._config.collect_duration,
            logger=self._logger,
        )

        validation = validate_monitor_config(self._config)
        self._valid = validation.valid
        for error in validation.errors:
            self._logger.warning(f"FpsMonitor: 实例初始化失败, {error}")

    @property
    def config(self) -> MonitorConfig:
        """Monitor configuration."""
        return self._config

    @property
    def is_valid(self) -> bool:
        """False when the configuration was rejected."""
        return self._valid

    @property
    def state(self) -> State:
        """Current state."""
        return self._state

    @property
    def trigger_count(self) -> int:
        """Number of triggers that started a collection."""
        return self._trigger_count

    @property
    def rated_fps(self) -> int:
        """Inferred rated fps, 0 while unknown."""
        return self._estimator.current_rate()

    @property
    def estimator(self) -> RefreshRateEstimator:
        return self._estimator

    @property
    def collector(self) -> SampleCollector:
        return self._collector

    @property
    def armed_events(self) -> list[EventKind]:
        """Event kinds with a registered handler."""
        return list(self._handlers)

    def _set_state(self, new_state: State) -> None:
        """Update state and notify."""
        if new_state == self._state:
            return
        old_state = self._state
        self._state = new_state
        self._logger.state_change(old_state.name, new_state.name)
        if self._on_state_changed is not None:
            try:
                self._on_state_changed(new_state)
            except Exception as e:
                self._logger.error(f"状态回调失败: {e}")

    def start_monitor(self) -> None:
        """Register trigger handlers plus the focus-loss handler."""
        if not self._valid:
            return

        for kind in self._config.monitor_events:
            if kind in self._handlers:
                continue
            self._host.add_listener(kind, self._on_trigger)
            self._handlers[kind] = self._on_trigger

        if EventKind.BLUR not in self._handlers:
            self._host.add_listener(EventKind.BLUR, self._on_blur)
            self._handlers[EventKind.BLUR] = self._on_blur

        self._logger.info(
            "开始监听: " + ", ".join(k.value for k in self._config.monitor_events)
        )
        if self._state == State.Idle:
            self._set_state(State.Armed)

    def stop_monitor(self, event_kinds: Optional[Iterable[EventKind]] = None) -> None:
        """Cancel any collection and unregister handlers.

        Args:
            event_kinds: Kinds to unregister; all configured kinds if None or empty
        """
        if not self._valid:
            return

        self._collector.cancel(REASON_MONITOR_STOPPED)

        kinds = list(event_kinds or ()) or list(self._config.monitor_events)
        for kind in kinds:
            handler = self._handlers.pop(kind, None)
            if handler is not None:
                self._host.remove_listener(kind, handler)

        if not any(kind is not EventKind.BLUR for kind in self._handlers):
            handler = self._handlers.pop(EventKind.BLUR, None)
            if handler is not None:
                self._host.remove_listener(EventKind.BLUR, handler)
            self._logger.info("停止监听")
            self._set_state(State.Idle)

    def get_stats(self) -> Optional["Future[FpsStats]"]:
        """Collect (or join the running collection) and classify.

        Returns:
            Future resolving to FpsStats, failing with CollectCancelled if
            the collection is cancelled; None when the monitor is inert
        """
        if not self._valid:
            self._logger.warning("FpsMonitor: 实例无效,无法采集")
            return None

        stats_future: "Future[FpsStats]" = Future()
        stats_future.set_running_or_notify_cancel()

        def classify(collect_future: "Future[CollectResult]") -> None:
            error = collect_future.exception()
            if error is not None:
                stats_future.set_exception(error)
                return
            try:
                stats = self._classify(collect_future.result())
            except Exception as e:
                stats_future.set_exception(e)
                return
            stats_future.set_result(stats)

        self._collector.collect().add_done_callback(classify)
        return stats_future

    def _classify(self, result: CollectResult) -> FpsStats:
        """Apply the low-fps rule to a finished collection."""
        rated_fps = self._estimator.rated_fps()
        threshold = effective_threshold(
            self._config.low_threshold,
            rated_fps,
            self._config.low_threshold_percent,
        )
        return classify_samples(
            result.samples,
            threshold,
            self._config.low_sample_percent,
            rated_fps=rated_fps,
            frame_callback_count=result.frame_callback_count,
        )

    def _on_trigger(self, event: TriggerEvent) -> None:
        """Handle a triggering event; never raises into the host."""
        max_count = self._config.collect_max_count
        if max_count > 0 and self._trigger_count >= max_count:
            self._logger.info(f"已达采集最大次数({max_count}),自动停止监听")
            self.stop_monitor()
            return

        if self._busy:
            return

        try:
            if self._host.is_hidden():
                return

            self._trigger_count += 1
            self._logger.set_progress(self._trigger_count, max_count)
            self._busy = True
            self._set_state(State.Collecting)
            self._logger.debug(f"触发采集: {event.kind.value}")

            scroll_start = self._scroll_y()
            stats_future = self.get_stats()
            stats_future.add_done_callback(
                lambda f: self._on_stats_done(f, event, scroll_start)
            )
        except Exception as e:
            self._logger.error(f"启动采集失败: {e}")
            self._collector.cancel(str(e))
            self._finish_trigger()

    def _on_stats_done(
        self,
        stats_future: "Future[FpsStats]",
        event: TriggerEvent,
        scroll_start: int,
    ) -> None:
        """Report a finished classification, logging any failure."""
        try:
            stats = stats_future.result()
            self._logger.verdict(stats)
            if self._config.report is not None:
                extra = {"scroll_y": (scroll_start, self._scroll_y())}
                self._config.report(ReportData(stats=stats, event=event, extra=extra))
        except CollectCancelled as e:
            self._logger.info(f"本次采集未上报: {e.reason}")
        except Exception as e:
            self._logger.error(f"采集上报失败: {e}")
        finally:
            self._finish_trigger()

    def _finish_trigger(self) -> None:
        self._busy = False
        if self._state == State.Collecting:
            self._set_state(State.Armed if self._handlers else State.Idle)

    def _on_blur(self, event: TriggerEvent) -> None:
        """Focus loss always cancels the running collection."""
        self._collector.cancel(REASON_LOST_FOCUS)

    def _scroll_y(self) -> int:
        """Scroll offset snapshot; 0 when the host cannot tell."""
        query = getattr(self._host, "scroll_y", None)
        if query is None:
            return 0
        return int(round_half_up(query() or 0))
