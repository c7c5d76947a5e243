"""Core data models for fps_stats.

Defines the monitor state machine, event kinds, refresh-rate tiers,
the immutable monitor configuration and the verdict structures handed
to the report callback.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Optional

from .constants import (
    COLLECT_DURATION_MS_DEFAULT,
    COLLECT_INTERVAL_MS_DEFAULT,
    COLLECT_MAX_COUNT_DEFAULT,
    FPS_EX_HIGH,
    FPS_HIGH,
    FPS_LOW,
    FPS_NORMAL,
    LOW_SAMPLE_PERCENT_DEFAULT,
    LOW_THRESHOLD_DEFAULT,
    LOW_THRESHOLD_PERCENT_DEFAULT,
)


class State(Enum):
    """Monitor state machine states."""

    Idle = auto()
    """未监听"""

    Armed = auto()
    """已注册事件,等待触发"""

    Collecting = auto()
    """采集中"""


class EventKind(Enum):
    """Host events the monitor can listen to."""

    LOADED = "loaded"
    """界面首次显示"""

    SCROLL = "scroll"
    """滚动"""

    CLICK = "click"
    """鼠标点击"""

    FOCUS = "focus"
    """获得焦点"""

    BLUR = "blur"
    """失去焦点,只用于取消采集"""


DEFAULT_MONITOR_EVENTS: tuple[EventKind, ...] = (
    EventKind.LOADED,
    EventKind.SCROLL,
    EventKind.CLICK,
    EventKind.FOCUS,
)


class RefreshTier(Enum):
    """Refresh-rate tiers, fastest first.

    The value is the rated fps the tier maps to.
    """

    ULTRA_HIGH = FPS_EX_HIGH
    HIGH = FPS_HIGH
    NORMAL = FPS_NORMAL
    LOW = FPS_LOW


@dataclass(frozen=True)
class TriggerEvent:
    """An interaction or lifecycle event delivered by the host.

    Attributes:
        kind: What happened
        timestamp_ms: Host monotonic time of the event
    """

    kind: EventKind
    timestamp_ms: float = 0.0


@dataclass(frozen=True)
class MonitorConfig:
    """Monitor configuration, immutable after construction.

    Attributes:
        low_threshold: Absolute fps floor; overrides low_threshold_percent when nonzero
        low_threshold_percent: Fraction of the rated fps used as floor
        low_sample_percent: Fraction of low samples needed for a low verdict
        collect_duration: Collection window in ms
        collect_interval: Aggregation period in ms
        collect_max_count: Trigger ceiling, 0 means unlimited
        monitor_events: Event kinds that trigger a collection
        report: Callback receiving a ReportData
    """

    low_threshold: float = LOW_THRESHOLD_DEFAULT
    low_threshold_percent: float = LOW_THRESHOLD_PERCENT_DEFAULT
    low_sample_percent: float = LOW_SAMPLE_PERCENT_DEFAULT
    collect_duration: float = COLLECT_DURATION_MS_DEFAULT
    collect_interval: float = COLLECT_INTERVAL_MS_DEFAULT
    collect_max_count: int = COLLECT_MAX_COUNT_DEFAULT
    monitor_events: tuple[EventKind, ...] = DEFAULT_MONITOR_EVENTS
    report: Optional[Callable[["ReportData"], Any]] = field(default=None, compare=False)


@dataclass(frozen=True)
class CollectResult:
    """Outcome of one collection window.

    Attributes:
        samples: One fps value per completed aggregation period
        frame_callback_count: Total frame callback invocations
    """

    samples: tuple[int, ...]
    frame_callback_count: int


@dataclass(frozen=True)
class FpsStats:
    """Low-fps verdict for one collection window.

    Attributes:
        is_low: Whether the session counts as low fps
        samples: All fps samples
        low_samples: Samples at or below the fps threshold
        low_percent: Share of low samples, rounded to one decimal
        rated_fps: Inferred display refresh rate (0 if unknown)
        frame_callback_count: Total frame callback invocations
    """

    is_low: bool
    samples: tuple[int, ...]
    low_samples: tuple[int, ...]
    low_percent: float
    rated_fps: int
    frame_callback_count: int = 0


@dataclass(frozen=True)
class ReportData:
    """Bundle handed to the report callback.

    Attributes:
        stats: The verdict
        event: Event that triggered the collection
        extra: Environment snapshot, {"scroll_y": (start, end)}
    """

    stats: FpsStats
    event: TriggerEvent
    extra: dict[str, Any] = field(default_factory=dict)
