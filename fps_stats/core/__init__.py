"""Core sampling and classification engine.

This package provides the core functionality for fps_stats:
- Data models (State, EventKind, MonitorConfig, FpsStats, etc.)
- Refresh-rate inference from inter-frame timing
- Periodic fps sampling with a bounded collection window
- Low-fps classification and the trigger-driven monitor
- Logging with circular buffer
"""

from .collector import CollectCancelled, FpsStatsError, SampleCollector
from .constants import (
    COLLECT_DURATION_MS_DEFAULT,
    COLLECT_INTERVAL_MS_DEFAULT,
    FPS_EX_HIGH,
    FPS_HIGH,
    FPS_LOW,
    FPS_NORMAL,
    LOG_BUFFER_SIZE,
    RATED_FRAME_NUM,
    REASON_LOST_FOCUS,
    REASON_MONITOR_STOPPED,
)
from .model import (
    DEFAULT_MONITOR_EVENTS,
    CollectResult,
    EventKind,
    FpsStats,
    MonitorConfig,
    RefreshTier,
    ReportData,
    State,
    TriggerEvent,
)
from .monitor import FpsMonitor
from .refresh_rate import RefreshRateEstimator

__all__ = [
    # Constants
    "FPS_EX_HIGH",
    "FPS_HIGH",
    "FPS_NORMAL",
    "FPS_LOW",
    "RATED_FRAME_NUM",
    "COLLECT_DURATION_MS_DEFAULT",
    "COLLECT_INTERVAL_MS_DEFAULT",
    "REASON_LOST_FOCUS",
    "REASON_MONITOR_STOPPED",
    "LOG_BUFFER_SIZE",
    # Models
    "State",
    "EventKind",
    "RefreshTier",
    "TriggerEvent",
    "MonitorConfig",
    "CollectResult",
    "FpsStats",
    "ReportData",
    "DEFAULT_MONITOR_EVENTS",
    # Engine
    "RefreshRateEstimator",
    "SampleCollector",
    "FpsMonitor",
    "FpsStatsError",
    "CollectCancelled",
]
