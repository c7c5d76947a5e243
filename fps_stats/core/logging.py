"""Event-loop logging with a circular buffer.

Provides the logging interface for the fps monitor that:
- Uses a circular buffer (max 200 entries) to prevent memory growth
- Pushes each entry to listeners such as the UI log view
- Formats log entries with timestamps and monitor context
"""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Callable, Optional

from .constants import LOG_BUFFER_SIZE

if TYPE_CHECKING:
    from .model import FpsStats


class LogLevel(Enum):
    """Log entry severity levels."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()


@dataclass
class LogEntry:
    """A single log entry.

    Attributes:
        timestamp: When the entry was created
        level: Severity level
        message: Log message content
        state: Current monitor state (if applicable)
        progress: Trigger count as (i, N) tuple, N=0 when unlimited (if applicable)
        fps: Sample value (if applicable)
        rated_fps: Inferred rated fps (if applicable)
    """

    timestamp: datetime
    level: LogLevel
    message: str
    state: Optional[str] = None
    progress: Optional[tuple[int, int]] = None
    fps: Optional[int] = None
    rated_fps: Optional[int] = None

    def format(self) -> str:
        """Format the log entry as a string."""
        time_str = self.timestamp.strftime("%H:%M:%S")
        parts = [f"[{time_str}]"]

        if self.level in (LogLevel.WARNING, LogLevel.ERROR):
            parts.append(f"[{self.level.name}]")

        if self.state:
            parts.append(f"[{self.state}]")

        if self.progress:
            i, n = self.progress
            parts.append(f"[{i}/{n}]" if n else f"[{i}]")

        parts.append(self.message)

        if self.fps is not None:
            parts.append(f"fps={self.fps}")

        if self.rated_fps is not None:
            parts.append(f"rated={self.rated_fps}")

        return " ".join(parts)


@dataclass
class LogBuffer:
    """Circular buffer of log entries read by the log view.

    The monitor and the UI share one event loop, so entries are appended
    and read on the same thread. A deque with maxlen drops the oldest
    entry once full.
    """

    max_size: int = LOG_BUFFER_SIZE
    _buffer: deque[LogEntry] = field(default_factory=deque)
    _listeners: list[Callable[[LogEntry], None]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._buffer = deque(self._buffer, maxlen=self.max_size)

    def add(self, entry: LogEntry) -> None:
        """Append an entry and notify listeners."""
        self._buffer.append(entry)

        # Listeners may detach themselves while being notified
        for listener in list(self._listeners):
            try:
                listener(entry)
            except Exception:
                pass  # A broken view must not stop logging

    def get_all(self) -> list[LogEntry]:
        """Entries from oldest to newest."""
        return list(self._buffer)

    def get_recent(self, count: int) -> list[LogEntry]:
        """The newest ``count`` entries, oldest first."""
        if count <= 0:
            return []
        return list(self._buffer)[-count:]

    def clear(self) -> None:
        self._buffer.clear()

    def add_listener(self, callback: Callable[[LogEntry], None]) -> None:
        """Add a listener to be notified of new entries."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[LogEntry], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def __len__(self) -> int:
        return len(self._buffer)


class Logger:
    """Main logging interface for the fps monitor.

    Provides convenience methods for logging at different levels
    with optional context (state, trigger progress, fps, rated fps).
    """

    def __init__(self, buffer: Optional[LogBuffer] = None) -> None:
        """Initialize logger with optional existing buffer."""
        self._buffer = buffer if buffer is not None else LogBuffer()
        self._current_state: Optional[str] = None
        self._current_progress: Optional[tuple[int, int]] = None

    @property
    def buffer(self) -> LogBuffer:
        """Access the underlying log buffer."""
        return self._buffer

    def set_state(self, state: str) -> None:
        """Set the current state for subsequent log entries."""
        self._current_state = state

    def set_progress(self, current: int, total: int) -> None:
        """Set the current trigger progress for subsequent log entries.

        Args:
            current: Trigger count so far
            total: Trigger ceiling (0 when unlimited)
        """
        self._current_progress = (current, total)

    def clear_context(self) -> None:
        """Clear current state and progress context."""
        self._current_state = None
        self._current_progress = None

    def _log(
        self,
        level: LogLevel,
        message: str,
        fps: Optional[int] = None,
        rated_fps: Optional[int] = None,
    ) -> LogEntry:
        """Internal logging method."""
        entry = LogEntry(
            timestamp=datetime.now(),
            level=level,
            message=message,
            state=self._current_state,
            progress=self._current_progress,
            fps=fps,
            rated_fps=rated_fps,
        )
        self._buffer.add(entry)
        return entry

    def debug(self, message: str, **kwargs: Any) -> LogEntry:
        """Log a debug message."""
        return self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> LogEntry:
        """Log an info message."""
        return self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> LogEntry:
        """Log a warning message."""
        return self._log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> LogEntry:
        """Log an error message."""
        return self._log(LogLevel.ERROR, message, **kwargs)

    def state_change(self, old_state: str, new_state: str) -> LogEntry:
        """Log a state transition."""
        self.set_state(new_state)
        return self.info(f"状态变化: {old_state} → {new_state}")

    def sample(self, fps: int) -> LogEntry:
        """Log one completed aggregation period."""
        return self.debug("采样", fps=fps)

    def verdict(self, stats: "FpsStats") -> LogEntry:
        """Log a classification result."""
        label = "低帧率" if stats.is_low else "正常"
        msg = (
            f"采集完成: {label}, 样本数={len(stats.samples)}, "
            f"低帧样本数={len(stats.low_samples)}, 低帧占比={stats.low_percent}"
        )
        return self.info(msg, rated_fps=stats.rated_fps)


# Global logger instance for convenience
_global_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """Get the global logger instance, creating one if needed."""
    global _global_logger
    if _global_logger is None:
        _global_logger = Logger()
    return _global_logger


def set_logger(logger: Logger) -> None:
    """Set the global logger instance."""
    global _global_logger
    _global_logger = logger
