"""Host surface interface consumed by the monitor.

The sampling engine never talks to a GUI toolkit directly. Everything
it needs from the surface being measured goes through this protocol:
a monotonic clock, a next-frame scheduler, a coarse timer, an
interaction event source and two best-effort environment queries.
"""

from typing import Any, Callable, Protocol

from .model import EventKind, TriggerEvent

FrameCallback = Callable[[float], None]
EventHandler = Callable[[TriggerEvent], None]


class MonitorHost(Protocol):
    """Collaborators provided by the surface being monitored."""

    def now_ms(self) -> float:
        """Monotonic time in milliseconds."""
        ...

    def request_frame(self, callback: FrameCallback) -> Any:
        """Call ``callback(timestamp_ms)`` once, on the next rendered frame.

        Returns a handle for cancel_frame.
        """
        ...

    def cancel_frame(self, handle: Any) -> None:
        """Withdraw a pending frame callback. Unknown handles are ignored."""
        ...

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Any:
        """Call ``callback()`` once after ``delay_ms``. Returns a handle."""
        ...

    def cancel_timer(self, handle: Any) -> None:
        """Withdraw a pending timer. Unknown handles are ignored."""
        ...

    def add_listener(self, kind: EventKind, handler: EventHandler) -> None:
        """Deliver events of ``kind`` to ``handler``."""
        ...

    def remove_listener(self, kind: EventKind, handler: EventHandler) -> None:
        """Stop delivering events of ``kind`` to ``handler``."""
        ...

    def is_hidden(self) -> bool:
        """Whether the surface is currently hidden or minimized."""
        ...

    def scroll_y(self) -> float:
        """Vertical scroll offset, 0 when the surface does not scroll."""
        ...
