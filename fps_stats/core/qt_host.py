"""MonitorHost implementation for a PySide6 widget.

Frame callbacks are tied to the widget's paint events: requesting a
frame schedules an update() and the callback fires when the next Paint
event reaches the widget, timestamped with a monotonic QElapsedTimer.
Interaction events are picked up with an event filter on the surface
(its viewport for scroll areas) and its top-level window.
"""

import itertools
from typing import Any, Callable, Optional

from PySide6.QtCore import QElapsedTimer, QEvent, QObject, QTimer
from PySide6.QtWidgets import QAbstractScrollArea, QWidget

from .host import EventHandler, FrameCallback
from .model import EventKind, TriggerEvent

# Events picked up on the surface (or its viewport)
_SURFACE_EVENTS: dict[QEvent.Type, EventKind] = {
    QEvent.Type.MouseButtonPress: EventKind.CLICK,
    QEvent.Type.Wheel: EventKind.SCROLL,
    QEvent.Type.FocusIn: EventKind.FOCUS,
}

# Events picked up on the top-level window
_WINDOW_EVENTS: dict[QEvent.Type, EventKind] = {
    QEvent.Type.WindowActivate: EventKind.FOCUS,
    QEvent.Type.WindowDeactivate: EventKind.BLUR,
}


class QtSurfaceHost(QObject):
    """Adapts a QWidget to the MonitorHost protocol."""

    def __init__(self, surface: QWidget, parent: Optional[QObject] = None) -> None:
        """Initialize the host.

        Args:
            surface: Widget whose rendering is measured
            parent: Parent QObject
        """
        super().__init__(parent)

        self._surface = surface
        self._clock = QElapsedTimer()
        self._clock.start()

        self._handle_ids = itertools.count(1)
        self._frame_callbacks: dict[int, FrameCallback] = {}
        self._listeners: dict[EventKind, list[EventHandler]] = {}
        self._loaded = False

        self._paint_target = self._event_target(surface)
        self._paint_target.installEventFilter(self)
        surface.window().installEventFilter(self)

    @staticmethod
    def _event_target(surface: QWidget) -> QWidget:
        """Scroll areas paint and receive input through their viewport."""
        if isinstance(surface, QAbstractScrollArea):
            return surface.viewport()
        return surface

    @property
    def surface(self) -> QWidget:
        return self._surface

    # Clock and scheduling

    def now_ms(self) -> float:
        return self._clock.nsecsElapsed() / 1_000_000

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._handle_ids)
        self._frame_callbacks[handle] = callback
        self._paint_target.update()
        return handle

    def cancel_frame(self, handle: Any) -> None:
        self._frame_callbacks.pop(handle, None)

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> QTimer:
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.timeout.connect(callback)
        timer.start(max(0, int(delay_ms)))
        return timer

    def cancel_timer(self, handle: Any) -> None:
        if isinstance(handle, QTimer):
            handle.stop()
            handle.deleteLater()

    # Events

    def add_listener(self, kind: EventKind, handler: EventHandler) -> None:
        handlers = self._listeners.setdefault(kind, [])
        if handler not in handlers:
            handlers.append(handler)

    def remove_listener(self, kind: EventKind, handler: EventHandler) -> None:
        handlers = self._listeners.get(kind, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, kind: EventKind) -> None:
        """Deliver a synthetic event of ``kind`` to its listeners."""
        event = TriggerEvent(kind=kind, timestamp_ms=self.now_ms())
        for handler in list(self._listeners.get(kind, [])):
            handler(event)

    def notify_scrolled(self, _value: int = 0) -> None:
        """Slot for scroll bar changes that do not come from the wheel."""
        self.emit(EventKind.SCROLL)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        event_type = event.type()

        if watched is self._paint_target:
            if event_type == QEvent.Type.Paint:
                self._dispatch_frame()
            elif event_type in _SURFACE_EVENTS:
                self.emit(_SURFACE_EVENTS[event_type])

        if watched is self._surface.window():
            if event_type == QEvent.Type.Show and not self._loaded:
                self._loaded = True
                self.emit(EventKind.LOADED)
            elif event_type in _WINDOW_EVENTS:
                self.emit(_WINDOW_EVENTS[event_type])

        return False

    def _dispatch_frame(self) -> None:
        """Run every pending frame callback with the current timestamp."""
        if not self._frame_callbacks:
            return
        timestamp = self.now_ms()
        callbacks = self._frame_callbacks
        self._frame_callbacks = {}
        for callback in callbacks.values():
            callback(timestamp)

    # Queries

    def is_hidden(self) -> bool:
        window = self._surface.window()
        return not self._surface.isVisible() or window.isMinimized()

    def scroll_y(self) -> float:
        if isinstance(self._surface, QAbstractScrollArea):
            return float(self._surface.verticalScrollBar().value())
        return 0.0
