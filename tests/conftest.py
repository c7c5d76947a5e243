"""Shared pytest fixtures for the fps_stats test suite.

FakeHost is a manual-clock MonitorHost: tests drive frames and timers
explicitly, so every collection is deterministic.
"""

import itertools
from typing import Any, Callable, Optional

import pytest

from fps_stats.core.logging import Logger
from fps_stats.core.model import EventKind, TriggerEvent


class FakeHost:
    """MonitorHost driven by the test instead of a GUI event loop."""

    def __init__(self) -> None:
        self.now = 0.0
        self.hidden = False
        self.scroll = 0.0
        self.last_vsync: Optional[float] = None
        self._ids = itertools.count(1)
        self.frames: dict[int, Callable[[float], None]] = {}
        self.timers: dict[int, tuple[float, Callable[[], None]]] = {}
        self.listeners: dict[EventKind, list[Callable[[TriggerEvent], None]]] = {}

    # MonitorHost

    def now_ms(self) -> float:
        return self.now

    def request_frame(self, callback: Callable[[float], None]) -> int:
        handle = next(self._ids)
        self.frames[handle] = callback
        return handle

    def cancel_frame(self, handle: Any) -> None:
        self.frames.pop(handle, None)

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        self.timers[handle] = (self.now + delay_ms, callback)
        return handle

    def cancel_timer(self, handle: Any) -> None:
        self.timers.pop(handle, None)

    def add_listener(self, kind: EventKind, handler: Callable[[TriggerEvent], None]) -> None:
        self.listeners.setdefault(kind, []).append(handler)

    def remove_listener(self, kind: EventKind, handler: Callable[[TriggerEvent], None]) -> None:
        handlers = self.listeners.get(kind, [])
        if handler in handlers:
            handlers.remove(handler)

    def is_hidden(self) -> bool:
        return self.hidden

    def scroll_y(self) -> float:
        return self.scroll

    # Test driving

    def listener_count(self, kind: EventKind) -> int:
        return len(self.listeners.get(kind, []))

    def emit(self, kind: EventKind) -> None:
        """Dispatch an event to the registered handlers."""
        event = TriggerEvent(kind=kind, timestamp_ms=self.now)
        for handler in list(self.listeners.get(kind, [])):
            handler(event)

    def fire_timers(self, until_ms: float, inclusive: bool = True) -> None:
        """Fire every timer due before (or at) ``until_ms`` in due order."""
        while True:
            due = [
                (when, handle) for handle, (when, _) in self.timers.items()
                if when < until_ms or (inclusive and when == until_ms)
            ]
            if not due:
                return
            when, handle = min(due)
            _, callback = self.timers.pop(handle)
            self.now = max(self.now, when)
            callback()

    def advance(self, ms: float) -> None:
        """Let time pass without rendering any frame."""
        target = self.now + ms
        self.fire_timers(target)
        self.now = target

    def run_frames(
        self,
        fps: float,
        until_ms: float,
        origin_ms: float = 0.0,
    ) -> int:
        """Render frames on a steady vsync grid up to ``until_ms``.

        Grid tick n is ``origin + n * 1000 / fps``; ticks before the
        current time or not after the last rendered frame are skipped.
        A frame and a timer due at the same instant run frame first.
        Timers due up to ``until_ms`` are fired at the end.

        Returns:
            Number of frames rendered
        """
        rendered = 0
        for n in itertools.count():
            t = origin_ms + n * 1000 / fps
            if t > until_ms:
                break
            if t < self.now or (self.last_vsync is not None and t <= self.last_vsync):
                continue
            self.fire_timers(t, inclusive=False)
            self.last_vsync = t
            self.now = t
            callbacks = self.frames
            self.frames = {}
            for callback in callbacks.values():
                callback(t)
            rendered += 1
        self.fire_timers(until_ms)
        self.now = max(self.now, until_ms)
        return rendered


@pytest.fixture
def host() -> FakeHost:
    """Manual-clock host starting at t=0."""
    return FakeHost()


@pytest.fixture
def logger() -> Logger:
    """Fresh logger so tests can inspect their own entries."""
    return Logger()
