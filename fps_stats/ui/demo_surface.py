"""Scrollable test surface whose rendering the monitor measures."""

import time
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QPainter
from PySide6.QtWidgets import QAbstractScrollArea, QWidget

ROW_HEIGHT = 40
ROW_COUNT = 500


class DemoSurface(QAbstractScrollArea):
    """Draws striped rows on its viewport.

    A configurable sleep inside paintEvent simulates expensive rendering
    so low-fps sessions can be produced on demand.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self._render_load_ms = 0
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.verticalScrollBar().setSingleStep(ROW_HEIGHT // 2)
        self._update_scroll_range()

    @property
    def render_load_ms(self) -> int:
        return self._render_load_ms

    def set_render_load(self, ms: int) -> None:
        """Set the artificial delay added to every paint."""
        self._render_load_ms = max(0, ms)

    def _update_scroll_range(self) -> None:
        content_height = ROW_HEIGHT * ROW_COUNT
        bar = self.verticalScrollBar()
        bar.setPageStep(self.viewport().height())
        bar.setRange(0, max(0, content_height - self.viewport().height()))

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self._update_scroll_range()

    def scrollContentsBy(self, dx: int, dy: int) -> None:
        self.viewport().update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self.viewport())
        offset = self.verticalScrollBar().value()
        width = self.viewport().width()
        height = self.viewport().height()

        first = offset // ROW_HEIGHT
        last = min(ROW_COUNT, (offset + height) // ROW_HEIGHT + 1)
        for row in range(first, last):
            y = row * ROW_HEIGHT - offset
            color = QColor(245, 245, 245) if row % 2 else QColor(225, 232, 240)
            painter.fillRect(0, y, width, ROW_HEIGHT, color)
            painter.drawText(12, y + ROW_HEIGHT // 2 + 5, f"Row {row + 1}")
        painter.end()

        if self._render_load_ms:
            time.sleep(self._render_load_ms / 1000)
