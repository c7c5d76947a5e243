"""Common UI widgets for the fps_stats demo.

Provides reusable UI components used across the application.
"""

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import (
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSpinBox,
    QWidget,
)

from fps_stats.core.constants import RENDER_LOAD_MAX_MS
from fps_stats.core.model import ReportData


class WarningBanner(QFrame):
    """A dismissible warning banner with yellow background.

    Used to show configuration errors.
    """

    dismissed = Signal()

    def __init__(
        self,
        message: str,
        dismissible: bool = True,
        parent: Optional[QWidget] = None,
    ) -> None:
        """Initialize the warning banner.

        Args:
            message: Warning message to display
            dismissible: Whether to show close button
            parent: Parent widget
        """
        super().__init__(parent)

        self.setAutoFillBackground(True)
        self.setFrameStyle(QFrame.Shape.StyledPanel)

        # Yellow background
        palette = self.palette()
        palette.setColor(QPalette.ColorRole.Window, QColor(255, 243, 205))
        palette.setColor(QPalette.ColorRole.WindowText, QColor(133, 100, 4))
        self.setPalette(palette)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)

        self._label = QLabel(message)
        self._label.setWordWrap(True)
        layout.addWidget(self._label, 1)

        if dismissible:
            close_btn = QPushButton("×")
            close_btn.setFixedSize(24, 24)
            close_btn.setFlat(True)
            close_btn.clicked.connect(self._on_dismiss)
            layout.addWidget(close_btn)

    def _on_dismiss(self) -> None:
        """Handle dismiss button click."""
        self.hide()
        self.dismissed.emit()

    def set_message(self, message: str) -> None:
        """Update the warning message."""
        self._label.setText(message)


class StatusIndicator(QWidget):
    """Status indicator showing current monitor state."""

    # State to color mapping
    STATE_COLORS = {
        "Idle": QColor(128, 128, 128),        # Gray
        "Armed": QColor(0, 123, 255),         # Blue
        "Collecting": QColor(40, 167, 69),    # Green
    }

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self._dot = QLabel("●")
        self._dot.setFixedWidth(20)
        layout.addWidget(self._dot)

        self._text = QLabel("Idle")
        layout.addWidget(self._text, 1)

        self.set_state("Idle")

    def set_state(self, state: str) -> None:
        """Update the displayed state.

        Args:
            state: State name (Idle, Armed, Collecting)
        """
        self._text.setText(state)
        color = self.STATE_COLORS.get(state, QColor(128, 128, 128))
        self._dot.setStyleSheet(f"color: {color.name()};")


class TriggerCountDisplay(QWidget):
    """Trigger count display, i/N or i when unlimited."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._label = QLabel("0")
        self._label.setStyleSheet("font-size: 18px; font-weight: bold;")
        layout.addWidget(self._label)

    def set_count(self, current: int, total: int) -> None:
        self._label.setText(f"{current}/{total}" if total else str(current))


class VerdictDisplay(QFrame):
    """Shows the most recent report."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setFrameStyle(QFrame.Shape.StyledPanel)

        layout = QGridLayout(self)

        self._verdict = QLabel("—")
        self._verdict.setStyleSheet("font-size: 18px; font-weight: bold;")
        layout.addWidget(self._verdict, 0, 0, 1, 2)

        self._fields: dict[str, QLabel] = {}
        rows = [
            ("rated", "额定帧率"),
            ("samples", "样本"),
            ("low_percent", "低帧占比"),
            ("event", "触发事件"),
            ("scroll", "滚动位置"),
        ]
        for row, (key, title) in enumerate(rows, start=1):
            layout.addWidget(QLabel(f"{title}:"), row, 0)
            value = QLabel("—")
            value.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
            layout.addWidget(value, row, 1)
            self._fields[key] = value

    def set_report(self, report: ReportData) -> None:
        """Display a report.

        Args:
            report: Report handed to the monitor's report callback
        """
        stats = report.stats
        if stats.is_low:
            self._verdict.setText("低帧率")
            self._verdict.setStyleSheet("font-size: 18px; font-weight: bold; color: #dc3545;")
        else:
            self._verdict.setText("流畅")
            self._verdict.setStyleSheet("font-size: 18px; font-weight: bold; color: #28a745;")

        self._fields["rated"].setText(str(stats.rated_fps or "未知"))
        self._fields["samples"].setText(", ".join(str(s) for s in stats.samples) or "无")
        self._fields["low_percent"].setText(f"{stats.low_percent:.0%}")
        self._fields["event"].setText(report.event.kind.value)
        start, end = report.extra.get("scroll_y", (0, 0))
        self._fields["scroll"].setText(f"{start} → {end}")


class RenderLoadInput(QWidget):
    """Artificial per-frame render delay for the demo surface."""

    value_changed = Signal(int)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        layout.addWidget(QLabel("渲染负载(ms/帧):"))

        self._spinbox = QSpinBox()
        self._spinbox.setRange(0, RENDER_LOAD_MAX_MS)
        self._spinbox.setSingleStep(5)
        self._spinbox.setValue(0)
        self._spinbox.valueChanged.connect(self.value_changed.emit)
        layout.addWidget(self._spinbox)

    def get_value(self) -> int:
        return self._spinbox.value()
