"""Run panel for the fps monitor.

Shows monitor settings, start/stop controls, current state, the last
verdict and the log.
"""

from typing import Optional

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QCheckBox,
    QDoubleSpinBox,
    QFormLayout,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPlainTextEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from fps_stats.core.constants import (
    COLLECT_DURATION_MS_DEFAULT,
    COLLECT_INTERVAL_MS_DEFAULT,
    FPS_NORMAL,
    LOG_BUFFER_SIZE,
    LOW_SAMPLE_PERCENT_DEFAULT,
    LOW_THRESHOLD_PERCENT_DEFAULT,
)
from fps_stats.core.logging import LogBuffer, LogEntry
from fps_stats.core.model import DEFAULT_MONITOR_EVENTS, EventKind, MonitorConfig, ReportData, State

from .widgets import RenderLoadInput, StatusIndicator, TriggerCountDisplay, VerdictDisplay


class LogView(QPlainTextEdit):
    """Log viewer with circular buffer display."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setReadOnly(True)
        self.setMaximumBlockCount(LOG_BUFFER_SIZE)
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.WidgetWidth)
        self.setStyleSheet(
            "font-family: Consolas, Monaco, monospace; font-size: 11px;"
        )

    def add_entry(self, entry: LogEntry) -> None:
        """Add a log entry."""
        self.appendPlainText(entry.format())

    def set_entries(self, entries: list[LogEntry]) -> None:
        """Set all log entries."""
        self.clear()
        for entry in entries:
            self.appendPlainText(entry.format())


class RunPanel(QWidget):
    """Control panel for the fps monitor."""

    start_requested = Signal()
    stop_requested = Signal()
    render_load_changed = Signal(int)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setMinimumWidth(350)

        self._setup_ui()

    def _setup_ui(self) -> None:
        """Setup the UI layout."""
        layout = QVBoxLayout(self)
        layout.setSpacing(8)

        # Status section
        status_frame = QFrame()
        status_frame.setFrameStyle(QFrame.Shape.StyledPanel)
        status_layout = QHBoxLayout(status_frame)

        self._status = StatusIndicator()
        status_layout.addWidget(self._status)
        status_layout.addStretch()

        self._trigger_count = TriggerCountDisplay()
        status_layout.addWidget(self._trigger_count)

        layout.addWidget(status_frame)

        # Settings section
        settings_frame = QFrame()
        settings_frame.setFrameStyle(QFrame.Shape.StyledPanel)
        form = QFormLayout(settings_frame)

        self._low_threshold = QSpinBox()
        self._low_threshold.setRange(0, FPS_NORMAL - 1)
        self._low_threshold.setSpecialValueText("按比例")
        form.addRow("低帧阈值(fps):", self._low_threshold)

        self._low_threshold_percent = self._fraction_box(LOW_THRESHOLD_PERCENT_DEFAULT)
        form.addRow("低帧阈值比例:", self._low_threshold_percent)

        self._low_sample_percent = self._fraction_box(LOW_SAMPLE_PERCENT_DEFAULT)
        form.addRow("低帧样本比例:", self._low_sample_percent)

        self._collect_duration = QSpinBox()
        self._collect_duration.setRange(100, 600_000)
        self._collect_duration.setSingleStep(1000)
        self._collect_duration.setValue(int(COLLECT_DURATION_MS_DEFAULT))
        form.addRow("采集时长(ms):", self._collect_duration)

        self._collect_interval = QSpinBox()
        self._collect_interval.setRange(100, 600_000)
        self._collect_interval.setSingleStep(100)
        self._collect_interval.setValue(int(COLLECT_INTERVAL_MS_DEFAULT))
        form.addRow("采集间隔(ms):", self._collect_interval)

        self._collect_max_count = QSpinBox()
        self._collect_max_count.setRange(0, 10_000)
        self._collect_max_count.setSpecialValueText("不限")
        form.addRow("最大采集次数:", self._collect_max_count)

        events_row = QHBoxLayout()
        self._event_boxes: dict[EventKind, QCheckBox] = {}
        for kind in DEFAULT_MONITOR_EVENTS:
            box = QCheckBox(kind.value)
            box.setChecked(True)
            events_row.addWidget(box)
            self._event_boxes[kind] = box
        form.addRow("触发事件:", events_row)

        self._settings_frame = settings_frame
        layout.addWidget(settings_frame)

        self._render_load = RenderLoadInput()
        self._render_load.value_changed.connect(self.render_load_changed.emit)
        layout.addWidget(self._render_load)

        # Control buttons
        control_layout = QHBoxLayout()

        self._start_btn = QPushButton("开始监听")
        self._start_btn.setStyleSheet(
            "background-color: #28a745; color: white; font-weight: bold;"
        )
        self._start_btn.clicked.connect(self.start_requested.emit)
        control_layout.addWidget(self._start_btn)

        self._stop_btn = QPushButton("停止监听")
        self._stop_btn.setStyleSheet("background-color: #dc3545; color: white;")
        self._stop_btn.clicked.connect(self.stop_requested.emit)
        self._stop_btn.setEnabled(False)
        control_layout.addWidget(self._stop_btn)

        layout.addLayout(control_layout)

        # Verdict section
        verdict_label = QLabel("最近一次结果")
        verdict_label.setStyleSheet("font-weight: bold;")
        layout.addWidget(verdict_label)

        self._verdict = VerdictDisplay()
        layout.addWidget(self._verdict)

        # Log section
        log_label = QLabel("日志")
        log_label.setStyleSheet("font-weight: bold;")
        layout.addWidget(log_label)

        self._log_view = LogView()
        layout.addWidget(self._log_view, 1)

    @staticmethod
    def _fraction_box(value: float) -> QDoubleSpinBox:
        box = QDoubleSpinBox()
        box.setRange(0.0, 1.0)
        box.setDecimals(2)
        box.setSingleStep(0.05)
        box.setValue(value)
        return box

    def build_config(self) -> MonitorConfig:
        """Monitor configuration from the current inputs (report unset)."""
        return MonitorConfig(
            low_threshold=self._low_threshold.value(),
            low_threshold_percent=self._low_threshold_percent.value(),
            low_sample_percent=self._low_sample_percent.value(),
            collect_duration=self._collect_duration.value(),
            collect_interval=self._collect_interval.value(),
            collect_max_count=self._collect_max_count.value(),
            monitor_events=tuple(
                kind for kind, box in self._event_boxes.items() if box.isChecked()
            ),
        )

    # State updates

    def set_state(self, state: State) -> None:
        """Update displayed state.

        Args:
            state: Current monitor state
        """
        self._status.set_state(state.name)

        is_running = state != State.Idle
        self._start_btn.setEnabled(not is_running)
        self._stop_btn.setEnabled(is_running)
        self._settings_frame.setEnabled(not is_running)

    def set_trigger_count(self, current: int, total: int) -> None:
        self._trigger_count.set_count(current, total)

    def set_report(self, report: ReportData) -> None:
        self._verdict.set_report(report)

    # Logging

    def add_log_entry(self, entry: LogEntry) -> None:
        """Add a log entry to the log view."""
        self._log_view.add_entry(entry)

    def set_log_buffer(self, buffer: LogBuffer) -> None:
        """Set log buffer and display existing entries.

        Args:
            buffer: Log buffer to use
        """
        self._log_view.set_entries(buffer.get_all())
        buffer.add_listener(self.add_log_entry)
