"""Main window for the fps_stats demo.

Combines the measured surface and the run panel.
"""

from typing import Optional

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtWidgets import (
    QMainWindow,
    QMessageBox,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from fps_stats.core.logging import get_logger
from fps_stats.core.model import MonitorConfig, ReportData, State

from .demo_surface import DemoSurface
from .run_panel import RunPanel
from .widgets import WarningBanner


class MainWindow(QMainWindow):
    """Main application window.

    Contains:
    - Demo surface (left), the widget whose fps is measured
    - Run panel with settings, controls, verdict and log (right)
    """

    start_monitor = Signal(MonitorConfig)
    stop_monitor = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.setWindowTitle("fps_stats - 帧率监测")
        self.setMinimumSize(900, 600)

        self._logger = get_logger()

        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self) -> None:
        """Setup the main UI layout."""
        central = QWidget()
        self.setCentralWidget(central)

        main_layout = QVBoxLayout(central)

        # Config warning banner (shown if needed)
        self._config_banner = WarningBanner("", dismissible=True)
        self._config_banner.hide()
        main_layout.addWidget(self._config_banner)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        self._surface = DemoSurface()
        splitter.addWidget(self._surface)

        self._run_panel = RunPanel()
        splitter.addWidget(self._run_panel)

        splitter.setSizes([540, 360])

        main_layout.addWidget(splitter)

    def _connect_signals(self) -> None:
        """Connect UI signals."""
        self._run_panel.start_requested.connect(self._on_start_requested)
        self._run_panel.stop_requested.connect(self.stop_monitor.emit)
        self._run_panel.render_load_changed.connect(self._surface.set_render_load)

        self._run_panel.set_log_buffer(self._logger.buffer)

    @property
    def surface(self) -> DemoSurface:
        """The widget whose rendering is measured."""
        return self._surface

    def _on_start_requested(self) -> None:
        self._config_banner.hide()
        self.start_monitor.emit(self._run_panel.build_config())

    # Updates from controller

    @Slot(State)
    def update_state(self, state: State) -> None:
        self._run_panel.set_state(state)

    def update_trigger_count(self, current: int, total: int) -> None:
        self._run_panel.set_trigger_count(current, total)

    def show_report(self, report: ReportData) -> None:
        self._run_panel.set_report(report)

    def set_config_warning(self, errors: list[str]) -> None:
        """Show configuration errors in the banner."""
        if errors:
            self._config_banner.set_message("\n".join(errors))
            self._config_banner.show()

    def show_error_dialog(self, title: str, message: str) -> None:
        """Show error dialog.

        Args:
            title: Dialog title
            message: Error message
        """
        QMessageBox.critical(self, title, message)

    def closeEvent(self, event) -> None:
        """Stop monitoring before closing."""
        self.stop_monitor.emit()
        event.accept()
