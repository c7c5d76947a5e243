"""Application controller that wires the UI to the fps monitor.

Builds a monitor from the run panel settings, forwards state changes
and reports to the window, and stops the monitor on request.
"""

import dataclasses
from typing import Optional

from PySide6.QtCore import QObject, Slot
from PySide6.QtWidgets import QApplication

from fps_stats.core.logging import get_logger
from fps_stats.core.model import MonitorConfig, ReportData, State
from fps_stats.core.monitor import FpsMonitor
from fps_stats.core.qt_host import QtSurfaceHost
from fps_stats.core.validation import validate_monitor_config
from fps_stats.ui.main_window import MainWindow


class ApplicationController(QObject):
    """Controller that connects the UI to the fps monitor.

    Responsibilities:
    - Create the Qt host for the demo surface
    - Validate settings and (re)create the monitor on start
    - Forward state changes and reports to the window
    """

    def __init__(
        self,
        window: MainWindow,
        parent: Optional[QObject] = None,
    ) -> None:
        """Initialize the controller.

        Args:
            window: Main application window
            parent: Parent QObject
        """
        super().__init__(parent)

        self._window = window
        self._logger = get_logger()
        self._host = QtSurfaceHost(window.surface, self)
        self._monitor: Optional[FpsMonitor] = None

        window.surface.verticalScrollBar().valueChanged.connect(self._host.notify_scrolled)
        self._connect_signals()

    @property
    def monitor(self) -> Optional[FpsMonitor]:
        return self._monitor

    def _connect_signals(self) -> None:
        """Connect window signals."""
        self._window.start_monitor.connect(self._on_start_requested)
        self._window.stop_monitor.connect(self._on_stop_requested)

    @Slot(MonitorConfig)
    def _on_start_requested(self, config: MonitorConfig) -> None:
        """Handle start request from UI.

        Args:
            config: Settings from the run panel
        """
        validation = validate_monitor_config(config)
        if not validation.valid:
            self._window.set_config_warning(validation.errors)
            self._logger.error("配置无效: " + "; ".join(validation.errors))
            return

        if self._monitor is not None:
            self._monitor.stop_monitor()

        config = dataclasses.replace(config, report=self._on_report)
        self._monitor = FpsMonitor(
            self._host,
            config,
            logger=self._logger,
            on_state_changed=self._on_state_changed,
        )
        self._monitor.start_monitor()
        self._window.update_trigger_count(0, config.collect_max_count)

    @Slot()
    def _on_stop_requested(self) -> None:
        """Handle stop request."""
        if self._monitor is not None:
            self._monitor.stop_monitor()

    def _on_state_changed(self, state: State) -> None:
        self._window.update_state(state)
        if self._monitor is not None:
            self._window.update_trigger_count(
                self._monitor.trigger_count,
                self._monitor.config.collect_max_count,
            )

    def _on_report(self, report: ReportData) -> None:
        self._window.show_report(report)


def create_application() -> tuple[QApplication, MainWindow, ApplicationController]:
    """Create and wire up the complete application.

    Returns:
        Tuple of (QApplication, MainWindow, ApplicationController)
    """
    import sys

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("fps_stats")
    app.setApplicationVersion("0.1.0")
    app.setOrganizationName("fps_stats")

    window = MainWindow()
    controller = ApplicationController(window)

    return app, window, controller
