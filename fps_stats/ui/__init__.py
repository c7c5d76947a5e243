"""UI components for the fps_stats demo.

This package provides PySide6-based UI components:
- MainWindow: Main application window
- DemoSurface: Scrollable surface whose fps is measured
- RunPanel: Settings, controls, verdict and log
- Common widgets: Banner, indicators, verdict display
"""

from .demo_surface import DemoSurface
from .main_window import MainWindow
from .run_panel import LogView, RunPanel
from .widgets import (
    RenderLoadInput,
    StatusIndicator,
    TriggerCountDisplay,
    VerdictDisplay,
    WarningBanner,
)

__all__ = [
    "MainWindow",
    "DemoSurface",
    "RunPanel",
    "LogView",
    "WarningBanner",
    "StatusIndicator",
    "TriggerCountDisplay",
    "VerdictDisplay",
    "RenderLoadInput",
]
