"""fps_stats demo application entry point.

Opens a scrollable test surface next to the monitor's run panel.
Interacting with the surface triggers fps collection; the verdict of
each collection is shown in the panel.
"""

import sys


def main() -> int:
    """Application entry point.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    from fps_stats.controller import create_application

    app, window, controller = create_application()
    window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
