"""Frame-rate smoothness monitoring for interactive Qt surfaces."""

__version__ = "0.1.0"
