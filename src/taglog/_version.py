"""Version information for taglog."""

__version__ = "0.3.0b0"
__app_name__ = "taglog"
