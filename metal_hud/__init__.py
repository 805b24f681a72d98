"""
Relaunch apps on connected Apple devices with the Metal performance HUD enabled.
"""

__all__ = ["parsing", "devices", "applications", "launcher", "cli"]
__version__ = "0.1.0"
