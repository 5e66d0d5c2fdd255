"""CLI package for rescuetime_data.

This module provides the `rt` command-line interface. All commands
delegate to the RescueTime facade or ConfigManager, adding only I/O
formatting.
"""

from rescuetime_data.cli.main import app

__all__ = ["app"]
