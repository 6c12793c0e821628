"""Display module for rendering git output.

This module provides renderers for various display contexts:
- TableRenderer: Status, history, numstat and identity tables
- DiffRenderer: Unified diff visualization

It also provides:
- console: Shared Rich console instance
- Formatting functions for dates, paths and status codes
"""

from cli.display.console import console
from cli.display.diff_renderer import DiffRenderer
from cli.display.formatters import (
    describe_change,
    format_datetime,
    format_path,
    format_relative_time,
    format_status_code,
)
from cli.display.table_renderer import TableRenderer

__all__ = [
    # Console
    "console",
    # Renderers
    "TableRenderer",
    "DiffRenderer",
    # Formatters
    "describe_change",
    "format_datetime",
    "format_path",
    "format_relative_time",
    "format_status_code",
]
