"""Display module for rendering calendar output.

- MonthRenderer: month grid plus per-day agenda
- console: shared Rich console instance
- formatting helpers for status, times and categories
"""

from cli.display.console import console
from cli.display.formatters import format_category, format_status, format_time_range
from cli.display.month_renderer import MonthRenderer

__all__ = [
    "console",
    "MonthRenderer",
    "format_category",
    "format_status",
    "format_time_range",
]
