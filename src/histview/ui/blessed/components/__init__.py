"""Rendering functions for blessed UI."""

from .history_list import HistoryList, RowRenderer, render_history_list, system_clock
from .input import render_input, render_status
from .layout import (
    ColumnKind,
    ColumnSpec,
    calculate_column_widths,
    calculate_layout,
)

__all__ = [
    "ColumnKind",
    "ColumnSpec",
    "HistoryList",
    "RowRenderer",
    "calculate_column_widths",
    "calculate_layout",
    "render_history_list",
    "render_input",
    "render_status",
    "system_clock",
]
