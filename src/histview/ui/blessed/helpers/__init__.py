"""Blessed UI helper functions."""

from .buffer import CellBuffer, DrawCursor, Rect
from .scrolling import ListState, calculate_items_bounds
from .selection import RenderMode, SelectionMode, SelectionStyler
from .terminal import flush_buffer, write_at

__all__ = [
    "CellBuffer",
    "DrawCursor",
    "ListState",
    "Rect",
    "calculate_items_bounds",
    "RenderMode",
    "SelectionMode",
    "SelectionStyler",
    "flush_buffer",
    "write_at",
]
