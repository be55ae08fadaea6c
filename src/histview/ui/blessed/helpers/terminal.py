"""Terminal output utilities that prevent rendering artifacts."""

import sys

from blessed import Terminal

from ..styles.palette import Color, Style
from .buffer import CellBuffer


def write_at(
    term: Terminal, x: int, y: int, content: str, *, clear: bool = True
) -> None:
    """Write content at position, clearing the rest of the line by default.

    Args:
        term: Blessed terminal instance
        x: Column position (0-indexed)
        y: Row position (0-indexed)
        content: Text to write (can include terminal formatting)
        clear: Whether to clear to end of line (default True). Set to False
               only when intentionally appending to existing content.
    """
    if clear:
        sys.stdout.write(term.move_xy(x, y) + term.clear_eol + content)
    else:
        sys.stdout.write(term.move_xy(x, y) + content)


def _color_sequence(term: Terminal, color: Color, background: bool) -> str:
    if color is None:
        return ""
    if isinstance(color, tuple):
        r, g, b = color
        return term.on_color_rgb(r, g, b) if background else term.color_rgb(r, g, b)
    name = f"on_{color}" if background else color
    return getattr(term, name, "")


def style_sequence(term: Terminal, style: Style) -> str:
    """Terminal escape sequence that switches on a cell style."""
    parts = [
        _color_sequence(term, style.fg, background=False),
        _color_sequence(term, style.bg, background=True),
    ]
    if style.bold:
        parts.append(term.bold)
    if style.reverse:
        parts.append(term.reverse)
    return "".join(str(part) for part in parts)


def flush_buffer(term: Terminal, buffer: CellBuffer, origin_y: int = 0) -> None:
    """
    Paint a composed frame to the terminal, one styled run at a time.

    Args:
        term: Blessed terminal instance
        buffer: Frame to paint
        origin_y: Screen row of the buffer's first row
    """
    for y in range(buffer.height):
        line = "".join(
            style_sequence(term, style) + text + term.normal
            for text, style in buffer.runs(y)
        )
        write_at(term, 0, origin_y + y, line)
    sys.stdout.flush()
