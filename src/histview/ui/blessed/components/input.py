"""Query input and status line rendering."""

from ..helpers.buffer import CellBuffer
from ..state import UIState
from ..styles.palette import Meaning, Style, Theme

PROMPT = "> "
CURSOR = "█"


def render_input(
    buffer: CellBuffer, state: UIState, theme: Theme, y: int, width: int
) -> None:
    """
    Render the query line with prompt and block cursor.

    Long queries scroll horizontally so the cursor stays visible.

    Args:
        buffer: Target cell grid
        state: Current UI state
        theme: Active theme
        y: Row for the input line
        width: Available width
    """
    x = buffer.write(0, y, PROMPT, theme.style_for(Meaning.ALERT_INFO), width)

    room = max(0, width - x - len(CURSOR))
    visible_query = state.query[-room:] if room else ""
    x += buffer.write(x, y, visible_query, theme.style_for(Meaning.BASE), room)
    buffer.write(x, y, CURSOR, Style(bold=True), width - x)


def render_status(
    buffer: CellBuffer, state: UIState, theme: Theme, y: int, width: int
) -> None:
    """Render search mode and match counts, right-aligned."""
    status = (
        f"[{state.search_mode.value}] {len(state.filtered)}/{len(state.items)}"
    )
    x = max(0, width - len(status))
    buffer.write(x, y, status, theme.style_for(Meaning.ANNOTATION), width - x)
