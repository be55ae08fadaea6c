"""Main event loop and entry point for blessed UI."""

from typing import Optional

from blessed import Terminal
from loguru import logger

from histview.core.config import Config
from histview.domain.history import HistoryItem
from histview.domain.search import HighlightResolver, engine_for

from .components import (
    calculate_layout,
    render_history_list,
    render_input,
    render_status,
    system_clock,
)
from .components.history_list import Clock
from .events import handle_key
from .helpers import CellBuffer, Rect, flush_buffer
from .state import UIState, create_initial_state
from .styles.palette import Theme

# Redraw at least this often so the "ago" column stays current
IDLE_REDRAW_SECONDS = 1.0


def render_frame(
    state: UIState,
    config: Config,
    theme: Theme,
    width: int,
    height: int,
    clock: Clock = system_clock,
) -> CellBuffer:
    """
    Pure function (apart from list scroll state): compose one full frame.

    Args:
        state: Current UI state; its ListState is updated by the list render
        config: Validated configuration
        theme: Theme built from the configuration
        width: Frame width
        height: Frame height
        clock: Source of "now" for the time column

    Returns:
        Composed frame
    """
    buffer = CellBuffer(width, height)
    layout = calculate_layout(width, height, config.ui.inverted)

    highlighter = HighlightResolver(engine_for(state.search_mode), state.query)
    render_history_list(
        buffer,
        Rect(0, layout["list_y"], width, layout["list_height"]),
        state.list_state,
        state.filtered,
        config.ui.columns,
        theme,
        highlighter,
        clock,
        config.ui.render_mode(),
        config.ui.tzinfo(),
    )

    if height >= 2:
        render_status(buffer, state, theme, layout["status_y"], width)
    if height >= 1:
        render_input(buffer, state, theme, layout["input_y"], width)

    return buffer


def main_loop(term: Terminal, state: UIState, config: Config) -> UIState:
    """
    Main event loop - functional style.

    Args:
        term: blessed Terminal instance
        state: Initial UI state
        config: Validated configuration

    Returns:
        Final UI state (accepted command or quit)
    """
    theme = config.theme.build()
    inverted = config.ui.inverted

    while not state.should_quit:
        buffer = render_frame(state, config, theme, term.width, term.height)
        flush_buffer(term, buffer)

        key = term.inkey(timeout=IDLE_REDRAW_SECONDS)
        if not key:
            continue

        page_size = state.list_state.visible_count or term.height
        state = handle_key(state, key, page_size=page_size, inverted=inverted)

    return state


def run_interactive_ui(
    items: list[HistoryItem], config: Config, query: str = ""
) -> Optional[str]:
    """
    Run the interactive search screen.

    Args:
        items: History items, newest first
        config: Validated configuration
        query: Initial query

    Returns:
        The accepted command, or None when the user quit
    """
    term = Terminal()
    state = create_initial_state(items, query, config.search.search_mode())
    logger.info(
        f"Starting search UI: {len(items)} items, mode={state.search_mode.value}"
    )

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        try:
            state = main_loop(term, state, config)
        except KeyboardInterrupt:
            logger.info("Search UI interrupted")
            return None

    logger.info(f"Search UI finished (accepted={state.accepted is not None})")
    return state.accepted
