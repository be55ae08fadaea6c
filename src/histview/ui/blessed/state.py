"""UI state management - immutable state updates.

UIState is replaced, never mutated, by the functions below. The one
exception is ListState: the list widget updates its offset and visible
count in place on every render, so each new UIState gets its own copy.
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from histview.domain.history import HistoryItem
from histview.domain.search import SearchMode, engine_for
from histview.ui.blessed.helpers.scrolling import (
    ListState,
    clamp_selection,
    move_selection,
)
from histview.ui.blessed.styles.formatting import normalize_command


@dataclass
class UIState:
    """Complete UI state for the search screen."""

    items: list[HistoryItem] = field(default_factory=list)
    filtered: list[HistoryItem] = field(default_factory=list)
    query: str = ""
    search_mode: SearchMode = SearchMode.FUZZY
    list_state: ListState = field(default_factory=ListState)
    should_quit: bool = False
    accepted: Optional[str] = None


def filter_items(
    items: list[HistoryItem], query: str, mode: SearchMode
) -> list[HistoryItem]:
    """
    Keep items whose normalized command matches the query, preserving order.

    Full-text and fuzzy queries match only when every term matches.

    Args:
        items: History items, newest first
        query: Search query; empty keeps everything
        mode: Search mode whose engine decides matches

    Returns:
        Matching items
    """
    if not query.strip():
        return list(items)
    engine = engine_for(mode)
    return [
        item
        for item in items
        if engine.matches(normalize_command(item.command), query)
    ]


def create_initial_state(
    items: list[HistoryItem], query: str = "", mode: SearchMode = SearchMode.FUZZY
) -> UIState:
    return UIState(
        items=items,
        filtered=filter_items(items, query, mode),
        query=query,
        search_mode=mode,
    )


def _refilter(state: UIState, query: str, mode: SearchMode) -> UIState:
    """Apply a new query/mode and put the selection back on the newest match."""
    return replace(
        state,
        query=query,
        search_mode=mode,
        filtered=filter_items(state.items, query, mode),
        list_state=ListState(),
    )


def set_query(state: UIState, query: str) -> UIState:
    return _refilter(state, query, state.search_mode)


def append_query_char(state: UIState, char: str) -> UIState:
    return set_query(state, state.query + char)


def delete_query_char(state: UIState) -> UIState:
    if not state.query:
        return state
    return set_query(state, state.query[:-1])


def cycle_search_mode(state: UIState) -> UIState:
    return _refilter(state, state.query, state.search_mode.next())


def move_list_selection(state: UIState, delta: int, wrap: bool = False) -> UIState:
    """
    Move the selection by delta items (positive toward older entries).

    Args:
        state: Current UI state
        delta: Number of items to move
        wrap: Wrap around at either end instead of clamping

    Returns:
        Updated state with a fresh ListState carrying the new selection
    """
    if not state.filtered:
        return state

    current = state.list_state
    selected = move_selection(current.selected, delta, len(state.filtered), wrap=wrap)
    return replace(
        state,
        list_state=ListState(
            offset=current.offset,
            selected=selected,
            visible_count=current.visible_count,
        ),
    )


def page_list_selection(state: UIState, pages: int, page_size: int) -> UIState:
    """Move the selection by whole pages (clamped at the ends)."""
    return move_list_selection(state, pages * max(1, page_size), wrap=False)


def select_edge(state: UIState, oldest: bool) -> UIState:
    """Jump to the newest (index 0) or oldest match."""
    target = len(state.filtered) - 1 if oldest else 0
    current = state.list_state
    return replace(
        state,
        list_state=ListState(
            offset=current.offset,
            selected=clamp_selection(target, len(state.filtered)),
            visible_count=current.visible_count,
        ),
    )


def accept_selection(state: UIState) -> UIState:
    """Finish with the selected command (or nothing when no item matches)."""
    selected = state.list_state.selected
    accepted = state.filtered[selected].command if selected < len(state.filtered) else None
    return replace(state, accepted=accepted, should_quit=True)


def quit_ui(state: UIState) -> UIState:
    return replace(state, accepted=None, should_quit=True)
