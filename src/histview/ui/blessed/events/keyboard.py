"""Keyboard event handling for the search screen.

Key Functions:
    - parse_key: Classify a blessed Keystroke
    - handle_key: Apply a key to the UI state
"""

from blessed.keyboard import Keystroke

from histview.ui.blessed.state import (
    UIState,
    accept_selection,
    append_query_char,
    cycle_search_mode,
    delete_query_char,
    move_list_selection,
    page_list_selection,
    quit_ui,
    select_edge,
    set_query,
)

_CONTROL_KEYS = {
    "\x03": "ctrl_c",
    "\x0e": "ctrl_n",
    "\x10": "ctrl_p",
    "\x12": "ctrl_r",
    "\x15": "ctrl_u",
    "\x7f": "backspace",
}

_NAMED_KEYS = {
    "KEY_ENTER": "enter",
    "KEY_ESCAPE": "escape",
    "KEY_BACKSPACE": "backspace",
    "KEY_UP": "arrow_up",
    "KEY_DOWN": "arrow_down",
    "KEY_PGUP": "page_up",
    "KEY_PGDOWN": "page_down",
    "KEY_HOME": "home",
    "KEY_END": "end",
}


def parse_key(key: Keystroke) -> dict:
    """
    Parse keystroke into event dictionary.

    Args:
        key: blessed Keystroke

    Returns:
        Event dictionary with "type" and, for printable keys, "char"
    """
    name = getattr(key, "name", None)
    event = {
        "type": "unknown",
        "name": name,
        "char": str(key) if key and key.isprintable() else None,
    }

    if name in _NAMED_KEYS:
        event["type"] = _NAMED_KEYS[name]
    elif str(key) in _CONTROL_KEYS:
        event["type"] = _CONTROL_KEYS[str(key)]
    elif str(key) in ("\r", "\n"):
        event["type"] = "enter"
    elif event["char"]:
        event["type"] = "char"

    return event


def handle_key(
    state: UIState, key: Keystroke, page_size: int = 10, inverted: bool = False
) -> UIState:
    """
    Handle keyboard input and return updated state.

    Item 0 is the newest entry. Without inversion it is drawn at the bottom,
    so "up" walks toward older entries; inverted lists flip that.

    Args:
        state: Current UI state
        key: blessed Keystroke
        page_size: Rows moved by page up/down
        inverted: Whether the list grows top-down

    Returns:
        Updated state
    """
    event = parse_key(key)
    older = -1 if inverted else 1

    match event["type"]:
        case "arrow_up" | "ctrl_p":
            return move_list_selection(state, older)
        case "arrow_down" | "ctrl_n":
            return move_list_selection(state, -older)
        case "page_up":
            return page_list_selection(state, older, page_size)
        case "page_down":
            return page_list_selection(state, -older, page_size)
        case "home":
            return select_edge(state, oldest=not inverted)
        case "end":
            return select_edge(state, oldest=inverted)
        case "enter":
            return accept_selection(state)
        case "escape" | "ctrl_c":
            return quit_ui(state)
        case "ctrl_r":
            return cycle_search_mode(state)
        case "ctrl_u":
            return set_query(state, "")
        case "backspace":
            return delete_query_char(state)
        case "char":
            return append_query_char(state, event["char"])
        case _:
            return state
