"""Tests for immutable UI state updates and keyboard handling."""

from datetime import datetime, timedelta, timezone

import pytest
from blessed.keyboard import Keystroke

from histview.domain.history import HistoryItem
from histview.domain.search import SearchMode
from histview.ui.blessed.events.keyboard import handle_key, parse_key
from histview.ui.blessed.state import (
    accept_selection,
    create_initial_state,
    cycle_search_mode,
    filter_items,
    move_list_selection,
    page_list_selection,
    select_edge,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
COMMANDS = ["git status", "make test", "git push", "ls -la", "git   log"]


def key(name: str) -> Keystroke:
    sequences = {
        "KEY_UP": "\x1b[A",
        "KEY_DOWN": "\x1b[B",
        "KEY_PGUP": "\x1b[5~",
        "KEY_PGDOWN": "\x1b[6~",
        "KEY_HOME": "\x1b[H",
        "KEY_END": "\x1b[F",
        "KEY_ENTER": "\n",
        "KEY_ESCAPE": "\x1b",
        "KEY_BACKSPACE": "\x08",
    }
    return Keystroke(sequences[name], name=name)


@pytest.fixture
def items() -> list[HistoryItem]:
    return [
        HistoryItem(command, NOW - timedelta(minutes=i))
        for i, command in enumerate(COMMANDS)
    ]


@pytest.fixture
def state(items):
    return create_initial_state(items)


class TestFilterItems:
    def test_empty_query_keeps_all(self, items):
        assert filter_items(items, "", SearchMode.FUZZY) == items

    def test_prefix(self, items):
        result = filter_items(items, "git", SearchMode.PREFIX)
        assert [i.command for i in result] == ["git status", "git push", "git   log"]

    def test_fulltext_requires_every_term(self, items):
        result = filter_items(items, "git push", SearchMode.FULLTEXT)
        assert [i.command for i in result] == ["git push"]

    def test_fulltext_terms_in_any_order(self, items):
        result = filter_items(items, "log git", SearchMode.FULLTEXT)
        assert [i.command for i in result] == ["git   log"]

    def test_fuzzy_requires_every_term(self, items):
        result = filter_items(items, "gt sts", SearchMode.FUZZY)
        assert [i.command for i in result] == ["git status"]

    def test_prefix_uses_normalized_command(self, items):
        result = filter_items(items, "git l", SearchMode.PREFIX)
        assert [i.command for i in result] == ["git   log"]

    def test_fuzzy(self, items):
        result = filter_items(items, "mkt", SearchMode.FUZZY)
        assert [i.command for i in result] == ["make test"]


class TestStateUpdates:
    def test_updates_return_new_state(self, state):
        moved = move_list_selection(state, 1)
        assert moved is not state
        assert state.list_state.selected == 0
        assert moved.list_state.selected == 1

    def test_move_clamps(self, state):
        assert move_list_selection(state, -1).list_state.selected == 0
        assert move_list_selection(state, 50).list_state.selected == len(COMMANDS) - 1

    def test_move_keeps_offset(self, state):
        state.list_state.offset = 2
        assert move_list_selection(state, 1).list_state.offset == 2

    def test_page(self, state):
        assert page_list_selection(state, 1, page_size=3).list_state.selected == 3
        assert page_list_selection(state, -1, page_size=3).list_state.selected == 0

    def test_select_edges(self, state):
        assert select_edge(state, oldest=True).list_state.selected == 4
        assert select_edge(state, oldest=False).list_state.selected == 0

    def test_accept(self, state):
        accepted = accept_selection(move_list_selection(state, 2))
        assert accepted.should_quit
        assert accepted.accepted == "git push"

    def test_accept_without_matches(self, items):
        empty = create_initial_state(items, query="zzzz", mode=SearchMode.PREFIX)
        result = accept_selection(empty)
        assert result.should_quit
        assert result.accepted is None

    def test_cycle_mode_refilters(self, items):
        state = create_initial_state(items, query="gst", mode=SearchMode.FUZZY)
        assert [i.command for i in state.filtered] == ["git status"]
        cycled = cycle_search_mode(state)
        assert cycled.search_mode is SearchMode.PREFIX
        assert cycled.filtered == []


class TestParseKey:
    def test_printable(self):
        assert parse_key(Keystroke("a")) == {"type": "char", "name": None, "char": "a"}

    def test_named(self):
        assert parse_key(key("KEY_UP"))["type"] == "arrow_up"

    @pytest.mark.parametrize(
        "sequence,expected",
        [("\x03", "ctrl_c"), ("\x12", "ctrl_r"), ("\x7f", "backspace"), ("\r", "enter")],
    )
    def test_control(self, sequence, expected):
        assert parse_key(Keystroke(sequence))["type"] == expected

    def test_unknown(self):
        assert parse_key(Keystroke("\x01"))["type"] == "unknown"


class TestHandleKey:
    def test_typing_filters_and_resets_selection(self, state):
        state = move_list_selection(state, 2)
        for ch in "push":
            state = handle_key(state, Keystroke(ch))
        assert state.query == "push"
        assert [i.command for i in state.filtered] == ["git push"]
        assert state.list_state.selected == 0

    def test_backspace(self, state):
        state = handle_key(state, Keystroke("x"))
        state = handle_key(state, key("KEY_BACKSPACE"))
        assert state.query == ""
        assert len(state.filtered) == len(COMMANDS)

    def test_clear_query(self, state):
        state = handle_key(state, Keystroke("g"))
        state = handle_key(state, Keystroke("\x15"))
        assert state.query == ""

    def test_up_moves_to_older_entries(self, state):
        """Newest entry sits at the bottom, so up walks into the past."""
        state = handle_key(state, key("KEY_UP"))
        assert state.list_state.selected == 1
        state = handle_key(state, key("KEY_DOWN"))
        assert state.list_state.selected == 0

    def test_inverted_flips_direction(self, state):
        state = handle_key(state, key("KEY_DOWN"), inverted=True)
        assert state.list_state.selected == 1
        state = handle_key(state, key("KEY_UP"), inverted=True)
        assert state.list_state.selected == 0

    def test_page_keys(self, state):
        state = handle_key(state, key("KEY_PGUP"), page_size=2)
        assert state.list_state.selected == 2

    def test_home_and_end(self, state):
        assert handle_key(state, key("KEY_HOME")).list_state.selected == 4
        assert handle_key(state, key("KEY_END")).list_state.selected == 0
        assert handle_key(state, key("KEY_HOME"), inverted=True).list_state.selected == 0

    def test_enter_accepts(self, state):
        state = handle_key(state, key("KEY_UP"))
        state = handle_key(state, key("KEY_ENTER"))
        assert state.should_quit
        assert state.accepted == "make test"

    @pytest.mark.parametrize("keystroke", [Keystroke("\x03"), Keystroke("\x1b", name="KEY_ESCAPE")])
    def test_quit(self, state, keystroke):
        state = handle_key(state, keystroke)
        assert state.should_quit
        assert state.accepted is None

    def test_ctrl_r_cycles_mode(self, state):
        assert handle_key(state, Keystroke("\x12")).search_mode is SearchMode.PREFIX
