"""History list rendering: scrolling window and per-row column layout."""

from datetime import datetime, timezone, tzinfo
from typing import Callable, Optional, Sequence

from ....domain.history import HistoryItem
from ....domain.search import HighlightResolver
from ..helpers.buffer import CellBuffer, DrawCursor, Rect
from ..helpers.scrolling import ListState, calculate_items_bounds
from ..helpers.selection import RenderMode, SelectionStyler
from ..styles.formatting import (
    align_left,
    align_right,
    command_tokens,
    format_datetime,
    format_duration,
    format_elapsed,
    truncate_end,
    truncate_start,
)
from ..styles.palette import Meaning, Style, Theme
from .layout import ColumnKind, ColumnSpec, calculate_column_widths

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    return datetime.now(timezone.utc)


class RowRenderer:
    """Formats one history item per row, column by column."""

    def __init__(
        self,
        cursor: DrawCursor,
        columns: Sequence[ColumnSpec],
        widths: list[int],
        theme: Theme,
        highlighter: HighlightResolver,
        clock: Clock,
        tz: Optional[tzinfo] = None,
    ) -> None:
        self.cursor = cursor
        self.columns = columns
        self.widths = widths
        self.theme = theme
        self.highlighter = highlighter
        self.clock = clock
        self.tz = tz

    def render(self, item: HistoryItem) -> None:
        cursor = self.cursor
        cursor.draw(" ", Style())
        for index, (column, width) in enumerate(zip(self.columns, self.widths)):
            if index:
                cursor.draw(" ", Style())
            self._column(column.kind, item, width)
        cursor.fill_row()
        cursor.next_row()

    def _column(self, kind: ColumnKind, item: HistoryItem, width: int) -> None:
        match kind:
            case ColumnKind.DURATION:
                text = align_right(format_duration(item.duration), width)
                self.cursor.draw(text, self._status_style(item), width)
            case ColumnKind.TIME:
                text = align_right(format_elapsed(self.clock(), item.timestamp), width)
                self.cursor.draw(text, self.theme.style_for(Meaning.GUIDANCE), width)
            case ColumnKind.DATETIME:
                text = align_left(format_datetime(item.timestamp, self.tz), width)
                self.cursor.draw(text, self.theme.style_for(Meaning.ANNOTATION), width)
            case ColumnKind.DIRECTORY:
                text = truncate_start(item.cwd, width)
                self.cursor.draw(text, self.theme.style_for(Meaning.ANNOTATION), width)
            case ColumnKind.HOST:
                text = truncate_end(item.host, width)
                self.cursor.draw(text, self.theme.style_for(Meaning.ANNOTATION), width)
            case ColumnKind.USER:
                text = truncate_end(item.user, width)
                self.cursor.draw(text, self.theme.style_for(Meaning.ANNOTATION), width)
            case ColumnKind.EXIT:
                text = align_right(str(item.exit), width)
                self.cursor.draw(text, self._status_style(item), width)
            case ColumnKind.COMMAND:
                self._command(item, width)

    def _status_style(self, item: HistoryItem) -> Style:
        return self.theme.style_for(
            Meaning.ALERT_INFO if item.success else Meaning.ALERT_ERROR
        )

    def _command(self, item: HistoryItem, width: int) -> None:
        cursor = self.cursor
        base = self.theme.style_for(Meaning.BASE)
        column_end = cursor.x + width

        tokens = command_tokens(item.command)
        highlighted = self.highlighter.resolve(" ".join(tokens))
        if cursor.row_selected:
            # the selected row already stands out, so bold alone gets lost
            emphasis = self.theme.style_for(Meaning.ALERT_WARN).with_bold()
        else:
            emphasis = base.with_bold()

        pos = 0
        for index, token in enumerate(tokens):
            if index:
                if cursor.x >= column_end or cursor.remaining == 0:
                    return
                cursor.draw(" ", base)
                pos += 1
            for ch in token:
                if cursor.x >= column_end or cursor.remaining == 0:
                    return
                cursor.draw(ch, emphasis if pos in highlighted else base)
                pos += 1

        cursor.pad_to(column_end, base)


class HistoryList:
    """Stateful list widget: draws the visible window of history items."""

    def __init__(
        self,
        items: Sequence[HistoryItem],
        columns: Sequence[ColumnSpec],
        theme: Theme,
        highlighter: HighlightResolver,
        clock: Clock = system_clock,
        mode: RenderMode = RenderMode(),
        tz: Optional[tzinfo] = None,
    ) -> None:
        self.items = items
        self.columns = columns
        self.theme = theme
        self.highlighter = highlighter
        self.clock = clock
        self.mode = mode
        self.tz = tz

    def render(self, buffer: CellBuffer, area: Rect, state: ListState) -> None:
        """
        Render the visible window into buffer and update state in place.

        Args:
            buffer: Target cell grid
            area: Region of the grid reserved for the list
            state: Caller-owned scroll state (offset and visible_count updated)
        """
        if area.is_empty() or not self.items:
            state.visible_count = 0
            return

        start, end = calculate_items_bounds(
            state.selected, state.offset, area.height, len(self.items)
        )
        state.offset = start
        state.visible_count = end - start

        styler = SelectionStyler(
            self.theme, self.mode.selection, state.offset, state.selected
        )
        cursor = DrawCursor(buffer, area, styler, inverted=self.mode.inverted)
        renderer = RowRenderer(
            cursor,
            self.columns,
            calculate_column_widths(self.columns, area.width),
            self.theme,
            self.highlighter,
            self.clock,
            self.tz,
        )

        for item in self.items[start:end]:
            renderer.render(item)


def render_history_list(
    buffer: CellBuffer,
    area: Rect,
    state: ListState,
    items: Sequence[HistoryItem],
    columns: Sequence[ColumnSpec],
    theme: Theme,
    highlighter: HighlightResolver,
    clock: Clock = system_clock,
    mode: RenderMode = RenderMode(),
    tz: Optional[tzinfo] = None,
) -> None:
    """Render history items into buffer (see HistoryList.render)."""
    HistoryList(items, columns, theme, highlighter, clock, mode, tz).render(
        buffer, area, state
    )
