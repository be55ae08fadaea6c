"""Selected-row styling for the history list."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..styles.palette import Meaning, Style, Theme


class SelectionMode(Enum):
    """How the selected row is marked."""

    BACKGROUND = "background"  # theme selection background on every cell
    REVERSE = "reverse"  # reverse video


@dataclass(frozen=True)
class RenderMode:
    """Presentation choices fixed for the lifetime of a configuration."""

    inverted: bool = False
    selection: SelectionMode = SelectionMode.BACKGROUND


class SelectionStyler:
    """Decides whether a logical row is selected and how to decorate it."""

    def __init__(
        self, theme: Theme, mode: SelectionMode, offset: int, selected: int
    ) -> None:
        self.mode = mode
        self.offset = offset
        self.selected = selected
        self._background = theme.style_for(Meaning.SELECTION).bg

    def is_selected(self, row: int) -> bool:
        return row + self.offset == self.selected

    def overlay(self, row: int, style: Style) -> Style:
        """Return style as it should appear on the given row."""
        if not self.is_selected(row):
            return style
        if self.mode is SelectionMode.REVERSE:
            return Style(fg=style.fg, bg=style.bg, bold=style.bold, reverse=True)
        if self._background is None:
            return style
        return Style(fg=style.fg, bg=self._background, bold=style.bold, reverse=style.reverse)

    def fill_style(self, row: int) -> Optional[Style]:
        """Style for padding the unused width of a row, or None to leave it."""
        if (
            self.mode is SelectionMode.BACKGROUND
            and self._background is not None
            and self.is_selected(row)
        ):
            return Style(bg=self._background)
        return None
