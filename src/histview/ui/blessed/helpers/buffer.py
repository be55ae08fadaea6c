"""In-memory cell grid and the per-frame draw cursor that writes into it.

Frames are composed into a CellBuffer first and painted to the terminal in
one pass (see terminal.flush_buffer), so rendering stays deterministic and
testable without a tty.

Every character occupies exactly one cell. Wide glyphs (CJK, emoji) are
not measured; they are counted as one cell like everything else.
"""

from dataclasses import dataclass
from typing import Optional

from ..styles.palette import Style
from .selection import SelectionStyler


@dataclass(frozen=True)
class Rect:
    """Rectangular area of the grid."""

    x: int
    y: int
    width: int
    height: int

    @property
    def left(self) -> int:
        return self.x

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def top(self) -> int:
        return self.y

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def is_empty(self) -> bool:
        return self.width < 1 or self.height < 1


@dataclass(frozen=True)
class Cell:
    symbol: str = " "
    style: Style = Style()


BLANK = Cell()


class CellBuffer:
    """Fixed-size grid of styled cells."""

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self._cells: list[list[Cell]] = [
            [BLANK] * self.width for _ in range(self.height)
        ]

    @property
    def area(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    def cell(self, x: int, y: int) -> Cell:
        return self._cells[y][x]

    def write(
        self,
        x: int,
        y: int,
        text: str,
        style: Style,
        max_width: Optional[int] = None,
    ) -> int:
        """
        Write text starting at (x, y), one character per cell.

        Writes are clipped to max_width and to the right edge of the grid.
        Rows or columns outside the grid are silently ignored.

        Returns:
            Number of cells written
        """
        if y < 0 or y >= self.height or x < 0 or x >= self.width:
            return 0

        limit = self.width - x
        if max_width is not None:
            limit = min(limit, max(0, max_width))

        row = self._cells[y]
        written = 0
        for ch in text[:limit]:
            row[x + written] = Cell(ch, style)
            written += 1
        return written

    def row_text(self, y: int) -> str:
        """Plain text of one row, for printing and tests."""
        return "".join(cell.symbol for cell in self._cells[y])

    def lines(self) -> list[str]:
        return [self.row_text(y) for y in range(self.height)]

    def runs(self, y: int) -> list[tuple[str, Style]]:
        """Group a row into maximal runs of identically styled text."""
        runs: list[tuple[str, Style]] = []
        for cell in self._cells[y]:
            if runs and runs[-1][1] == cell.style:
                runs[-1] = (runs[-1][0] + cell.symbol, cell.style)
            else:
                runs.append((cell.symbol, cell.style))
        return runs


class DrawCursor:
    """
    Write cursor for one list render pass.

    Tracks the horizontal position within the current row and the logical
    row index. Logical rows map to physical rows either top-down (inverted
    layout) or bottom-up, where row 0 sits on the last line of the area.
    The selection overlay is applied to every fragment written on the
    selected row.
    """

    def __init__(
        self,
        buffer: CellBuffer,
        area: Rect,
        styler: SelectionStyler,
        inverted: bool = False,
    ) -> None:
        self.buffer = buffer
        self.area = area
        self.styler = styler
        self.inverted = inverted
        self.x = 0
        self.y = 0

    @property
    def physical_row(self) -> int:
        if self.inverted:
            return self.area.top + self.y
        return self.area.bottom - self.y - 1

    @property
    def remaining(self) -> int:
        return max(0, self.area.width - self.x)

    @property
    def row_selected(self) -> bool:
        return self.styler.is_selected(self.y)

    def draw(self, text: str, style: Style, max_width: Optional[int] = None) -> int:
        """Write a fragment at the cursor and advance by the cells consumed."""
        width = self.remaining if max_width is None else min(self.remaining, max(0, max_width))
        if width == 0 or not text:
            return 0
        written = self.buffer.write(
            self.area.left + self.x,
            self.physical_row,
            text,
            self.styler.overlay(self.y, style),
            width,
        )
        self.x += written
        return written

    def pad_to(self, column_end: int, style: Style) -> None:
        """Draw spaces until x reaches column_end (relative to the area)."""
        gap = max(0, column_end - self.x)
        if gap:
            self.draw(" " * gap, style)

    def fill_row(self) -> None:
        """Pad the rest of the selected row with the selection fill style."""
        fill = self.styler.fill_style(self.y)
        if fill is not None and self.remaining > 0:
            self.draw(" " * self.remaining, fill)

    def next_row(self) -> None:
        self.y += 1
        self.x = 0
