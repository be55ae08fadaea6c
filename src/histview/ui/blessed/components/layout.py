"""Layout calculation functions."""

from dataclasses import dataclass
from enum import Enum

# Left padding drawn before the first column of every row
ROW_PADDING = 1


class ColumnKind(Enum):
    DURATION = "duration"
    TIME = "time"
    DATETIME = "datetime"
    DIRECTORY = "directory"
    HOST = "host"
    USER = "user"
    EXIT = "exit"
    COMMAND = "command"


# Widths used when a column is configured by kind only
DEFAULT_COLUMN_WIDTHS: dict[ColumnKind, int] = {
    ColumnKind.DURATION: 5,
    ColumnKind.TIME: 9,
    ColumnKind.DATETIME: 16,
    ColumnKind.DIRECTORY: 20,
    ColumnKind.HOST: 15,
    ColumnKind.USER: 10,
    ColumnKind.EXIT: 3,
    ColumnKind.COMMAND: 0,
}


@dataclass(frozen=True)
class ColumnSpec:
    """One configured list column."""

    kind: ColumnKind
    width: int = 0
    expand: bool = False

    @classmethod
    def of(cls, kind: ColumnKind) -> "ColumnSpec":
        """Column with its default width; the command column expands."""
        return cls(kind, DEFAULT_COLUMN_WIDTHS[kind], kind is ColumnKind.COMMAND)


DEFAULT_COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec.of(ColumnKind.DURATION),
    ColumnSpec.of(ColumnKind.TIME),
    ColumnSpec.of(ColumnKind.COMMAND),
)


def calculate_column_widths(
    columns: list[ColumnSpec] | tuple[ColumnSpec, ...],
    available_width: int,
    padding: int = ROW_PADDING,
) -> list[int]:
    """
    Pure function: calculate the rendered width of every column.

    Fixed columns keep their configured width and reserve one extra cell for
    the separator. Expanding columns share what is left. When several
    columns expand, the remainder (less one separator per extra expanding
    column) is split evenly, earlier columns taking the odd cells.

    Args:
        columns: Ordered column configuration
        available_width: Total row width in cells
        padding: Cells reserved before the first column

    Returns:
        Width of each column, in configured order
    """
    fixed_sum = sum(col.width + 1 for col in columns if not col.expand)
    expand_width = max(0, available_width - padding - fixed_sum)

    expanding = sum(1 for col in columns if col.expand)
    if expanding > 1:
        shared = max(0, expand_width - (expanding - 1))
        share, extra = divmod(shared, expanding)
    else:
        share, extra = expand_width, 0

    widths = []
    for col in columns:
        if not col.expand:
            widths.append(max(0, col.width))
            continue
        widths.append(share + (1 if extra > 0 else 0))
        extra -= 1
    return widths


def calculate_layout(width: int, height: int, inverted: bool) -> dict[str, int]:
    """
    Pure function: calculate y-positions for all screen regions.

    The input line sits next to the newest history item: below the list when
    it grows upward, above it when inverted.

    Args:
        width: Terminal width
        height: Terminal height
        inverted: Whether the list grows top-down

    Returns:
        Dictionary with region positions and heights
    """
    chrome_height = 2  # input line + status line
    list_height = max(0, height - chrome_height)

    if inverted:
        input_y, status_y, list_y = 0, 1, chrome_height
    else:
        list_y = 0
        status_y = list_height
        input_y = list_height + 1

    return {
        "width": max(0, width),
        "list_y": list_y,
        "list_height": list_height,
        "input_y": min(input_y, max(0, height - 1)),
        "status_y": min(status_y, max(0, height - 1)),
    }
