"""Tests for column and screen layout calculation."""

from histview.ui.blessed.components.layout import (
    DEFAULT_COLUMNS,
    ROW_PADDING,
    ColumnKind,
    ColumnSpec,
    calculate_column_widths,
    calculate_layout,
)


def _row_width(widths: list[int]) -> int:
    """Cells used by a full row: padding, columns and separators."""
    return ROW_PADDING + sum(widths) + max(0, len(widths) - 1)


class TestColumnWidths:
    """Tests for calculate_column_widths."""

    def test_expanding_column_takes_remainder(self):
        """Default columns: duration 5, time 9, command gets the rest."""
        widths = calculate_column_widths(DEFAULT_COLUMNS, 40)
        assert widths == [5, 9, 23]
        assert _row_width(widths) == 40

    def test_fixed_only(self):
        """Without an expanding column, fixed widths are returned unchanged."""
        columns = [ColumnSpec(ColumnKind.EXIT, 3), ColumnSpec(ColumnKind.HOST, 15)]
        assert calculate_column_widths(columns, 80) == [3, 15]

    def test_remainder_clamped_to_zero(self):
        """Fixed columns wider than the row leave nothing to expand."""
        columns = [
            ColumnSpec(ColumnKind.DIRECTORY, 30),
            ColumnSpec(ColumnKind.COMMAND, 0, expand=True),
        ]
        assert calculate_column_widths(columns, 20) == [30, 0]

    def test_several_expanding_columns_share_remainder(self):
        """Two expanding columns split the rest and the row still fits."""
        columns = [
            ColumnSpec(ColumnKind.DURATION, 5),
            ColumnSpec(ColumnKind.DIRECTORY, 0, expand=True),
            ColumnSpec(ColumnKind.COMMAND, 0, expand=True),
        ]
        widths = calculate_column_widths(columns, 40)
        # 40 - 1 padding - 6 fixed = 33, less one separator = 32
        assert widths == [5, 16, 16]
        assert _row_width(widths) == 40

    def test_odd_remainder_goes_to_first_expanding_column(self):
        columns = [
            ColumnSpec(ColumnKind.DIRECTORY, 0, expand=True),
            ColumnSpec(ColumnKind.COMMAND, 0, expand=True),
        ]
        assert calculate_column_widths(columns, 13) == [6, 5]

    def test_rows_never_exceed_width(self):
        """With one expanding column the row always fits exactly."""
        columns = [
            ColumnSpec(ColumnKind.DURATION, 5),
            ColumnSpec(ColumnKind.EXIT, 3),
            ColumnSpec(ColumnKind.COMMAND, 0, expand=True),
        ]
        for width in range(11, 120):
            assert _row_width(calculate_column_widths(columns, width)) == width


class TestScreenLayout:
    """Tests for calculate_layout."""

    def test_bottom_up_layout(self):
        """List on top, status and input at the bottom."""
        layout = calculate_layout(80, 24, inverted=False)
        assert layout["list_y"] == 0
        assert layout["list_height"] == 22
        assert layout["status_y"] == 22
        assert layout["input_y"] == 23

    def test_inverted_layout(self):
        """Input first, list underneath."""
        layout = calculate_layout(80, 24, inverted=True)
        assert layout["input_y"] == 0
        assert layout["status_y"] == 1
        assert layout["list_y"] == 2
        assert layout["list_height"] == 22

    def test_tiny_terminal(self):
        """No room for the list, rows stay on screen."""
        layout = calculate_layout(10, 1, inverted=False)
        assert layout["list_height"] == 0
        assert layout["input_y"] == 0
