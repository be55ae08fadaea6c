"""Scroll state and pure helper functions for the history list."""

from dataclasses import dataclass

# Rows of headroom kept between the selection and the far edge of the window
MAX_SCROLL_MARGIN = 10


@dataclass
class ListState:
    """Scroll state owned by the caller and updated by every render."""

    offset: int = 0
    selected: int = 0
    visible_count: int = 0

    def select(self, index: int) -> None:
        self.selected = index


def calculate_items_bounds(
    selected: int,
    offset: int,
    height: int,
    total_items: int,
) -> tuple[int, int]:
    """Calculate the visible window [start, end) for the history list.

    The window is lazy: it only moves when the selection leaves it. Moving
    toward the end keeps a margin of up to MAX_SCROLL_MARGIN rows (never
    more than the height or the items left) beyond the selection; moving
    before the window snaps its first row to the selection.

    Args:
        selected: Index of the currently selected item (0-based)
        offset: Index of the first visible item from the previous frame
        height: Number of rows available
        total_items: Total number of items in the list

    Returns:
        Tuple of (start, end) with start <= selected < end and
        end - start <= height

    Examples:
        >>> # Selection at the far end - window slides to include it
        >>> calculate_items_bounds(selected=19, offset=0, height=5, total_items=20)
        (15, 20)

        >>> # Selection before the window - snap to the selection
        >>> calculate_items_bounds(selected=0, offset=10, height=5, total_items=20)
        (0, 5)

        >>> # Selection inside the window - no change
        >>> calculate_items_bounds(selected=3, offset=2, height=20, total_items=40)
        (2, 22)
    """
    if total_items <= 0 or height <= 0:
        return 0, 0

    offset = min(max(0, offset), total_items - 1)
    margin = min(height, MAX_SCROLL_MARGIN, max(0, total_items - selected))

    if offset + height < selected + margin:
        end = selected + margin
        start = end - height
    elif selected < offset:
        start = selected
        end = selected + height
    else:
        start = offset
        end = offset + height

    return max(0, start), min(end, total_items)


def move_selection(
    current: int,
    delta: int,
    total_items: int,
    wrap: bool = True,
) -> int:
    """Move selection by delta with optional wrapping.

    Args:
        current: Current selection index (0-based)
        delta: Amount to move (negative toward index 0)
        total_items: Total number of items in the list
        wrap: If True, wrap around at boundaries; if False, clamp to range

    Returns:
        New selection index

    Examples:
        >>> move_selection(current=9, delta=1, total_items=10, wrap=True)
        0
        >>> move_selection(current=9, delta=1, total_items=10, wrap=False)
        9
    """
    if total_items == 0:
        return 0

    if wrap:
        return (current + delta) % total_items
    return max(0, min(current + delta, total_items - 1))


def clamp_selection(selection: int, total_items: int) -> int:
    """Clamp selection to valid range [0, total_items - 1].

    Useful after the list shrinks (query edits, reloads).

    Examples:
        >>> clamp_selection(selection=15, total_items=10)
        9
        >>> clamp_selection(selection=5, total_items=0)
        0
    """
    if total_items == 0:
        return 0
    return max(0, min(selection, total_items - 1))
