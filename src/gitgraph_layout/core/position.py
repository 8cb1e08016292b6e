"""Map (row, column) cells of the graph to 2-D coordinates."""

from enum import Enum
from typing import Optional, Tuple


class Orientation(str, Enum):
    """Direction in which the graph grows."""

    VERTICAL = "vertical"  # newest commit on top
    VERTICAL_REVERSE = "vertical-reverse"  # oldest commit on top
    HORIZONTAL = "horizontal"  # left to right
    HORIZONTAL_REVERSE = "horizontal-reverse"  # right to left


def is_vertical(orientation: Optional[Orientation]) -> bool:
    return orientation in (None, Orientation.VERTICAL, Orientation.VERTICAL_REVERSE)


def compute_position(
    row: int,
    column: int,
    orientation: Optional[Orientation],
    branch_spacing: float,
    commit_spacing: float,
    offset_x: float = 0,
    offset_y: float = 0,
    max_row: int = 0,
) -> Tuple[float, float]:
    """Return the (x, y) coordinates of a graph cell.

    Vertical layouts put lanes on the x axis and rows on the y axis;
    horizontal layouts swap them. `max_row` is only used by the
    orientations that count rows from the far end.
    """
    if orientation == Orientation.VERTICAL_REVERSE:
        return (
            offset_x + branch_spacing * column,
            offset_y + commit_spacing * row,
        )
    if orientation == Orientation.HORIZONTAL:
        return (
            offset_x + commit_spacing * row,
            offset_y + branch_spacing * column,
        )
    if orientation == Orientation.HORIZONTAL_REVERSE:
        return (
            offset_x + commit_spacing * (max_row - row),
            offset_y + branch_spacing * column,
        )
    return (
        offset_x + branch_spacing * column,
        offset_y + commit_spacing * (max_row - row),
    )
