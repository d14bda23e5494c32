"""
Board geometry.
NO UI DEPENDENCIES.

Coordinate system:
- (0, 0) is top-left
- row increases downward
- col increases to the right

Pixel mapping belongs to the presentation layer; only cell math lives here.
"""
from typing import Iterator, List, Set

from .constants import BOARD_SIZE
from .models import CellPosition, Direction


def is_in_bounds(pos: CellPosition, size: int = BOARD_SIZE) -> bool:
    """Check if a cell is on a size x size board."""
    return 0 <= pos.row < size and 0 <= pos.col < size


def chebyshev_distance(a: CellPosition, b: CellPosition) -> int:
    """King-move distance: max of the row and column deltas."""
    return max(abs(a.row - b.row), abs(a.col - b.col))


def iter_cells(size: int = BOARD_SIZE) -> Iterator[CellPosition]:
    """Iterate over every cell, row by row."""
    for row in range(size):
        for col in range(size):
            yield CellPosition(row, col)


def neighborhood(center: CellPosition, radius: int = 1,
                 size: int = BOARD_SIZE) -> Set[CellPosition]:
    """
    In-bounds cells within Chebyshev distance `radius` of center.
    The center itself is included.
    """
    cells = set()
    for d_row in range(-radius, radius + 1):
        for d_col in range(-radius, radius + 1):
            cell = center.offset(d_row, d_col)
            if is_in_bounds(cell, size):
                cells.add(cell)
    return cells


def cardinal_offsets_up_to(k: int) -> List[CellPosition]:
    """
    Offsets reachable by moving 1..k cells along a single cardinal axis.

    Offsets are returned as CellPosition deltas relative to (0, 0).
    There are no diagonals and no mixed-axis moves, so k=2 gives 8 offsets.
    """
    offsets = []
    for direction in Direction:
        for step in range(1, k + 1):
            offsets.append(CellPosition(direction.d_row * step, direction.d_col * step))
    return offsets


def cardinal_cells_up_to(origin: CellPosition, k: int,
                         size: int = BOARD_SIZE) -> Set[CellPosition]:
    """Apply cardinal_offsets_up_to(k) to origin, dropping out-of-bounds cells."""
    cells = set()
    for delta in cardinal_offsets_up_to(k):
        cell = origin.offset(delta.row, delta.col)
        if is_in_bounds(cell, size):
            cells.add(cell)
    return cells
