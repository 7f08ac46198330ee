"""
Coordinate helpers for a flat, row-major tile sequence.

Tiles are addressed by a single linear index; (x, y) pairs are only
used to compute neighbours at the board edges.
"""
from typing import List, Tuple, Union


# ============================================================================
# Constants
# ============================================================================

class _OutOfBounds:
    """Sentinel returned for offsets that leave the board."""

    def __repr__(self) -> str:
        return "OUT_OF_BOUNDS"


OUT_OF_BOUNDS = _OutOfBounds()

# (dx, dy) in reading order: up-left, up, up-right, left, right,
# down-left, down, down-right
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)


# ============================================================================
# Conversions
# ============================================================================

def index_to_xy(index: int, width: int) -> Tuple[int, int]:
    """Convert a linear index to an (x, y) pair."""
    x = index % width
    y = (index - x) // width
    return x, y


def xy_to_index(x: int, y: int, width: int) -> int:
    """Convert an (x, y) pair to a linear index."""
    return y * width + x


def relative_index(
    index: int, width: int, height: int, dx: int, dy: int
) -> Union[int, _OutOfBounds]:
    """
    Offset an index by (dx, dy).

    Returns:
        The destination index, or OUT_OF_BOUNDS if the destination
        is not on the board.
    """
    x, y = index_to_xy(index, width)
    dest_x = x + dx
    dest_y = y + dy
    if 0 <= dest_x < width and 0 <= dest_y < height:
        return xy_to_index(dest_x, dest_y, width)
    return OUT_OF_BOUNDS


def neighbor_indexes(index: int, width: int, height: int) -> List[int]:
    """Get the in-bounds indexes of the up to 8 tiles around index."""
    neighbors = []
    for dx, dy in NEIGHBOR_OFFSETS:
        dest = relative_index(index, width, height, dx, dy)
        if dest is not OUT_OF_BOUNDS:
            neighbors.append(dest)
    return neighbors
