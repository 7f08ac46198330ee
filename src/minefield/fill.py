"""
Flood-fill reveal for the Minesweeper engine.

Uncovers the connected region of zero tiles around a start tile and
the ring of numbered tiles bordering it.
"""
import logging
from typing import TYPE_CHECKING

import numpy as np

from .coords import neighbor_indexes

if TYPE_CHECKING:
    from .state import GameState


logger = logging.getLogger(__name__)


def clear_fill(start_index: int, state: "GameState") -> "GameState":
    """
    Reveal the region reachable from start_index.

    Zero tiles expand to all their neighbours; numbered tiles are
    revealed but stop the fill. Each tile is visited at most once.
    Must not be started on a mine.

    Args:
        start_index: Index of the first tile to reveal.
        state: Current game state.

    Returns:
        New game state with the region revealed.
    """
    board = state.board
    tiles = list(board.tiles)
    visited = np.zeros(len(tiles), dtype=bool)
    stack = [start_index]

    while stack:
        index = stack.pop()
        if visited[index]:
            continue
        visited[index] = True

        tile = tiles[index].reveal()
        tiles[index] = tile
        if tile.adjacent_mines != 0:
            continue

        for neighbor in neighbor_indexes(index, board.width, board.height):
            if not visited[neighbor]:
                stack.append(neighbor)

    logger.debug(
        "Flood fill from %d visited %d tiles", start_index, int(visited.sum())
    )
    return state.with_board(board.replace_tiles(tiles))
