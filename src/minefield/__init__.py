"""
Minesweeper engine.

Provides board generation, flood-fill reveal and the game state machine
as pure functions over immutable game states.
"""
from .coords import OUT_OF_BOUNDS, index_to_xy, xy_to_index, relative_index
from .tile import Tile, InvalidTileState, HIDDEN, FLAG, MINE
from .board import (
    Board,
    BoardConfig,
    REFERENCE,
    build_board,
    generate_tiles,
)
from .fill import clear_fill
from .state import Action, GameState, reset, clear, flag, check_win, pick
from .environment import MinesweeperEnv

__all__ = [
    "OUT_OF_BOUNDS",
    "index_to_xy",
    "xy_to_index",
    "relative_index",
    "Tile",
    "InvalidTileState",
    "HIDDEN",
    "FLAG",
    "MINE",
    "Board",
    "BoardConfig",
    "REFERENCE",
    "build_board",
    "generate_tiles",
    "clear_fill",
    "Action",
    "GameState",
    "reset",
    "clear",
    "flag",
    "check_win",
    "pick",
    "MinesweeperEnv",
]
