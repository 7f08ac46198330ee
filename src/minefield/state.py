"""
Game state machine for the Minesweeper engine.

Every operation takes a GameState and returns a new one. Redundant
actions (clearing a revealed tile, acting after the game ended) return
the input state unchanged rather than raising.
"""
import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from .board import REFERENCE, Board, BoardConfig, generate_tiles
from .fill import clear_fill
from .tile import Tag, Tile


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class Action(Enum):
    """Player actions accepted by pick."""

    CLEAR = "clear"
    FLAG = "flag"


def _tag_order(tag: Tag) -> Tuple[bool, str]:
    # Word tags first, then the number
    return (isinstance(tag, int), str(tag))


# ============================================================================
# Game State
# ============================================================================

@dataclass(frozen=True)
class GameState:
    """
    Snapshot of one game.

    Attributes:
        board: Current tiles and dimensions.
        game_over: Whether the game has ended.
        win: Whether it ended with every safe tile revealed.
    """

    board: Board
    game_over: bool = False
    win: bool = False

    @property
    def width(self) -> int:
        """Number of columns."""
        return self.board.width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self.board.height

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return not self.game_over

    @property
    def is_lost(self) -> bool:
        """Check if game ended on a mine."""
        return self.game_over and not self.win

    def with_board(self, board: Board) -> "GameState":
        """Get a copy of this state holding board."""
        return replace(self, board=board)

    def revealed_count(self) -> int:
        """Count revealed non-mine tiles."""
        return sum(
            1 for tile in self.board.tiles
            if tile.revealed and not tile.is_mine
        )

    def to_observation(self) -> np.ndarray:
        """
        Get board state as numpy array for an agent.

        Returns:
            2D int8 array of shape (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        values = [tile.to_observation() for tile in self.board.tiles]
        return np.array(values, dtype=np.int8).reshape(self.height, self.width)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the tag-vocabulary form used outside the engine."""
        return {
            "tiles": [
                sorted(tile.tags(), key=_tag_order) for tile in self.board.tiles
            ],
            "width": self.width,
            "height": self.height,
            "game_over": self.game_over,
            "win": self.win,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        """
        Rebuild a state from its tag-vocabulary form.

        Raises:
            InvalidTileState: If a tile's tags break the invariants.
            ValueError: If the tile count does not match the dimensions.
        """
        tiles = tuple(Tile.from_tags(tags) for tags in data["tiles"])
        board = Board(tiles, data["width"], data["height"])
        return cls(
            board=board,
            game_over=bool(data.get("game_over", False)),
            win=bool(data.get("win", False)),
        )


# ============================================================================
# Game Lifecycle
# ============================================================================

def reset(
    config: BoardConfig = REFERENCE, rng: Optional[random.Random] = None
) -> GameState:
    """
    Start a new game.

    Args:
        config: Board parameters (10x8 with 10 mines by default).
        rng: Random source for mine placement.

    Returns:
        Fresh state with every tile hidden and no flags.
    """
    return GameState(board=generate_tiles(config, rng))


def reveal_mines(board: Board) -> Board:
    """Uncover every mine, leaving other tiles as they are."""
    return board.replace_tiles(
        tile.reveal() if tile.is_mine else tile for tile in board.tiles
    )


def game_over(state: GameState) -> GameState:
    """End the game and show all mines."""
    return replace(state, board=reveal_mines(state.board), game_over=True)


def check_win(state: GameState) -> GameState:
    """If the only hidden tiles left are mines, the player has won."""
    if any(tile.is_hidden and not tile.is_mine for tile in state.board.tiles):
        return state
    logger.debug("Game won")
    return replace(game_over(state), win=True)


# ============================================================================
# Game Actions
# ============================================================================

def clear(index: int, state: GameState) -> GameState:
    """
    Clear a tile: hit a mine, or reveal a region.

    A mine ends the game as a loss. A hidden safe tile starts a flood
    fill and may win the game. A revealed tile is left alone.
    """
    tile = state.board[index]
    if tile.is_mine:
        logger.debug("Mine hit at %d", index)
        return game_over(state)
    if tile.is_hidden:
        return check_win(clear_fill(index, state))
    return state


def flag(index: int, state: GameState) -> GameState:
    """Toggle the flag of a hidden tile. Revealed tiles are left alone."""
    tile = state.board[index]
    if tile.revealed:
        return state
    tiles = list(state.board.tiles)
    tiles[index] = tile.toggle_flag()
    return state.with_board(state.board.replace_tiles(tiles))


_HANDLERS = {
    Action.CLEAR: clear,
    Action.FLAG: flag,
}


def pick(
    state: GameState, action: Union[Action, str], index: int
) -> GameState:
    """
    Apply one player action.

    Args:
        state: Current game state.
        action: Action.CLEAR or Action.FLAG, or their string values.
        index: Linear index of the target tile.

    Returns:
        The next state. The input state itself when the game is over,
        the action is unknown or the index is off the board.
    """
    if state.game_over:
        return state
    try:
        handler = _HANDLERS[Action(action)]
    except ValueError:
        return state
    if isinstance(index, bool) or not state.board.in_bounds(index):
        return state
    return handler(index, state)
