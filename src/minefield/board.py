"""
Board module for the Minesweeper engine.

Implements board configuration, random mine placement and adjacency
numbering. Boards are immutable; generation builds a list of tiles and
freezes it into a tuple.
"""
import logging
import random
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence, Tuple

from .coords import neighbor_indexes
from .tile import Tile


logger = logging.getLogger(__name__)


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mine_count: Total mines to place.
    """

    width: int = 10
    height: int = 8
    mine_count: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.mine_count < 0:
            raise ValueError("Number of mines cannot be negative")
        if self.mine_count > self.tile_count:
            raise ValueError(f"Too many mines (max {self.tile_count})")

    @property
    def tile_count(self) -> int:
        """Total number of tiles on the board."""
        return self.width * self.height


# Fixed parameters of a standard game
REFERENCE = BoardConfig(10, 8, 10)


# ============================================================================
# Board
# ============================================================================

@dataclass(frozen=True)
class Board:
    """
    Fixed-size grid of tiles stored in row-major order.

    Attributes:
        tiles: Tuple of width * height tiles.
        width: Number of columns.
        height: Number of rows.
    """

    tiles: Tuple[Tile, ...]
    width: int
    height: int

    def __post_init__(self) -> None:
        if len(self.tiles) != self.width * self.height:
            raise ValueError(
                f"Expected {self.width * self.height} tiles, "
                f"got {len(self.tiles)}"
            )

    def __len__(self) -> int:
        return len(self.tiles)

    def __getitem__(self, index: int) -> Tile:
        return self.tiles[index]

    def in_bounds(self, index: int) -> bool:
        """Check if index addresses a tile on this board."""
        return 0 <= index < len(self.tiles)

    def replace_tiles(self, tiles: Sequence[Tile]) -> "Board":
        """Get a board of the same shape holding the given tiles."""
        return replace(self, tiles=tuple(tiles))

    def mine_indexes(self) -> List[int]:
        """Get the indexes of all mine tiles."""
        return [i for i, tile in enumerate(self.tiles) if tile.is_mine]


# ============================================================================
# Generation
# ============================================================================

def blank_tiles(count: int) -> List[Tile]:
    """Create count hidden, unnumbered tiles."""
    return [Tile() for _ in range(count)]


def random_indexes(
    how_many: int, n: int, rng: Optional[random.Random] = None
) -> List[int]:
    """
    Pick distinct indexes in [0, n), uniformly and without replacement.

    Args:
        how_many: Number of indexes to pick.
        n: Size of the range.
        rng: Random source; the module-level generator if omitted.
    """
    rng = rng or random
    return rng.sample(range(n), how_many)


def place_mines(tiles: List[Tile], indexes: Iterable[int]) -> List[Tile]:
    """Turn the tiles at the given indexes into mines."""
    tiles = list(tiles)
    for index in indexes:
        tiles[index] = tiles[index].with_mine()
    return tiles


def assign_numbers(tiles: List[Tile], width: int, height: int) -> List[Tile]:
    """Increment the count of every non-mine neighbour of every mine."""
    tiles = list(tiles)
    for index, tile in enumerate(tiles):
        if not tile.is_mine:
            continue
        for neighbor in neighbor_indexes(index, width, height):
            tiles[neighbor] = tiles[neighbor].incremented()
    return tiles


def build_board(config: BoardConfig, mine_indexes: Iterable[int]) -> Board:
    """
    Build a board with mines at exactly the given indexes.

    Raises:
        ValueError: If an index is off the board or repeated, or the
            number of mines does not match the configuration.
    """
    mine_indexes = list(mine_indexes)
    if len(set(mine_indexes)) != len(mine_indexes):
        raise ValueError("Mine indexes must be distinct")
    if len(mine_indexes) != config.mine_count:
        raise ValueError(
            f"Expected {config.mine_count} mines, got {len(mine_indexes)}"
        )
    for index in mine_indexes:
        if not 0 <= index < config.tile_count:
            raise ValueError(f"Mine index {index} is off the board")

    tiles = blank_tiles(config.tile_count)
    tiles = place_mines(tiles, mine_indexes)
    tiles = assign_numbers(tiles, config.width, config.height)
    return Board(tuple(tiles), config.width, config.height)


def generate_tiles(
    config: BoardConfig, rng: Optional[random.Random] = None
) -> Board:
    """
    Create a starting minefield for the given configuration.

    Args:
        config: Board dimensions and mine count.
        rng: Random source for mine placement.

    Returns:
        Board with all tiles hidden and numbers assigned.
    """
    indexes = random_indexes(config.mine_count, config.tile_count, rng)
    logger.debug(
        "Generating %dx%d board with %d mines",
        config.width, config.height, config.mine_count,
    )
    return build_board(config, indexes)
