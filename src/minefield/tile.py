"""
Tile module for the Minesweeper engine.

Represents a single board tile as an immutable record. The same state
can be viewed as a set of tags (hidden/flag/mine plus one number),
which is the vocabulary used when a board leaves the engine.
"""
from dataclasses import dataclass, replace
from typing import AbstractSet, FrozenSet, Iterable, Union


# ============================================================================
# Constants
# ============================================================================

HIDDEN = "hidden"
FLAG = "flag"
MINE = "mine"

MIN_NUMBER = 0
MAX_NUMBER = 8

Tag = Union[str, int]


class InvalidTileState(ValueError):
    """A tile violates the tag invariants (engine defect or bad input)."""


# ============================================================================
# Tag Operations
# ============================================================================

def add_tag(tags: Iterable[Tag], tag: Tag) -> FrozenSet[Tag]:
    """Return tags with tag added."""
    return frozenset(tags) | {tag}


def remove_tag(tags: Iterable[Tag], *remove: Tag) -> FrozenSet[Tag]:
    """Return tags without the given one or two tags."""
    if not 1 <= len(remove) <= 2:
        raise TypeError("remove_tag takes one or two tags")
    return frozenset(tags) - set(remove)


def _is_number(tag: Tag) -> bool:
    return isinstance(tag, int) and not isinstance(tag, bool)


def tile_number(tags: AbstractSet[Tag]) -> int:
    """
    Get the numeric tag of a tile.

    Raises:
        InvalidTileState: If no tag in 0-8 is present.
    """
    for number in range(MIN_NUMBER, MAX_NUMBER + 1):
        if number in tags:
            return number
    raise InvalidTileState(f"Tile has no number tag: {sorted(map(str, tags))}")


def increment_number(current: int) -> int:
    """
    Increment an adjacent-mine count.

    Raises:
        InvalidTileState: If the result leaves the 0-8 range.
    """
    result = current + 1
    if MIN_NUMBER <= result <= MAX_NUMBER:
        return result
    raise InvalidTileState(f"Cannot increment number {current}")


# ============================================================================
# Tile Data Class
# ============================================================================

@dataclass(frozen=True)
class Tile:
    """
    Represents a single tile on the board.

    Attributes:
        is_mine: Whether this tile contains a mine.
        revealed: Whether the tile has been uncovered. Permanent.
        flagged: Whether the player marked the tile. Only while hidden.
        adjacent_mines: Count of mines in neighbouring tiles (0-8).
            Always 0 for a mine.
    """

    is_mine: bool = False
    revealed: bool = False
    flagged: bool = False
    adjacent_mines: int = 0

    def __post_init__(self) -> None:
        """Validate the tile invariants."""
        if not MIN_NUMBER <= self.adjacent_mines <= MAX_NUMBER:
            raise InvalidTileState(
                f"Adjacent count out of range: {self.adjacent_mines}"
            )
        if self.flagged and self.revealed:
            raise InvalidTileState("Revealed tile cannot carry a flag")
        if self.is_mine and self.adjacent_mines:
            raise InvalidTileState("Mine tile cannot carry a number")

    # ========================================================================
    # Transitions
    # ========================================================================

    def reveal(self) -> "Tile":
        """Uncover the tile, dropping any flag."""
        if self.revealed:
            return self
        return replace(self, revealed=True, flagged=False)

    def toggle_flag(self) -> "Tile":
        """Flag or unflag a hidden tile. Revealed tiles are unchanged."""
        if self.revealed:
            return self
        return replace(self, flagged=not self.flagged)

    def with_mine(self) -> "Tile":
        """Turn the tile into a mine."""
        return replace(self, is_mine=True, adjacent_mines=0)

    def incremented(self) -> "Tile":
        """Count one more adjacent mine. Mines are unchanged."""
        if self.is_mine:
            return self
        return replace(
            self, adjacent_mines=increment_number(self.adjacent_mines)
        )

    # ========================================================================
    # Views
    # ========================================================================

    @property
    def is_hidden(self) -> bool:
        """Check if tile is still covered."""
        return not self.revealed

    def tags(self) -> FrozenSet[Tag]:
        """Get the tag-set form of this tile."""
        tags = set()
        if not self.revealed:
            tags.add(HIDDEN)
        if self.flagged:
            tags.add(FLAG)
        if self.is_mine:
            tags.add(MINE)
        else:
            tags.add(self.adjacent_mines)
        return frozenset(tags)

    @classmethod
    def from_tags(cls, tags: Iterable[Tag]) -> "Tile":
        """
        Build a tile from its tag-set form.

        Raises:
            InvalidTileState: On unknown tags, several numbers, a
                numbered mine, a safe tile without a number, or a flag
                on a revealed tile.
        """
        tags = frozenset(tags)
        numbers = [tag for tag in tags if _is_number(tag)]
        unknown = tags - {HIDDEN, FLAG, MINE} - set(numbers)
        if unknown:
            raise InvalidTileState(f"Unknown tags: {sorted(map(str, unknown))}")
        if len(numbers) > 1:
            raise InvalidTileState(f"Several number tags: {sorted(numbers)}")

        is_mine = MINE in tags
        if is_mine and numbers:
            raise InvalidTileState("Mine tile cannot carry a number")
        adjacent = 0 if is_mine else tile_number(tags)

        return cls(
            is_mine=is_mine,
            revealed=HIDDEN not in tags,
            flagged=FLAG in tags,
            adjacent_mines=adjacent,
        )

    def to_observation(self) -> int:
        """
        Convert tile to observation value for an agent.

        Returns:
            -1: Hidden tile
            -2: Flagged tile
            0-8: Revealed tile with adjacent mine count
            9: Revealed mine (game over state)
        """
        if self.flagged:
            return -2
        if not self.revealed:
            return -1
        if self.is_mine:
            return 9
        return self.adjacent_mines
