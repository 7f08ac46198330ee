"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path

import pytest

# Add src (packages) and the repo root (main.py) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from minefield import BoardConfig, GameState, Tile, build_board


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def reference_config() -> BoardConfig:
    """Standard 10x8 configuration with 10 mines."""
    return BoardConfig(10, 8, 10)


@pytest.fixture
def small_config() -> BoardConfig:
    """Small 3x3 configuration with 1 mine."""
    return BoardConfig(3, 3, 1)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible boards."""
    return random.Random(1234)


# ============================================================================
# State Fixtures
# ============================================================================

@pytest.fixture
def center_mine_state(small_config: BoardConfig) -> GameState:
    """3x3 board with a single mine in the centre."""
    return GameState(board=build_board(small_config, [4]))


@pytest.fixture
def empty_state() -> GameState:
    """5x5 board with no mines for cascade testing."""
    return GameState(board=build_board(BoardConfig(5, 5, 0), []))


@pytest.fixture
def corner_mine_state() -> GameState:
    """
    5x5 board with one mine in the bottom-right corner.

    Layout (M = mine):
        0 0 0 0 0
        0 0 0 0 0
        0 0 0 0 0
        0 0 0 1 1
        0 0 0 1 M
    """
    return GameState(board=build_board(BoardConfig(5, 5, 1), [24]))


@pytest.fixture
def wall_state() -> GameState:
    """
    5x3 board with a column of mines splitting it in two.

    Layout (M = mine):
        0 2 M 2 0
        0 3 M 3 0
        0 2 M 2 0
    """
    return GameState(board=build_board(BoardConfig(5, 3, 3), [2, 7, 12]))


# ============================================================================
# Tile Fixtures
# ============================================================================

@pytest.fixture
def hidden_tile() -> Tile:
    """Create a hidden safe tile."""
    return Tile()


@pytest.fixture
def mine_tile() -> Tile:
    """Create a hidden mine."""
    return Tile(is_mine=True)
