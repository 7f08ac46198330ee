"""
Gymnasium environment wrapper for the Minesweeper engine.

Provides a standard RL interface. The environment holds a GameState and
advances it only through pick, so every step goes through the same
rules as any other caller.
"""
import random
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import REFERENCE, BoardConfig
from .state import Action, GameState, pick, reset


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden tile
        - -2 = flagged tile
        - 0-8 = revealed tile with adjacent mine count
        - 9 = revealed mine (only once the game is over)

    Actions:
        Discrete action space of size width * height.
        Action i clears the tile at linear index i.

    Rewards:
        - +1 for revealing a safe tile
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for a redundant action (already revealed)
    """

    metadata = {"render_modes": []}

    def __init__(self, config: Optional[BoardConfig] = None) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 10x8 with 10 mines).
        """
        super().__init__()

        self.config = config or REFERENCE
        self.state: Optional[GameState] = None

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.tile_count)

        self._steps = 0
        self._total_safe_tiles = self.config.tile_count - self.config.mine_count

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        rng = random.Random(int(self.np_random.integers(2**32)))
        self.state = reset(self.config, rng)
        self._steps = 0

        return self.state.to_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Tile index to clear.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if self.state is None:
            raise RuntimeError("Call reset() before step()")

        self._steps += 1
        reward = self._apply_clear(int(action))

        observation = self.state.to_observation()
        terminated = self.state.game_over
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _apply_clear(self, index: int) -> float:
        """Clear a tile and score the result."""
        previous = self.state
        self.state = pick(previous, Action.CLEAR, index)

        if self.state is previous:
            return -0.1
        if self.state.win:
            return 10.0
        if self.state.game_over:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        if self.state.win:
            outcome = "WON"
        elif self.state.game_over:
            outcome = "LOST"
        else:
            outcome = "PLAYING"

        return {
            "steps": self._steps,
            "revealed": self.state.revealed_count(),
            "total_safe": self._total_safe_tiles,
            "game_state": outcome,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = hidden, unflagged tile.
        """
        return np.array(
            [tile.is_hidden and not tile.flagged for tile in self.state.board.tiles],
            dtype=bool,
        )
