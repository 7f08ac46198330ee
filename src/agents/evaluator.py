"""
Evaluation loop for Minesweeper agents.

Plays an agent over a number of games and aggregates the results.
"""
from typing import Dict, Optional

from minefield.board import REFERENCE, BoardConfig
from minefield.environment import MinesweeperEnv

from .deduction_agent import DeductionAgent


# ============================================================================
# Evaluator
# ============================================================================

class Evaluator:
    """
    Evaluate and compare agents.

    Plays every agent on the same sequence of boards when seeded.
    """

    def __init__(
        self,
        board_config: Optional[BoardConfig] = None,
        num_episodes: int = 100,
        max_steps: Optional[int] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            board_config: Board configuration for evaluation.
            num_episodes: Number of evaluation episodes.
            max_steps: Maximum steps per episode (default: tile count).

        Raises:
            ValueError: If num_episodes is not positive.
        """
        if num_episodes < 1:
            raise ValueError("Number of episodes must be positive")

        self.board_config = board_config or REFERENCE
        self.num_episodes = num_episodes
        self.max_steps = max_steps or self.board_config.tile_count

    def evaluate(
        self, agent: DeductionAgent, seed: Optional[int] = None
    ) -> Dict[str, float]:
        """
        Evaluate a single agent.

        Args:
            agent: Agent to evaluate.
            seed: Seed for the first episode's board; later boards
                follow from it.

        Returns:
            Dictionary with evaluation metrics.
        """
        env = MinesweeperEnv(config=self.board_config)

        wins = 0
        total_reward = 0.0
        total_steps = 0
        total_revealed = 0

        for episode in range(self.num_episodes):
            observation, info = env.reset(seed=seed if episode == 0 else None)
            agent.reset()
            episode_reward = 0.0

            for _ in range(self.max_steps):
                action = agent.select_action(observation, env.get_action_mask())
                observation, reward, terminated, truncated, info = env.step(
                    action
                )

                episode_reward += reward
                total_steps += 1

                if terminated or truncated:
                    if info["game_state"] == "WON":
                        wins += 1
                    break

            total_revealed += info["revealed"]
            total_reward += episode_reward

        return {
            "win_rate": wins / self.num_episodes,
            "avg_reward": total_reward / self.num_episodes,
            "avg_steps": total_steps / self.num_episodes,
            "avg_revealed": total_revealed / self.num_episodes,
        }

    def compare(
        self, agents: Dict[str, DeductionAgent], seed: Optional[int] = None
    ) -> Dict[str, Dict[str, float]]:
        """
        Compare multiple agents on the same sequence of boards.

        Args:
            agents: Dictionary of agent_name -> agent.
            seed: Seed shared by every agent's evaluation.

        Returns:
            Dictionary of agent_name -> evaluation metrics.
        """
        return {
            name: self.evaluate(agent, seed=seed)
            for name, agent in agents.items()
        }
