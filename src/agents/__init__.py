"""
Minesweeper agents module.

Provides agents that play through MinesweeperEnv:
- DeductionAgent: Single-number constraint deduction, guessing when stuck
- Evaluator: Runs an agent over many games and aggregates results
"""
from .deduction_agent import DeductionAgent
from .evaluator import Evaluator

__all__ = [
    "DeductionAgent",
    "Evaluator",
]
