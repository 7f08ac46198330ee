#!/usr/bin/env python3
"""
Minesweeper engine - Main entry point.

Usage:
    python main.py evaluate [--agent {deduce,guess}] [--games N] [--seed S]
                            [--width W] [--height H] [--mines M]
"""
import argparse
import logging

from minefield.board import REFERENCE, BoardConfig
from agents import DeductionAgent, Evaluator


AGENT_NAMES = {
    "deduce": "Deduction",
    "guess": "Guessing",
}


def build_config(args: argparse.Namespace) -> BoardConfig:
    """Build a board configuration from command-line overrides."""
    return BoardConfig(
        width=REFERENCE.width if args.width is None else args.width,
        height=REFERENCE.height if args.height is None else args.height,
        mine_count=REFERENCE.mine_count if args.mines is None else args.mines,
    )


def evaluate(
    args: argparse.Namespace, config: BoardConfig, evaluator: Evaluator
) -> None:
    """Play an agent over several games and print results."""
    agent = DeductionAgent(config, seed=args.seed, deduce=args.agent == "deduce")
    name = AGENT_NAMES[args.agent]

    print(
        f"Evaluating {name} over {args.games} games on "
        f"{config.width}x{config.height} with {config.mine_count} mines..."
    )
    results = evaluator.evaluate(agent, seed=args.seed)

    print(f"Results for {name}:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg reward: {results['avg_reward']:.2f}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} tiles")
    print(f"  Certain moves: {agent.certain_moves}, guesses: {agent.guesses_made}")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper engine - play agents against the board"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show engine debug logs"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    eval_parser = subparsers.add_parser("evaluate", help="Evaluate an agent")
    eval_parser.add_argument(
        "--agent",
        choices=sorted(AGENT_NAMES),
        default="deduce",
        help="Deduce safe tiles, or only guess",
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    eval_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for boards and guesses"
    )
    eval_parser.add_argument("--width", type=int, default=None)
    eval_parser.add_argument("--height", type=int, default=None)
    eval_parser.add_argument("--mines", type=int, default=None)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "evaluate":
        try:
            config = build_config(args)
            evaluator = Evaluator(config, num_episodes=args.games)
        except ValueError as exc:
            parser.error(str(exc))
        evaluate(args, config, evaluator)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
