"""Game strategies for Burraco."""

from __future__ import annotations

from strategies.base import Strategy
from strategies.dumb import DumbStrategy
from strategies.greedy import GreedyStrategy
from strategies.heuristic import HeuristicStrategy
from strategies.random_strategy import RandomStrategy

AVAILABLE_STRATEGIES = {
    "dumb": "Alternating draw, last action, first card discard (baseline)",
    "random": "Random player (baseline)",
    "greedy": "Plays the highest scoring action",
    "heuristic": "Rule-based heuristic player",
}


def create_strategy(name: str, seed: int | None = None) -> Strategy:
    """Create a strategy instance by name.

    Args:
        name: One of AVAILABLE_STRATEGIES, case insensitive.
        seed: Random seed for strategies that use one.

    Raises:
        ValueError: If the name is unknown.
    """
    match name.lower():
        case "dumb":
            return DumbStrategy()
        case "random":
            return RandomStrategy(seed=seed)
        case "greedy":
            return GreedyStrategy()
        case "heuristic":
            return HeuristicStrategy()
        case _:
            raise ValueError(f"Unknown strategy: {name}")


__all__ = [
    "AVAILABLE_STRATEGIES",
    "Strategy",
    "DumbStrategy",
    "RandomStrategy",
    "GreedyStrategy",
    "HeuristicStrategy",
    "create_strategy",
]
