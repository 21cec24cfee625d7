"""Factory for creating strategy instances."""

from __future__ import annotations

from typing import Any

from strategies.base import Strategy


class StrategyFactory:
    """Creates strategies by name."""

    AVAILABLE_STRATEGIES = {
        "random": "Random legal moves (baseline)",
        "greedy": "Follows the greedy hint heuristic",
        "optimal": "Follows the shortest solution",
    }

    def create(self, name: str, params: dict[str, Any] | None = None) -> Strategy:
        """Create a strategy instance."""
        params = params or {}
        name_lower = name.lower()

        match name_lower:
            case "random":
                from strategies.random_strategy import RandomStrategy
                return RandomStrategy(seed=params.get("seed"))

            case "greedy":
                from strategies.hint_strategies import GreedyStrategy
                return GreedyStrategy()

            case "optimal":
                from strategies.hint_strategies import OptimalStrategy
                return OptimalStrategy()

            case _:
                raise ValueError(f"Unknown strategy: {name}")

    def list_strategies(self) -> dict[str, str]:
        """List available strategies with descriptions."""
        return self.AVAILABLE_STRATEGIES.copy()
