"""Autoplay strategies for the tower puzzle."""

from strategies.base import Strategy
from strategies.factory import StrategyFactory
from strategies.hint_strategies import AdvisorStrategy, GreedyStrategy, OptimalStrategy
from strategies.random_strategy import RandomStrategy

__all__ = [
    "Strategy",
    "StrategyFactory",
    "AdvisorStrategy",
    "GreedyStrategy",
    "OptimalStrategy",
    "RandomStrategy",
]
