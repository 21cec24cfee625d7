"""Completion statistics."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hanoi_engine.discs import Difficulty
    from hanoi_engine.state import GameState


@dataclass(frozen=True, slots=True)
class GameStats:
    """Snapshot emitted once when a puzzle is solved.

    Attributes:
        move_count: Moves the player needed
        optimal_moves: Documented minimum for the difficulty
        time_elapsed: Whole seconds from start to completion
        efficiency: optimal / actual as a percentage, may exceed 100
        difficulty: Difficulty that was played
        hints_used: Hint activations during the game
    """

    move_count: int
    optimal_moves: int
    time_elapsed: int
    efficiency: int
    difficulty: Difficulty
    hints_used: int

    @property
    def victory_message(self) -> str:
        return victory_message(self.efficiency)


def efficiency(optimal_moves: int, move_count: int) -> int:
    """Percentage of the optimal move count, not clamped, halves rounded up."""
    return math.floor(optimal_moves / max(move_count, 1) * 100 + 0.5)


def live_efficiency(move_count: int, optimal_moves: int) -> int:
    """Efficiency shown while playing; 100 before the first move."""
    if move_count == 0:
        return 100
    return efficiency(optimal_moves, move_count)


def elapsed_seconds(start_time: float, end_time: float) -> int:
    return max(0, math.floor(end_time - start_time))


def compute_stats(state: GameState) -> GameStats:
    """Build the completion snapshot for a finished game.

    Raises:
        ValueError: If the game is not complete.
    """
    if not state.is_complete or state.end_time is None:
        raise ValueError("Stats are only available once the puzzle is solved")

    optimal = state.difficulty.min_moves
    return GameStats(
        move_count=state.move_count,
        optimal_moves=optimal,
        time_elapsed=elapsed_seconds(state.start_time, state.end_time),
        efficiency=efficiency(optimal, state.move_count),
        difficulty=state.difficulty,
        hints_used=state.hints_used,
    )


def victory_message(efficiency: int) -> str:
    if efficiency >= 95:
        return "Incroyable ! Tu es un maître des tours ! 🏆"
    elif efficiency >= 80:
        return "Excellent travail ! Tu es très doué ! ⭐"
    elif efficiency >= 60:
        return "Bien joué ! Tu progresses rapidement ! 👏"
    return "Bravo ! Continue comme ça ! 🎉"


def format_time(seconds: int) -> str:
    """Format seconds as m:ss."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{secs:02d}"
