"""Game runner for tower puzzle simulations."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from hanoi_engine.characters import pick_characters
from hanoi_engine.clock import ManualClock
from hanoi_engine.controller import GameController
from hanoi_engine.rules import generate_legal_moves

if TYPE_CHECKING:
    from hanoi_engine.discs import Difficulty
    from hanoi_engine.state import GameState
    from strategies.base import Strategy

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a finished or abandoned game."""

    game_id: str
    difficulty: str
    strategy: str
    solved: bool
    move_count: int
    optimal_moves: int
    efficiency: int | None  # None if the puzzle was not solved
    hints_used: int
    seed: int | None
    duration_ms: float


@dataclass
class MoveRecord:
    """Record of a single move."""

    number: int
    move: str
    towers_after: list[list[int]]


@dataclass
class GameLog:
    """Complete log of a game, kept in memory only."""

    game_id: str
    timestamp: str
    seed: int | None
    strategy: str
    difficulty: str
    initial_towers: list[list[int]]
    moves: list[MoveRecord] = field(default_factory=list)
    result: GameResult | None = None


class GameRunner:
    """Runs tower puzzles with an autoplay strategy."""

    def __init__(
        self,
        strategy: Strategy,
        max_moves: int = 1000,
        log_moves: bool = True,
        seconds_per_move: float = 1.0,
    ):
        """Initialize the game runner.

        Args:
            strategy: Strategy choosing the moves.
            max_moves: Moves before the game is abandoned.
            log_moves: Whether to log individual moves.
            seconds_per_move: Simulated time spent on each move.
        """
        self.strategy = strategy
        self.max_moves = max_moves
        self.log_moves = log_moves
        self.seconds_per_move = seconds_per_move

    def run_game(
        self, difficulty: Difficulty, seed: int | None = None
    ) -> tuple[GameResult, GameLog | None]:
        """Run a single game.

        Args:
            difficulty: Difficulty to play.
            seed: Random seed for the roster shuffle.

        Returns:
            Tuple of (result, log). Log is None if log_moves is False.
        """
        start_time = time.perf_counter()
        game_id = str(uuid.uuid4())
        clock = ManualClock()
        roster = pick_characters(difficulty.character_count, seed=seed)

        with GameController(roster, difficulty, clock=clock, scheduler=clock) as controller:
            game_log = None
            if self.log_moves:
                game_log = GameLog(
                    game_id=game_id,
                    timestamp=datetime.now().isoformat(),
                    seed=seed,
                    strategy=self.strategy.name,
                    difficulty=difficulty.id,
                    initial_towers=_towers_to_lists(controller.state),
                )

            while not controller.state.is_complete and controller.state.move_count < self.max_moves:
                legal_moves = generate_legal_moves(controller.state)
                if not legal_moves:
                    # Unreachable on a valid board
                    break

                move = self.strategy.select_move(controller.state, legal_moves)
                clock.advance(self.seconds_per_move)
                if not controller.dispatch(move):
                    logger.warning("%s chose a rejected move: %s", self.strategy.name, move)
                    break

                if game_log:
                    game_log.moves.append(
                        MoveRecord(
                            number=controller.state.move_count,
                            move=str(move),
                            towers_after=_towers_to_lists(controller.state),
                        )
                    )

            state = controller.state
            stats = controller.stats

        duration_ms = (time.perf_counter() - start_time) * 1000
        result = GameResult(
            game_id=game_id,
            difficulty=difficulty.id,
            strategy=self.strategy.name,
            solved=state.is_complete,
            move_count=state.move_count,
            optimal_moves=difficulty.min_moves,
            efficiency=stats.efficiency if stats else None,
            hints_used=state.hints_used,
            seed=seed,
            duration_ms=duration_ms,
        )

        if game_log:
            game_log.result = result

        return result, game_log


def _towers_to_lists(state: GameState) -> list[list[int]]:
    return [list(tower.sizes) for tower in state.towers]


def run_batch(
    strategy: Strategy,
    difficulty: Difficulty,
    num_games: int,
    start_seed: int = 0,
    max_moves: int = 1000,
) -> list[GameResult]:
    """Run multiple games.

    Args:
        strategy: Strategy choosing the moves.
        difficulty: Difficulty to play.
        num_games: Number of games to run.
        start_seed: Starting seed (incremented for each game).
        max_moves: Moves before each game is abandoned.

    Returns:
        List of game results.
    """
    runner = GameRunner(strategy, max_moves=max_moves, log_moves=False)
    results = []

    for i in range(num_games):
        result, _ = runner.run_game(difficulty, seed=start_seed + i)
        results.append(result)

    return results
