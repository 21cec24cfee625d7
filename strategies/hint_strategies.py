"""Strategies that play whatever the hint advisors suggest."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hanoi_engine.actions import MoveDisc
from hanoi_engine.hints import optimal_move, suggest_move

if TYPE_CHECKING:
    from hanoi_engine.hints import Advisor
    from hanoi_engine.state import GameState


class AdvisorStrategy:
    """Play the advisor's suggestion, or the first legal move without one."""

    def __init__(self, advisor: Advisor, name: str):
        self._advisor = advisor
        self.name = name

    def select_move(self, state: GameState, legal_moves: list[MoveDisc]) -> MoveDisc:
        if not legal_moves:
            raise ValueError("No legal moves available")

        hint = self._advisor(state.towers)
        if hint is not None:
            suggested = MoveDisc(hint.from_tower, hint.to_tower)
            if suggested in legal_moves:
                return suggested
        return legal_moves[0]


class GreedyStrategy(AdvisorStrategy):
    """Follows the greedy hint heuristic.

    The heuristic can cycle on larger boards, so runs need a move cap.
    """

    def __init__(self):
        super().__init__(suggest_move, "Greedy")


class OptimalStrategy(AdvisorStrategy):
    """Follows the shortest solution; solves a fresh board in 2**N - 1 moves."""

    def __init__(self):
        super().__init__(optimal_move, "Optimal")
