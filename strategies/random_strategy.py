"""Baseline player that wanders the board."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hanoi_engine.actions import MoveDisc
    from hanoi_engine.state import GameState


class RandomStrategy:
    """Picks a legal move at random, avoiding stepping straight back.

    Moving the disc just played back to where it came from is only chosen
    when nothing else is legal.
    """

    name = "Random"

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def select_move(self, state: GameState, legal_moves: list[MoveDisc]) -> MoveDisc:
        if not legal_moves:
            raise ValueError("No legal moves available")

        if state.history:
            last = state.history[-1]
            forward = [
                m for m in legal_moves
                if (m.from_tower, m.to_tower) != (last.to_tower, last.from_tower)
            ]
            if forward:
                legal_moves = forward
        return self._rng.choice(legal_moves)
