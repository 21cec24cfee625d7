"""Move legality for the tower puzzle."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hanoi_engine.actions import MoveDisc

if TYPE_CHECKING:
    from hanoi_engine.discs import Disc
    from hanoi_engine.state import GameState, Tower


def can_place(disc: Disc, tower: Tower) -> bool:
    """Whether `disc` may land on `tower`.

    A disc may go on an empty tower or on a strictly larger disc.
    """
    top = tower.top_disc
    if top is None:
        return True
    return disc.size < top.size


def generate_legal_moves(state: GameState) -> list[MoveDisc]:
    """Generate all legal moves for the current state.

    Args:
        state: Current game state.

    Returns:
        Moves in (from, to) ascending order. Empty once the game is complete.
    """
    if state.is_complete:
        return []

    moves = []
    for from_tower in state.towers:
        disc = from_tower.top_disc
        if disc is None:
            continue
        for to_tower in state.towers:
            if to_tower.id == from_tower.id:
                continue
            if can_place(disc, to_tower):
                moves.append(MoveDisc(from_tower=from_tower.id, to_tower=to_tower.id))
    return moves
