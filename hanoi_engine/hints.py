"""Hint advisors.

Two advisors are available:

1. ``greedy`` (default): a local heuristic that favours moves toward the
   target tower and out of the source tower, smallest disc first. It is
   cheap and child-friendly but does not always lie on a shortest solution
   path once there are more than three discs.
2. ``optimal``: the first move of the shortest solution from the current
   position, using the classical three-tower recursion evaluated from the
   largest disc down.

Both are pure functions of the towers and return None when they have
nothing to suggest.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from hanoi_engine.rules import can_place
from hanoi_engine.state import HintMove

if TYPE_CHECKING:
    from collections.abc import Sequence

    from hanoi_engine.state import Tower

Advisor = Callable[["Sequence[Tower]"], "HintMove | None"]


def suggest_move(towers: Sequence[Tower]) -> HintMove | None:
    """Suggest a move with the greedy heuristic.

    Preferred candidates land on the target tower, or leave the source tower
    for the spare one. The smallest disc wins; ties keep the first (from, to)
    pair in tower order. When no preferred candidate exists the smallest
    legal move is returned instead.
    """
    best_preferred: tuple[int, HintMove] | None = None
    best_other: tuple[int, HintMove] | None = None

    for from_tower in towers:
        disc = from_tower.top_disc
        if disc is None:
            continue
        for to_tower in towers:
            if to_tower.id == from_tower.id or not can_place(disc, to_tower):
                continue

            candidate = (disc.size, HintMove(from_tower.id, to_tower.id))
            preferred = to_tower.is_target or (from_tower.is_source and not to_tower.is_target)
            if preferred:
                if best_preferred is None or disc.size < best_preferred[0]:
                    best_preferred = candidate
            elif best_other is None or disc.size < best_other[0]:
                best_other = candidate

    best = best_preferred or best_other
    return best[1] if best else None


def optimal_move(towers: Sequence[Tower]) -> HintMove | None:
    """First move of the shortest path to a solved board.

    Walking from the largest disc down: a disc already on its goal keeps the
    goal for the smaller discs; a disc off its goal must eventually move
    there, so every smaller disc must first gather on the spare tower. The
    smallest misplaced disc is free to move right now.
    """
    tower_ids = {tower.id for tower in towers}
    goal = next(tower.id for tower in towers if tower.is_target)
    position = {disc.size: tower.id for tower in towers for disc in tower.discs}

    move = None
    for size in sorted(position, reverse=True):
        current = position[size]
        if current == goal:
            continue
        move = HintMove(current, goal)
        goal = (tower_ids - {current, goal}).pop()
    return move


ADVISORS: dict[str, Advisor] = {
    "greedy": suggest_move,
    "optimal": optimal_move,
}


def get_advisor(name: str) -> Advisor:
    """Look up an advisor by name.

    Raises:
        ValueError: If the name is unknown.
    """
    try:
        return ADVISORS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown hint strategy: {name}") from None
