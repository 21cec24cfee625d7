"""Pure state transitions for the tower puzzle.

`reduce` maps (state, action) to the next state. Rejected actions return the
incoming state object unchanged, so callers can detect a no-op with `is`.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from hanoi_engine.actions import (
    Action,
    ClickTower,
    MoveDisc,
    Reset,
    SelectDisc,
    ToggleHint,
    Undo,
)
from hanoi_engine.hints import suggest_move
from hanoi_engine.rules import can_place
from hanoi_engine.state import MoveRecord, reset_state

if TYPE_CHECKING:
    from hanoi_engine.hints import Advisor
    from hanoi_engine.state import GameState

logger = logging.getLogger(__name__)


class IllegalMoveError(Exception):
    """Raised when an illegal move or undo is attempted."""

    pass


def reduce(
    state: GameState,
    action: Action,
    now: float,
    advisor: Advisor = suggest_move,
) -> GameState:
    """Apply an action and return the resulting state.

    Args:
        state: Current game state.
        action: Action to apply.
        now: Current time in seconds, used for history and completion.
        advisor: Hint advisor used by ToggleHint.

    Returns:
        The new state, or `state` itself if the action was rejected.
    """
    if state.is_complete and not isinstance(action, Reset):
        logger.debug("Ignoring %s: game is complete", action)
        return state

    try:
        match action:
            case ClickTower():
                return _click_tower(state, action.tower_id, now)
            case SelectDisc():
                return _select_disc(state, action.disc_id)
            case MoveDisc():
                return apply_move(state, action.from_tower, action.to_tower, now)
            case Undo():
                return apply_undo(state)
            case ToggleHint():
                return _toggle_hint(state, advisor)
            case Reset():
                return reset_state(state, now)
            case _:
                raise IllegalMoveError(f"Unknown action type: {type(action)}")
    except IllegalMoveError as e:
        logger.debug("Rejected %s: %s", action, e)
        return state


def apply_move(state: GameState, from_tower: int, to_tower: int, now: float) -> GameState:
    """Move the top disc of `from_tower` onto `to_tower`.

    The towers, move count and history change together in one new state.
    Selection and hint are cleared, then completion is checked.

    Raises:
        IllegalMoveError: If the move is not legal.
    """
    if state.is_complete:
        raise IllegalMoveError("Game is already complete")
    if from_tower == to_tower:
        raise IllegalMoveError("Source and destination are the same tower")
    if not state.has_tower(from_tower) or not state.has_tower(to_tower):
        raise IllegalMoveError(f"No such tower: {from_tower} → {to_tower}")

    source = state.towers[from_tower]
    destination = state.towers[to_tower]
    disc = source.top_disc
    if disc is None:
        raise IllegalMoveError(f"Tower {from_tower} is empty")
    if not can_place(disc, destination):
        raise IllegalMoveError(f"Disc {disc} cannot be placed on tower {to_tower}")

    towers = list(state.towers)
    towers[from_tower] = source.with_discs(source.discs[:-1])
    towers[to_tower] = destination.with_discs(destination.discs + (disc,))

    new_state = replace(
        state,
        towers=(towers[0], towers[1], towers[2]),
        move_count=state.move_count + 1,
        history=state.history + (MoveRecord(from_tower, to_tower, disc, now),),
        selected_disc=None,
        selected_tower=None,
        show_hint=False,
        hint_move=None,
    )
    return _check_completion(new_state, now)


def apply_undo(state: GameState) -> GameState:
    """Take back the last move.

    Raises:
        IllegalMoveError: If there is nothing to undo, or the history does
            not match the towers.
    """
    if state.is_complete:
        raise IllegalMoveError("Game is already complete")
    if not state.history:
        raise IllegalMoveError("Nothing to undo")

    last = state.history[-1]
    landed = state.towers[last.to_tower]
    if landed.top_disc != last.disc:
        raise IllegalMoveError(
            f"History says {last.disc} is on top of tower {last.to_tower}, found {landed.top_disc}"
        )
    origin = state.towers[last.from_tower]

    towers = list(state.towers)
    towers[last.to_tower] = landed.with_discs(landed.discs[:-1])
    towers[last.from_tower] = origin.with_discs(origin.discs + (last.disc,))

    return replace(
        state,
        towers=(towers[0], towers[1], towers[2]),
        move_count=max(0, state.move_count - 1),
        history=state.history[:-1],
        selected_disc=None,
        selected_tower=None,
        show_hint=False,
        hint_move=None,
    )


def _click_tower(state: GameState, tower_id: int, now: float) -> GameState:
    """Translate a tower click into select, deselect or move."""
    if not state.has_tower(tower_id):
        raise IllegalMoveError(f"No such tower: {tower_id}")

    if state.selected_disc is None:
        top = state.top_disc(tower_id)
        if top is None:
            raise IllegalMoveError(f"Tower {tower_id} is empty")
        return state.with_selection(top, tower_id)

    if tower_id == state.selected_tower:
        return state.without_selection()

    return apply_move(state, state.selected_tower, tower_id, now)


def _select_disc(state: GameState, disc_id: str) -> GameState:
    """Select a disc directly; only top discs can be picked up."""
    found = state.find_disc(disc_id)
    if found is None:
        raise IllegalMoveError(f"No such disc: {disc_id}")

    disc, tower_id = found
    if state.top_disc(tower_id) != disc:
        raise IllegalMoveError(f"Disc {disc} is not on top of tower {tower_id}")

    if state.selected_disc == disc:
        return state.without_selection()
    return state.with_selection(disc, tower_id)


def _toggle_hint(state: GameState, advisor: Advisor) -> GameState:
    if state.show_hint:
        return state.without_hint()
    return state.with_hint(advisor(state.towers))


def _check_completion(state: GameState, now: float) -> GameState:
    """Enter the terminal state if the target tower holds every disc."""
    if state.is_complete:
        return state
    if state.target_tower.disc_count != state.difficulty.character_count:
        return state

    logger.info("Puzzle solved in %d moves", state.move_count)
    return replace(
        state,
        is_complete=True,
        end_time=now,
        selected_disc=None,
        selected_tower=None,
        show_hint=False,
        hint_move=None,
    )
