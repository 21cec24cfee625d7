"""Immutable game state models for the tower puzzle."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from hanoi_engine.discs import Disc

if TYPE_CHECKING:
    from collections.abc import Sequence

    from hanoi_engine.characters import Character
    from hanoi_engine.discs import Difficulty


class InsufficientRosterError(ValueError):
    """Raised when the roster is smaller than the difficulty's disc count."""

    pass


class InvariantViolation(AssertionError):
    """Raised by check_invariants when a state is corrupt."""

    pass


@dataclass(frozen=True, slots=True)
class Tower:
    """One of the three stacks.

    Attributes:
        id: 0, 1 or 2
        discs: Discs from bottom to top
        is_source: Tower holding all discs at the start
        is_target: Tower that must hold all discs to win
    """

    id: int
    discs: tuple[Disc, ...] = ()
    is_source: bool = False
    is_target: bool = False

    @property
    def top_disc(self) -> Disc | None:
        """Top disc, or None if the tower is empty."""
        return self.discs[-1] if self.discs else None

    @property
    def disc_count(self) -> int:
        return len(self.discs)

    @property
    def is_empty(self) -> bool:
        return not self.discs

    @property
    def sizes(self) -> tuple[int, ...]:
        """Disc sizes from bottom to top."""
        return tuple(disc.size for disc in self.discs)

    def with_discs(self, discs: tuple[Disc, ...]) -> Tower:
        """Return a new tower with the same id and flags."""
        return Tower(
            id=self.id,
            discs=discs,
            is_source=self.is_source,
            is_target=self.is_target,
        )


@dataclass(frozen=True, slots=True)
class HintMove:
    """A suggested transfer between two towers."""

    from_tower: int
    to_tower: int

    def __str__(self) -> str:
        return f"Tower {self.from_tower + 1} → Tower {self.to_tower + 1}"


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """An executed move, kept in history for undo."""

    from_tower: int
    to_tower: int
    disc: Disc
    timestamp: float


@dataclass(frozen=True, slots=True)
class GameState:
    """Complete immutable game state.

    Attributes:
        towers: The three towers, indexed by tower id
        difficulty: Active difficulty level
        start_time: When the current game started (seconds)
        selected_disc: Disc picked up by the player, if any
        selected_tower: Tower the selected disc sits on
        move_count: Number of executed moves, equal to len(history)
        is_complete: Whether the target tower holds every disc
        end_time: Set once, when the game completes
        show_hint: Whether a hint is being displayed
        hint_move: Hint being displayed (None if no hint was available)
        history: Executed moves, oldest first
        hints_used: Hint activations since the last reset
    """

    towers: tuple[Tower, Tower, Tower]
    difficulty: Difficulty
    start_time: float
    selected_disc: Disc | None = None
    selected_tower: int | None = None
    move_count: int = 0
    is_complete: bool = False
    end_time: float | None = None
    show_hint: bool = False
    hint_move: HintMove | None = None
    history: tuple[MoveRecord, ...] = ()
    hints_used: int = 0

    @property
    def disc_total(self) -> int:
        return sum(tower.disc_count for tower in self.towers)

    @property
    def source_tower(self) -> Tower:
        return next(tower for tower in self.towers if tower.is_source)

    @property
    def target_tower(self) -> Tower:
        return next(tower for tower in self.towers if tower.is_target)

    def has_tower(self, tower_id: int) -> bool:
        return 0 <= tower_id < len(self.towers)

    def top_disc(self, tower_id: int) -> Disc | None:
        return self.towers[tower_id].top_disc

    def disc_count_of(self, tower_id: int) -> int:
        return self.towers[tower_id].disc_count

    def find_disc(self, disc_id: str) -> tuple[Disc, int] | None:
        """Locate a disc by id.

        Returns:
            (disc, tower_id) or None if no tower holds it.
        """
        for tower in self.towers:
            for disc in tower.discs:
                if disc.id == disc_id:
                    return disc, tower.id
        return None

    def with_selection(self, disc: Disc | None, tower_id: int | None) -> GameState:
        """Return new state with the selection replaced."""
        return replace(self, selected_disc=disc, selected_tower=tower_id)

    def without_selection(self) -> GameState:
        return replace(self, selected_disc=None, selected_tower=None)

    def with_hint(self, hint_move: HintMove | None) -> GameState:
        """Return new state showing a hint and counting the activation."""
        return replace(
            self,
            show_hint=True,
            hint_move=hint_move,
            hints_used=self.hints_used + 1,
        )

    def without_hint(self) -> GameState:
        return replace(self, show_hint=False, hint_move=None)


def _build_towers(discs: Sequence[Disc]) -> tuple[Tower, Tower, Tower]:
    stacked = tuple(sorted(discs, key=lambda disc: disc.size, reverse=True))
    return (
        Tower(id=0, discs=stacked, is_source=True),
        Tower(id=1),
        Tower(id=2, is_target=True),
    )


def create_initial_state(
    roster: Sequence[Character],
    difficulty: Difficulty,
    now: float,
) -> GameState:
    """Create the initial game state.

    The first N characters of the roster become discs, the first one being
    the largest. All discs start on the source tower.

    Args:
        roster: Characters to borrow identities from (at least N).
        difficulty: Difficulty level giving N.
        now: Start timestamp in seconds.

    Raises:
        DifficultyConfigError: If the difficulty is inconsistent.
        InsufficientRosterError: If the roster has fewer than N characters.
        ValueError: If the chosen characters are not distinct.
    """
    difficulty.verify()
    count = difficulty.character_count
    if len(roster) < count:
        raise InsufficientRosterError(
            f"Difficulty {difficulty.id!r} needs {count} characters, roster has {len(roster)}"
        )

    characters = list(roster[:count])
    ids = [character.id for character in characters]
    if len(set(ids)) != len(ids):
        raise ValueError(f"Roster characters must be distinct, got ids {ids}")

    discs = [Disc(character=character, size=count - index) for index, character in enumerate(characters)]
    return GameState(
        towers=_build_towers(discs),
        difficulty=difficulty,
        start_time=now,
    )


def reset_state(state: GameState, now: float) -> GameState:
    """Rebuild a fresh board from the discs of an existing game."""
    discs = [disc for tower in state.towers for disc in tower.discs]
    return GameState(
        towers=_build_towers(discs),
        difficulty=state.difficulty,
        start_time=now,
    )


def check_invariants(state: GameState) -> None:
    """Verify the structural invariants of a state.

    Raises:
        InvariantViolation: On the first broken invariant.
    """
    expected = state.difficulty.character_count
    if state.disc_total != expected:
        raise InvariantViolation(f"Expected {expected} discs, found {state.disc_total}")

    for tower in state.towers:
        sizes = tower.sizes
        if any(lower <= upper for lower, upper in zip(sizes, sizes[1:])):
            raise InvariantViolation(f"Tower {tower.id} is not strictly decreasing: {sizes}")

    if (state.selected_disc is None) != (state.selected_tower is None):
        raise InvariantViolation("Selected disc and origin tower must be set together")
    if state.selected_disc is not None:
        if state.top_disc(state.selected_tower) != state.selected_disc:
            raise InvariantViolation(
                f"Selected disc {state.selected_disc} is not on top of tower {state.selected_tower}"
            )

    if state.move_count != len(state.history):
        raise InvariantViolation(
            f"move_count={state.move_count} but history has {len(state.history)} moves"
        )

    solved = state.target_tower.disc_count == expected
    if state.is_complete != solved:
        raise InvariantViolation(
            f"is_complete={state.is_complete} but target tower holds "
            f"{state.target_tower.disc_count}/{expected} discs"
        )
