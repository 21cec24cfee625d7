"""Game controller: owns the state and turns input events into transitions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from hanoi_engine.actions import (
    ClickTower,
    MoveDisc,
    Reset,
    SelectDisc,
    ToggleHint,
    Undo,
)
from hanoi_engine.clock import SystemClock
from hanoi_engine.hints import get_advisor
from hanoi_engine.reducer import reduce
from hanoi_engine.state import check_invariants, create_initial_state
from hanoi_engine.stats import compute_stats, elapsed_seconds

if TYPE_CHECKING:
    from collections.abc import Sequence

    from hanoi_engine.actions import Action
    from hanoi_engine.characters import Character
    from hanoi_engine.clock import Clock, Scheduler, TimerHandle
    from hanoi_engine.discs import Difficulty
    from hanoi_engine.state import GameState
    from hanoi_engine.stats import GameStats

logger = logging.getLogger(__name__)

StateListener = Callable[["GameState", "GameState", "Action"], None]


class GameController:
    """Single owner of a tower puzzle's state.

    Every board change goes through `dispatch`, which runs the pure reducer
    and swaps in the resulting state in one assignment. The controller also
    runs the elapsed-time tick and fires the completion callback.

    Args:
        roster: Characters to build discs from (at least N).
        difficulty: Difficulty level.
        on_complete: Called once with the stats when the puzzle is solved.
        clock: Time source. Defaults to the system clock.
        scheduler: Drives the elapsed-time tick. No tick runs without one.
        advisor: Name of the hint advisor ("greedy" or "optimal").
        tick_seconds: Interval of the elapsed-time tick.
        verify_invariants: Check state invariants after every transition.

    Raises:
        InsufficientRosterError: If the roster is too small.
        DifficultyConfigError: If the difficulty is inconsistent.
        ValueError: On an unknown advisor.
    """

    def __init__(
        self,
        roster: Sequence[Character],
        difficulty: Difficulty,
        on_complete: Callable[[GameStats], None] | None = None,
        clock: Clock | None = None,
        scheduler: Scheduler | None = None,
        advisor: str = "greedy",
        tick_seconds: float = 1.0,
        verify_invariants: bool = False,
    ):
        self._clock = clock or SystemClock()
        self._scheduler = scheduler
        self._advisor_name = advisor
        self._advisor = get_advisor(advisor)
        self._tick_seconds = tick_seconds
        self._verify_invariants = verify_invariants
        self._on_complete = on_complete

        self._state = create_initial_state(roster, difficulty, self._clock.now())
        self._listeners: list[StateListener] = []
        self._timer: TimerHandle | None = None
        self._time_elapsed = 0
        self._stats: GameStats | None = None
        self._closed = False

        self._check(self._state)
        self._start_timer()

    # Read-only views

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def time_elapsed(self) -> int:
        """Whole seconds elapsed, as last updated by the tick."""
        return self._time_elapsed

    @property
    def stats(self) -> GameStats | None:
        """Completion snapshot, None until the puzzle is solved."""
        return self._stats

    @property
    def advisor_name(self) -> str:
        return self._advisor_name

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def timer_running(self) -> bool:
        return self._timer is not None

    # Input events

    def click_tower(self, tower_id: int) -> bool:
        return self.dispatch(ClickTower(tower_id))

    def select_disc(self, disc_id: str) -> bool:
        return self.dispatch(SelectDisc(disc_id))

    def move(self, from_tower: int, to_tower: int) -> bool:
        return self.dispatch(MoveDisc(from_tower, to_tower))

    def undo(self) -> bool:
        return self.dispatch(Undo())

    def toggle_hint(self) -> bool:
        return self.dispatch(ToggleHint())

    def reset(self) -> bool:
        return self.dispatch(Reset())

    def dispatch(self, action: Action) -> bool:
        """Apply an action.

        Returns:
            True if the state changed, False if the action was a no-op.

        Raises:
            RuntimeError: If the controller has been closed.
        """
        if self._closed:
            raise RuntimeError("Controller is closed")

        old = self._state
        new = reduce(old, action, self._clock.now(), self._advisor)
        if new is old:
            return False

        self._check(new)
        self._state = new

        completed = None
        if isinstance(action, Reset):
            self._restart()
        elif new.is_complete and not old.is_complete:
            completed = self._complete(new)

        self._notify_listeners(old, new, action)
        if completed is not None:
            self._fire_complete(completed)
        return True

    # Listeners

    def add_listener(self, callback: StateListener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify_listeners(self, old: GameState, new: GameState, action: Action) -> None:
        for listener in self._listeners:
            try:
                listener(old, new, action)
            except Exception:
                logger.exception("State listener failed for %s", action)

    # Lifecycle

    def close(self) -> None:
        """Stop the tick and refuse further input. Idempotent."""
        self._stop_timer()
        self._closed = True

    def __enter__(self) -> GameController:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _complete(self, state: GameState) -> GameStats | None:
        self._stop_timer()
        self._time_elapsed = elapsed_seconds(state.start_time, state.end_time)

        if self._stats is not None:
            logger.error("Completion reached twice in one game; ignoring the second")
            return None

        self._stats = compute_stats(state)
        logger.info(
            "Game complete: %d moves (optimal %d), %ds, efficiency %d%%, %d hints",
            self._stats.move_count,
            self._stats.optimal_moves,
            self._stats.time_elapsed,
            self._stats.efficiency,
            self._stats.hints_used,
        )
        return self._stats

    def _fire_complete(self, stats: GameStats) -> None:
        if self._on_complete is None:
            return
        try:
            self._on_complete(stats)
        except Exception:
            logger.exception("Completion callback failed")

    def _restart(self) -> None:
        self._stop_timer()
        self._time_elapsed = 0
        self._stats = None
        self._start_timer()

    def _start_timer(self) -> None:
        if self._scheduler is None or self._timer is not None:
            return
        self._timer = self._scheduler.call_every(self._tick_seconds, self._tick)

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _tick(self) -> None:
        if self._closed or self._state.is_complete:
            self._stop_timer()
            return
        self._time_elapsed = elapsed_seconds(self._state.start_time, self._clock.now())

    def _check(self, state: GameState) -> None:
        if self._verify_invariants:
            check_invariants(state)
