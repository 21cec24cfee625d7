"""Game session management for the web API."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable

from core.settings import Settings
from hanoi_engine.characters import DEFAULT_ROSTER, Character, pick_characters
from hanoi_engine.clock import AsyncioScheduler
from hanoi_engine.controller import GameController
from hanoi_engine.rules import can_place, generate_legal_moves
from hanoi_engine.stats import format_time, live_efficiency

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from hanoi_engine.actions import Action, MoveDisc
    from hanoi_engine.discs import Difficulty, Disc
    from hanoi_engine.state import GameState, MoveRecord
    from hanoi_engine.stats import GameStats


@dataclass
class GameSession:
    """An active game session."""

    id: str
    controller: GameController
    created_at: datetime

    # Callbacks for push notifications
    _state_listeners: list[Callable[[dict], None]] = field(default_factory=list)

    def __post_init__(self):
        self.controller.add_listener(self._on_transition)

    @property
    def state(self) -> GameState:
        return self.controller.state

    @property
    def legal_moves(self) -> list[MoveDisc]:
        """Get legal moves for current state."""
        return generate_legal_moves(self.state)

    def add_listener(self, callback: Callable[[dict], None]) -> None:
        """Add a state change listener."""
        self._state_listeners.append(callback)

    def remove_listener(self, callback: Callable[[dict], None]) -> None:
        """Remove a state change listener."""
        if callback in self._state_listeners:
            self._state_listeners.remove(callback)

    def _on_transition(self, old: GameState, new: GameState, action: Action) -> None:
        self._emit({
            "type": "state_changed",
            "action": str(action),
            "action_type": action.action_type.name,
            "state": self.to_client_state(),
        })
        if new.is_complete and not old.is_complete and self.completed_stats:
            self._emit({"type": "game_complete", "stats": stats_to_dict(self.completed_stats)})

    def _emit(self, event: dict) -> None:
        for listener in self._state_listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Session listener failed for game %s", self.id)

    @property
    def completed_stats(self) -> GameStats | None:
        return self.controller.stats

    def to_client_state(self) -> dict:
        """Convert game state to client-friendly format."""
        state = self.state
        selected = state.selected_disc
        return {
            "game_id": self.id,
            "difficulty": _difficulty_to_dict(state.difficulty),
            "towers": [
                {
                    "id": tower.id,
                    "is_source": tower.is_source,
                    "is_target": tower.is_target,
                    "discs": [_disc_to_dict(d) for d in tower.discs],
                    "can_receive": selected is not None
                    and tower.id != state.selected_tower
                    and can_place(selected, tower),
                }
                for tower in state.towers
            ],
            "selected_disc": _disc_to_dict(selected) if selected else None,
            "selected_tower": state.selected_tower,
            "move_count": state.move_count,
            "optimal_moves": state.difficulty.min_moves,
            "efficiency": live_efficiency(state.move_count, state.difficulty.min_moves),
            "time_elapsed": self.controller.time_elapsed,
            "time_display": format_time(self.controller.time_elapsed),
            "is_complete": state.is_complete,
            "show_hint": state.show_hint,
            "hint_move": (
                {"from": state.hint_move.from_tower, "to": state.hint_move.to_tower}
                if state.hint_move
                else None
            ),
            "hints_used": state.hints_used,
            "hint_strategy": self.controller.advisor_name,
            "history": [_record_to_dict(r) for r in state.history],
        }

    def moves_to_client(self, moves: list[MoveDisc]) -> list[dict]:
        """Convert moves to client-friendly format."""
        return [
            {"index": i, "from": m.from_tower, "to": m.to_tower, "description": str(m)}
            for i, m in enumerate(moves)
        ]


def _disc_to_dict(disc: Disc) -> dict:
    return {
        "id": disc.id,
        "size": disc.size,
        "name": disc.character.name,
        "image": disc.character.image,
    }


def _record_to_dict(record: MoveRecord) -> dict:
    return {
        "from": record.from_tower,
        "to": record.to_tower,
        "disc": _disc_to_dict(record.disc),
        "timestamp": record.timestamp,
    }


def _difficulty_to_dict(difficulty: Difficulty) -> dict:
    return {
        "id": difficulty.id,
        "name": difficulty.name,
        "character_count": difficulty.character_count,
        "min_moves": difficulty.min_moves,
        "emoji": difficulty.emoji,
        "description": difficulty.description,
    }


def stats_to_dict(stats: GameStats) -> dict:
    """Convert a completion snapshot to a dictionary."""
    return {
        "move_count": stats.move_count,
        "optimal_moves": stats.optimal_moves,
        "time_elapsed": stats.time_elapsed,
        "time_display": format_time(stats.time_elapsed),
        "efficiency": stats.efficiency,
        "difficulty": _difficulty_to_dict(stats.difficulty),
        "hints_used": stats.hints_used,
        "message": stats.victory_message,
    }


class GameSessionManager:
    """Manages all active game sessions."""

    def __init__(self, settings: Settings | None = None):
        self._sessions: dict[str, GameSession] = {}
        self.settings = settings or Settings()

    def create_session(
        self,
        difficulty: Difficulty,
        roster: list[Character] | None = None,
        seed: int | None = None,
        hint_strategy: str | None = None,
    ) -> GameSession:
        """Create a new game session.

        Without a roster, characters are drawn from the default roster.

        Raises:
            ValueError: If the roster is too small or the hint strategy is unknown.
        """
        session_id = str(uuid.uuid4())
        if roster is None:
            roster = pick_characters(difficulty.character_count, DEFAULT_ROSTER, seed=seed)

        session = GameSession(
            id=session_id,
            controller=GameController(
                roster,
                difficulty,
                on_complete=lambda stats: logger.info(
                    "Game %s solved: %d moves, efficiency %d%%", session_id, stats.move_count, stats.efficiency
                ),
                scheduler=_current_scheduler(),
                advisor=hint_strategy or self.settings.hint_strategy,
                tick_seconds=self.settings.tick_seconds,
                verify_invariants=self.settings.verify_invariants,
            ),
            created_at=datetime.now(),
        )
        self._sessions[session_id] = session
        logger.info("Created game %s (%s, hints=%s)", session_id, difficulty.id, session.controller.advisor_name)
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        """Delete a session and stop its timer."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.controller.close()
        return True

    def close_all(self) -> None:
        for session_id in list(self._sessions):
            self.delete_session(session_id)

    def list_sessions(self) -> list[dict[str, Any]]:
        """List all active sessions."""
        return [
            {
                "id": s.id,
                "created_at": s.created_at.isoformat(),
                "difficulty": s.state.difficulty.id,
                "move_count": s.state.move_count,
                "is_complete": s.state.is_complete,
            }
            for s in self._sessions.values()
        ]


def _current_scheduler() -> AsyncioScheduler | None:
    """Scheduler bound to the running loop, or None outside of one."""
    try:
        return AsyncioScheduler(asyncio.get_running_loop())
    except RuntimeError:
        return None


# Global session manager instance
session_manager = GameSessionManager()
