"""What the runner and CLI need from an autoplayer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from hanoi_engine.actions import MoveDisc
    from hanoi_engine.state import GameState


@runtime_checkable
class Strategy(Protocol):
    name: str

    def select_move(self, state: GameState, legal_moves: list[MoveDisc]) -> MoveDisc:
        """Pick one of `legal_moves` for `state`. Raises ValueError if there are none."""
        ...
