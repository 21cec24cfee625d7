"""Action types for the tower puzzle."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto


class ActionType(IntEnum):
    """Type of action."""

    CLICK_TOWER = auto()  # Select, deselect, or move, depending on selection
    SELECT_DISC = auto()  # Pick a disc directly (top disc only)
    MOVE_DISC = auto()  # Move the top disc between two towers
    UNDO = auto()
    TOGGLE_HINT = auto()
    RESET = auto()


@dataclass(frozen=True, slots=True)
class Action(ABC):
    """Base class for all actions."""

    @property
    @abstractmethod
    def action_type(self) -> ActionType:
        """The type of this action."""
        ...

    @abstractmethod
    def __str__(self) -> str:
        """Human-readable action description."""
        ...


@dataclass(frozen=True, slots=True)
class ClickTower(Action):
    """The player clicked a tower."""

    tower_id: int

    @property
    def action_type(self) -> ActionType:
        return ActionType.CLICK_TOWER

    def __str__(self) -> str:
        return f"Click tower {self.tower_id + 1}"


@dataclass(frozen=True, slots=True)
class SelectDisc(Action):
    """The player clicked a disc."""

    disc_id: str

    @property
    def action_type(self) -> ActionType:
        return ActionType.SELECT_DISC

    def __str__(self) -> str:
        return f"Select disc {self.disc_id}"


@dataclass(frozen=True, slots=True)
class MoveDisc(Action):
    """Move the top disc of one tower onto another."""

    from_tower: int
    to_tower: int

    @property
    def action_type(self) -> ActionType:
        return ActionType.MOVE_DISC

    def __str__(self) -> str:
        return f"Move tower {self.from_tower + 1} → tower {self.to_tower + 1}"


@dataclass(frozen=True, slots=True)
class Undo(Action):
    """Take back the last move."""

    @property
    def action_type(self) -> ActionType:
        return ActionType.UNDO

    def __str__(self) -> str:
        return "Undo"


@dataclass(frozen=True, slots=True)
class ToggleHint(Action):
    """Show a hint, or hide the one being shown."""

    @property
    def action_type(self) -> ActionType:
        return ActionType.TOGGLE_HINT

    def __str__(self) -> str:
        return "Toggle hint"


@dataclass(frozen=True, slots=True)
class Reset(Action):
    """Start over with a fresh board."""

    @property
    def action_type(self) -> ActionType:
        return ActionType.RESET

    def __str__(self) -> str:
        return "Reset"
