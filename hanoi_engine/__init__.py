"""Tower puzzle game engine."""

from hanoi_engine.actions import Action, ClickTower, MoveDisc, Reset, SelectDisc, ToggleHint, Undo
from hanoi_engine.characters import Character
from hanoi_engine.controller import GameController
from hanoi_engine.discs import DIFFICULTY_LEVELS, Difficulty, Disc, get_difficulty
from hanoi_engine.state import GameState, HintMove, MoveRecord, Tower, create_initial_state
from hanoi_engine.stats import GameStats

__all__ = [
    "Action",
    "ClickTower",
    "MoveDisc",
    "Reset",
    "SelectDisc",
    "ToggleHint",
    "Undo",
    "Character",
    "GameController",
    "DIFFICULTY_LEVELS",
    "Difficulty",
    "Disc",
    "get_difficulty",
    "GameState",
    "HintMove",
    "MoveRecord",
    "Tower",
    "create_initial_state",
    "GameStats",
]
