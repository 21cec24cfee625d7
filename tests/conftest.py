"""Shared fixtures for tower puzzle tests."""

import pytest

from hanoi_engine.characters import Character
from hanoi_engine.clock import ManualClock
from hanoi_engine.discs import FACILE, Disc
from hanoi_engine.state import GameState, Tower

ROSTER = [
    Character("ana", "Ana"),
    Character("ben", "Ben"),
    Character("cleo", "Cléo"),
    Character("dan", "Dan"),
    Character("eva", "Eva"),
    Character("finn", "Finn"),
]


def disc(size: int) -> Disc:
    return Disc(Character(f"d{size}", f"Disc {size}"), size)


@pytest.fixture
def make_disc():
    return disc


@pytest.fixture
def solution_3():
    """Shortest solution for three discs from tower 0 to tower 2."""
    return [(0, 2), (0, 1), (2, 1), (0, 2), (1, 0), (1, 2), (0, 2)]


@pytest.fixture
def roster():
    return list(ROSTER)


@pytest.fixture
def clock():
    return ManualClock(start=1000.0)


@pytest.fixture
def board():
    """Build a state from disc sizes per tower, bottom to top."""

    def _board(source=(), middle=(), target=(), difficulty=FACILE, **fields):
        towers = (
            Tower(0, tuple(disc(s) for s in source), is_source=True),
            Tower(1, tuple(disc(s) for s in middle)),
            Tower(2, tuple(disc(s) for s in target), is_target=True),
        )
        return GameState(towers=towers, difficulty=difficulty, start_time=0.0, **fields)

    return _board
