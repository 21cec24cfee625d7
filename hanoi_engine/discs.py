"""Disc and difficulty models for the tower puzzle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hanoi_engine.characters import Character


class DifficultyConfigError(ValueError):
    """Raised when a difficulty descriptor is internally inconsistent."""

    pass


@dataclass(frozen=True, slots=True)
class Disc:
    """A stackable piece. Larger sizes sit lower on a tower.

    A disc does not know which tower holds it; that is derived from the
    tower contents.
    """

    character: Character
    size: int

    @property
    def id(self) -> str:
        return self.character.id

    def __str__(self) -> str:
        return f"{self.character.name}({self.size})"


@dataclass(frozen=True, slots=True)
class Difficulty:
    """A difficulty level.

    Attributes:
        id: Stable identifier used by the CLI and the API
        name: Display label
        character_count: Number of discs N
        min_moves: Documented minimal number of moves, 2**N - 1
        emoji: Decoration for the setup screen
        description: Short blurb for the setup screen
    """

    id: str
    name: str
    character_count: int
    min_moves: int
    emoji: str = ""
    description: str = ""

    @property
    def label(self) -> str:
        return self.name

    @property
    def optimal_moves(self) -> int:
        """Length of the classical shortest solution for this disc count."""
        return 2**self.character_count - 1

    def verify(self) -> None:
        """Check that the configured minimum matches the disc count.

        Raises:
            DifficultyConfigError: If N < 1 or min_moves != 2**N - 1.
        """
        if self.character_count < 1:
            raise DifficultyConfigError(
                f"Difficulty {self.id!r} needs at least one disc, got {self.character_count}"
            )
        if self.min_moves != self.optimal_moves:
            raise DifficultyConfigError(
                f"Difficulty {self.id!r}: min_moves={self.min_moves} but "
                f"{self.character_count} discs need {self.optimal_moves}"
            )


SUPER_FACILE = Difficulty(
    id="super-facile",
    name="Super Facile",
    character_count=2,
    min_moves=3,
    emoji="🌟",
    description="Parfait pour débuter !",
)
FACILE = Difficulty(
    id="facile",
    name="Facile",
    character_count=3,
    min_moves=7,
    emoji="⭐",
    description="Un bon défi !",
)
MOYEN = Difficulty(
    id="moyen",
    name="Moyen",
    character_count=4,
    min_moves=15,
    emoji="🌈",
    description="Pour les champions !",
)
DIFFICILE = Difficulty(
    id="difficile",
    name="Difficile",
    character_count=5,
    min_moves=31,
    emoji="🚀",
    description="Super défi !",
)

DIFFICULTY_LEVELS: dict[str, Difficulty] = {
    level.id: level for level in (SUPER_FACILE, FACILE, MOYEN, DIFFICILE)
}


def get_difficulty(difficulty_id: str) -> Difficulty:
    """Look up a built-in difficulty by id.

    Raises:
        KeyError: If the id is unknown.
    """
    try:
        return DIFFICULTY_LEVELS[difficulty_id.lower()]
    except KeyError:
        known = ", ".join(DIFFICULTY_LEVELS)
        raise KeyError(f"Unknown difficulty {difficulty_id!r} (expected one of: {known})") from None
