"""Roster characters that give each disc its identity."""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Character:
    """A roster entity borrowed by a disc.

    Attributes:
        id: Stable identifier supplied by the roster (unique within a roster)
        name: Display name
        image: Image file name, resolved by the renderer
    """

    id: str
    name: str
    image: str = ""

    def __str__(self) -> str:
        return self.name


# Fallback roster for the CLI and the web API when no profile is supplied
DEFAULT_ROSTER: tuple[Character, ...] = (
    Character("lea", "Léa", "lea.png"),
    Character("hugo", "Hugo", "hugo.png"),
    Character("chloe", "Chloé", "chloe.png"),
    Character("nathan", "Nathan", "nathan.png"),
    Character("jade", "Jade", "jade.png"),
    Character("louis", "Louis", "louis.png"),
    Character("ines", "Inès", "ines.png"),
    Character("gabriel", "Gabriel", "gabriel.png"),
)


def pick_characters(
    count: int,
    roster: tuple[Character, ...] | list[Character] = DEFAULT_ROSTER,
    seed: int | None = None,
) -> list[Character]:
    """Pick `count` characters from a roster in shuffled order.

    Args:
        count: Number of characters to pick.
        roster: Pool to pick from.
        seed: Random seed for the shuffle.

    Returns:
        A list of at most `count` characters. Callers that need exactly
        `count` rely on state construction to reject a short list.
    """
    shuffled = list(roster)
    random.Random(seed).shuffle(shuffled)
    return shuffled[:count]
