"""
Food entities: the target letter the player must eat next and the distractor.
"""

import random
from dataclasses import dataclass
from typing import Optional, Tuple

from .constants import LETTERS


@dataclass(frozen=True)
class FoodItem:
    """
    A letter placed on the board.

    Attributes:
        position: (x, y) board cell
        letter: one of 'a'..'z'
        color: hex color from the food palette
    """

    position: Tuple[int, int]
    letter: str
    color: str


def next_letter(letter: str) -> str:
    """Advance alphabetically, wrapping 'z' back to 'a'."""
    index = LETTERS.index(letter)
    return LETTERS[(index + 1) % len(LETTERS)]


def random_letter(rng: random.Random, exclude: Optional[str] = None) -> str:
    """Draw a uniform random letter, resampling while it equals `exclude`."""
    while True:
        letter = rng.choice(LETTERS)
        if letter != exclude:
            return letter
