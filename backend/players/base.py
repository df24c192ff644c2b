"""
Base player interface for the game engine.
"""

import random
from typing import Optional, Tuple

from domain.game_state import GameState


class Player:
    """
    Base class/interface for autopilot input.

    A player looks at the current snapshot and returns the direction the
    engine should use on the next tick. It plays the role of the input
    producer in headless runs.
    """

    name = "player"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> Tuple[int, int]:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of UP, DOWN, LEFT, RIGHT as a (dx, dy) tuple
        """
        raise NotImplementedError
