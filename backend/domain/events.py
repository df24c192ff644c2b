"""
Side-effect events raised by the engine for collaborators (sound, analytics).
"""

from enum import Enum


class GameEvent(str, Enum):
    GAME_START = "game_start"
    CORRECT_EAT = "correct_eat"
    WRONG_EAT = "wrong_eat"
    GAME_OVER = "game_over"
