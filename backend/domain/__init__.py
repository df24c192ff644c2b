"""
Domain entities for the letter snake game engine.

This module contains the core game entities that are independent of
infrastructure concerns (persistence, scheduling, HTTP, etc.).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, DIRECTION_NAMES,
    BOARD_SIZE, INITIAL_SNAKE_LENGTH, FOOD_COLORS, LETTERS,
)
from .snake import SnakeSegment
from .food import FoodItem
from .events import GameEvent
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'DIRECTION_NAMES',
    'BOARD_SIZE', 'INITIAL_SNAKE_LENGTH', 'FOOD_COLORS', 'LETTERS',
    'SnakeSegment',
    'FoodItem',
    'GameEvent',
    'GameState',
]
