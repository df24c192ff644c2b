"""
Tick delay and speed derivation.

The tick rate is a function of progress: every letter eaten makes the snake
one segment longer and the next tick a little sooner, down to MIN_DELAY_MS.
"""

from .constants import (
    BASE_DELAY_MS,
    DELAY_DECREASE_PER_FOOD_MS,
    INITIAL_SNAKE_LENGTH,
    MIN_DELAY_MS,
)


def tick_delay_ms(snake_length: int) -> int:
    """Return the delay before the next tick for a snake of `snake_length` segments."""
    food_eaten = snake_length - INITIAL_SNAKE_LENGTH
    return max(MIN_DELAY_MS, BASE_DELAY_MS - food_eaten * DELAY_DECREASE_PER_FOOD_MS)


def speed_percent(snake_length: int) -> int:
    """Return the displayed speed, 0 at the base delay and 100 at the minimum delay."""
    actual_delay = tick_delay_ms(snake_length)
    speed = (BASE_DELAY_MS - actual_delay) * 100 // (BASE_DELAY_MS - MIN_DELAY_MS)
    return max(0, speed)
