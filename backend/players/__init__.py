"""
Player implementations for the letter snake engine.

Players are autopilot input producers: they pick the next direction
from the current snapshot, which lets the engine run headless.
"""

from .base import Player
from .random_player import RandomPlayer
from .seeker_player import TargetSeekingPlayer
from .variant_registry import get_player_class, list_variants, AVAILABLE_VARIANTS

__all__ = [
    'Player',
    'RandomPlayer',
    'TargetSeekingPlayer',
    'get_player_class',
    'list_variants',
    'AVAILABLE_VARIANTS',
]
