"""
Registry for autopilot players.
Maps player keys (e.g., 'random', 'seeker') to player classes so the
headless runner can pick one by name.
"""

from typing import Dict, Type, Optional

from .base import Player
from .random_player import RandomPlayer
from .seeker_player import TargetSeekingPlayer


PLAYER_VARIANTS: Dict[str, Type[Player]] = {
    "random": RandomPlayer,
    "seeker": TargetSeekingPlayer,
}

DEFAULT_VARIANT = "seeker"

# Canonical list of available variant keys (for CLI choices)
AVAILABLE_VARIANTS = list(PLAYER_VARIANTS.keys())


def get_player_class(variant_key: Optional[str] = None) -> Type[Player]:
    """
    Get the player class for a given variant key.

    Args:
        variant_key: One of 'random', 'seeker'. If None or empty, returns the default.

    Returns:
        The player class (subclass of Player).

    Raises:
        ValueError: If variant_key is not recognized.
    """
    if not variant_key or variant_key.strip() == "":
        variant_key = DEFAULT_VARIANT

    variant_key = variant_key.strip()

    if variant_key not in PLAYER_VARIANTS:
        available = ", ".join(AVAILABLE_VARIANTS)
        raise ValueError(
            f"Unknown player variant '{variant_key}'. Available variants: {available}"
        )

    return PLAYER_VARIANTS[variant_key]


def list_variants() -> list:
    """
    Return metadata about all available player variants.

    Returns:
        List of dicts with 'key' and 'description' for each variant.
    """
    return [
        {"key": "random", "description": "Random moves that avoid the snake's own body"},
        {"key": "seeker", "description": "Greedy walk toward the target letter, avoiding the distractor"},
    ]
