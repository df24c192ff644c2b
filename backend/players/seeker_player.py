"""
Target seeking player - heads for the target letter on the wrapped board.
"""

from typing import Tuple

from domain.constants import BOARD_SIZE, VALID_MOVES
from domain.game_state import GameState
from domain.snake import next_head_position
from .base import Player
from .random_player import safe_moves


def wrapped_distance(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    """Manhattan distance on the toroidal board."""
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return min(dx, BOARD_SIZE - dx) + min(dy, BOARD_SIZE - dy)


class TargetSeekingPlayer(Player):
    """
    Greedy AI: among the safe moves, take the one closest to the target,
    steering around the distractor when another safe move exists.
    """

    name = "seeker"

    def get_move(self, game_state: GameState) -> Tuple[int, int]:
        candidates = safe_moves(game_state)
        if not candidates:
            return self.rng.choice(sorted(VALID_MOVES))

        distractor = game_state.distractor.position
        avoiding = [
            move for move in candidates
            if next_head_position(game_state.head, move) != distractor
        ]
        if avoiding:
            candidates = avoiding

        target = game_state.target.position
        best = min(
            wrapped_distance(next_head_position(game_state.head, move), target)
            for move in candidates
        )
        closest = [
            move for move in candidates
            if wrapped_distance(next_head_position(game_state.head, move), target) == best
        ]
        return self.rng.choice(closest)
