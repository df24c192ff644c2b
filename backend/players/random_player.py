"""
Random player implementation - picks random safe moves.
"""

from typing import List, Tuple

from domain.constants import VALID_MOVES
from domain.game_state import GameState
from domain.snake import next_head_position
from .base import Player


def safe_moves(game_state: GameState) -> List[Tuple[int, int]]:
    """
    Directions whose next cell is not part of the current body.

    The whole body counts, tail included, because the engine checks the
    new head against the pre-move snake.
    """
    body = set(game_state.snake_positions)
    return [
        move for move in sorted(VALID_MOVES)
        if next_head_position(game_state.head, move) not in body
    ]


class RandomPlayer(Player):
    """
    A random AI that picks a direction that avoids self-collisions.
    """

    name = "random"

    def get_move(self, game_state: GameState) -> Tuple[int, int]:
        valid_moves = safe_moves(game_state)

        # If no valid moves, just return a random move (we'll die anyway)
        if not valid_moves:
            return self.rng.choice(sorted(VALID_MOVES))

        return self.rng.choice(valid_moves)
