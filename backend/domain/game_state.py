"""
GameState entity - a snapshot of the game at a point in time.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Tuple

from .constants import BOARD_SIZE
from .food import FoodItem
from .snake import SnakeSegment


@dataclass(frozen=True)
class GameState:
    """
    An immutable snapshot of one round. The engine replaces it wholesale every tick.

    Attributes:
        target: the letter the player must eat next
        distractor: the decoy letter that costs points
        snake: segments from head (index 0) to tail
        score: current score, may be negative
        speed: 0-100 speed percentage derived from the tick delay
        eaten_letter_colors: letter -> color it was last eaten with
        high_score: best score seen by this process (persisted externally)
        is_game_over: set on self-collision, frozen until restart
    """

    target: FoodItem
    distractor: FoodItem
    snake: Tuple[SnakeSegment, ...]
    score: int = 0
    speed: int = 0
    eaten_letter_colors: Mapping[str, str] = field(default_factory=dict)
    high_score: int = 0
    is_game_over: bool = False

    def __post_init__(self):
        # Each snapshot owns a read-only copy of the eaten letters
        object.__setattr__(
            self, "eaten_letter_colors", MappingProxyType(dict(self.eaten_letter_colors))
        )

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first segment)."""
        return self.snake[0].position

    @property
    def snake_positions(self) -> list:
        return [segment.position for segment in self.snake]

    def copy(self, **changes: Any) -> "GameState":
        """Return a new snapshot with `changes` applied."""
        return replace(self, **changes)

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        H = snake head
        S = snake body
        uppercase letter = target
        lowercase letter = distractor
        (0,0) is the top left, y grows downward.
        """
        board = [['.' for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]

        tx, ty = self.target.position
        board[ty][tx] = self.target.letter.upper()
        dx, dy = self.distractor.position
        board[dy][dx] = self.distractor.letter.lower()

        for pos_idx, (x, y) in enumerate(self.snake_positions):
            board[y][x] = 'H' if pos_idx == 0 else 'S'

        result = []
        for y in range(BOARD_SIZE):
            result.append(f"{y:2d} {' '.join(board[y])}")

        return "\n".join(result)

    def to_dict(self) -> dict:
        """JSON-friendly representation for observers outside the process."""
        return {
            "target": {
                "position": list(self.target.position),
                "letter": self.target.letter,
                "color": self.target.color,
            },
            "distractor": {
                "position": list(self.distractor.position),
                "letter": self.distractor.letter,
                "color": self.distractor.color,
            },
            "snake": [
                {"position": list(segment.position), "color": segment.color}
                for segment in self.snake
            ],
            "score": self.score,
            "speed": self.speed,
            "eaten_letter_colors": dict(self.eaten_letter_colors),
            "high_score": self.high_score,
            "is_game_over": self.is_game_over,
        }

    def __repr__(self):
        return (
            f"<GameState target={self.target.letter}@{self.target.position}, "
            f"distractor={self.distractor.letter}@{self.distractor.position}, "
            f"length={len(self.snake)}, score={self.score}, game_over={self.is_game_over}>"
        )
