"""
Snake entity for the game engine.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .constants import BOARD_SIZE, INITIAL_SNAKE_LENGTH, SNAKE_HEAD_COLOR, START_HEAD

Position = Tuple[int, int]


@dataclass(frozen=True)
class SnakeSegment:
    """
    One cell of the snake body.

    Attributes:
        position: (x, y) board cell
        color: hex color the segment is drawn with
    """

    position: Position
    color: str


def initial_snake(
    head: Position = START_HEAD,
    length: int = INITIAL_SNAKE_LENGTH,
    color: str = SNAKE_HEAD_COLOR,
) -> List[SnakeSegment]:
    """Build a horizontal snake with its head at `head`, body trailing to the left."""
    hx, hy = head
    return [SnakeSegment(((hx - i) % BOARD_SIZE, hy), color) for i in range(length)]


def next_head_position(head: Position, direction: Position) -> Position:
    """Move one cell in `direction`, wrapping around the board edges."""
    dx, dy = direction
    return (
        (head[0] + dx + BOARD_SIZE) % BOARD_SIZE,
        (head[1] + dy + BOARD_SIZE) % BOARD_SIZE,
    )


def build_next_body(
    new_head: SnakeSegment,
    body: Sequence[SnakeSegment],
    snake_length: int,
) -> List[SnakeSegment]:
    """
    Prepend the new head and keep the old body up to the target length.

    After a growth tick the old tail survives one extra tick because the
    body is truncated to `snake_length - 1` instead of having a segment appended.
    """
    return [new_head] + list(body[:snake_length - 1])


def occupied_cells(body: Sequence[SnakeSegment]) -> set:
    """Return the set of positions covered by `body`."""
    return {segment.position for segment in body}
