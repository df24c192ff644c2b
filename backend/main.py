import argparse
import json
import logging
import os
import random
import threading
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from dotenv import load_dotenv

from data_access.high_score_store import HighScoreStore, InMemoryHighScoreStore
from domain.constants import (
    BOARD_SIZE,
    CORRECT_EAT_POINTS,
    FIRST_LETTER,
    FOOD_COLORS,
    INITIAL_SNAKE_LENGTH,
    START_DIRECTION,
    VALID_MOVES,
    WRONG_EAT_PENALTY,
)
from domain.events import GameEvent
from domain.food import FoodItem, next_letter, random_letter
from domain.game_state import GameState
from domain.snake import (
    SnakeSegment,
    build_next_body,
    initial_snake,
    next_head_position,
    occupied_cells,
)
from domain.speed import speed_percent, tick_delay_ms
from players import get_player_class, list_variants, AVAILABLE_VARIANTS
from players.base import Player
from services.event_hooks import EventHooks
from services.observable import Observable

load_dotenv()

logger = logging.getLogger(__name__)


class GamePhase(str, Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class SnakeGame:
    """
    Manages:
      - The current GameState snapshot (published through `state`)
      - The pending direction shared with input producers
      - Pause / active flags (published through `is_paused` / `is_active`)
      - Snake target length, scoring and the cached high score
      - Side-effect events for collaborators (sound, analytics)

    The tick actor is the only writer of new snapshots during play. Lifecycle
    commands take the same lock so a tick can never publish over a fresh round.
    """

    def __init__(
        self,
        store: Optional[HighScoreStore] = None,
        rng: Optional[random.Random] = None,
    ):
        self.store = store or InMemoryHighScoreStore()
        self.rng = rng or random.Random()
        self.hooks = EventHooks()

        self._direction_lock = threading.Lock()
        self._pending_direction: Tuple[int, int] = START_DIRECTION
        self._state_lock = threading.RLock()

        self.snake_length = INITIAL_SNAKE_LENGTH
        self.high_score = self._load_high_score()

        self.is_paused: Observable[bool] = Observable(False, "is_paused")
        self.is_active: Observable[bool] = Observable(False, "is_active")
        self.state: Observable[GameState] = Observable(self._create_initial_state(), "state")

    # ------------------------------------------------------------------
    # High score
    # ------------------------------------------------------------------

    def _load_high_score(self) -> int:
        try:
            return int(self.store.load_high_score() or 0)
        except Exception as e:
            logger.warning(f"Could not load high score, starting from 0: {e}")
            return 0

    def _check_and_save_high_score(self, current_score: int) -> None:
        if current_score <= self.high_score:
            return
        self.high_score = current_score
        try:
            self.store.save_high_score(current_score)
        except Exception as e:
            # In-memory value stays authoritative for this session
            logger.error(f"Failed to persist high score {current_score}: {e}")

    # ------------------------------------------------------------------
    # Board helpers
    # ------------------------------------------------------------------

    def _random_food_color(self) -> str:
        return self.rng.choice(FOOD_COLORS)

    def _random_safe_position(self, body, *occupied_spots) -> Tuple[int, int]:
        """
        Return a random cell not covered by `body` or any of `occupied_spots`.
        """
        blocked = occupied_cells(body)
        blocked.update(spot for spot in occupied_spots if spot is not None)
        while True:
            position = (self.rng.randrange(BOARD_SIZE), self.rng.randrange(BOARD_SIZE))
            if position not in blocked:
                return position

    def _create_initial_state(self) -> GameState:
        snake = initial_snake()

        target_position = self._random_safe_position(snake)
        target = FoodItem(target_position, FIRST_LETTER, self._random_food_color())

        distractor = FoodItem(
            self._random_safe_position(snake, target_position),
            random_letter(self.rng, exclude=FIRST_LETTER),
            self._random_food_color(),
        )

        return GameState(
            target=target,
            distractor=distractor,
            snake=tuple(snake),
            score=0,
            speed=0,
            eaten_letter_colors={},
            high_score=self.high_score,
            is_game_over=False,
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @property
    def pending_direction(self) -> Tuple[int, int]:
        with self._direction_lock:
            return self._pending_direction

    def set_direction(self, dx: int, dy: int) -> None:
        """
        Set the direction used on the next tick.

        Reversing into the neck is accepted; the next tick resolves it as a
        self-collision.

        Raises:
            ValueError: If (dx, dy) is not one of the four unit vectors
        """
        direction = (dx, dy)
        if not all(type(v) is int for v in direction) or direction not in VALID_MOVES:
            raise ValueError(f"Invalid direction {direction}; expected one of {sorted(VALID_MOVES)}")
        with self._direction_lock:
            self._pending_direction = direction

    def toggle_pause(self) -> bool:
        """Flip the paused flag and return the new value."""
        with self._state_lock:
            paused = not self.is_paused.value
            self.is_paused.set(paused)
        logger.info("Game paused" if paused else "Game resumed")
        return paused

    def start_game(self) -> GameState:
        """Begin a fresh round."""
        with self._state_lock:
            self.snake_length = INITIAL_SNAKE_LENGTH
            with self._direction_lock:
                self._pending_direction = START_DIRECTION
            fresh = self._create_initial_state()
            self.state.set(fresh)
            self.is_paused.set(False)
            self.is_active.set(True)

        logger.info(
            f"Game started: target '{fresh.target.letter}' at {fresh.target.position}, "
            f"distractor '{fresh.distractor.letter}' at {fresh.distractor.position}"
        )
        self.hooks.emit(GameEvent.GAME_START, fresh)
        return fresh

    def restart_game(self) -> GameState:
        """Leave the game-over screen straight into a new round."""
        return self.start_game()

    def return_to_menu(self) -> GameState:
        """Deactivate the round and clear the game-over flag, keeping score and snake."""
        with self._state_lock:
            self.is_active.set(False)
            current = self.state.value.copy(is_game_over=False)
            self.state.set(current)
        logger.info("Returned to menu")
        return current

    def add_listener(self, listener: Callable[[GameEvent, GameState], None]) -> None:
        self.hooks.add_listener(listener)

    # ------------------------------------------------------------------
    # Scenario setup
    # ------------------------------------------------------------------

    def set_food(
        self,
        target_position: Optional[Tuple[int, int]] = None,
        distractor_position: Optional[Tuple[int, int]] = None,
        target_letter: Optional[str] = None,
        distractor_letter: Optional[str] = None,
    ) -> GameState:
        """
        Place the target and/or distractor explicitly instead of at random.

        Raises:
            ValueError: If a position is off the board, on the snake, or both
                        foods would share a cell, or the letters are equal.
        """
        with self._state_lock:
            current = self.state.value
            target = current.target
            distractor = current.distractor
            if target_position is not None or target_letter is not None:
                target = FoodItem(
                    tuple(target_position or target.position),
                    target_letter or target.letter,
                    target.color,
                )
            if distractor_position is not None or distractor_letter is not None:
                distractor = FoodItem(
                    tuple(distractor_position or distractor.position),
                    distractor_letter or distractor.letter,
                    distractor.color,
                )

            body = occupied_cells(current.snake)
            for name, food in (("target", target), ("distractor", distractor)):
                x, y = food.position
                if not (0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE):
                    raise ValueError(f"{name} out of bounds at {food.position}.")
                if food.position in body:
                    raise ValueError(f"{name} overlaps the snake at {food.position}.")
            if target.position == distractor.position:
                raise ValueError(f"Target and distractor share {target.position}.")
            if target.letter == distractor.letter:
                raise ValueError(f"Target and distractor both use letter '{target.letter}'.")

            updated = current.copy(target=target, distractor=distractor)
            self.state.set(updated)
        return updated

    def set_snake(self, positions, color: Optional[str] = None) -> GameState:
        """
        Replace the snake body (head first) and its target length.

        Raises:
            ValueError: If the body is empty, off the board, self-overlapping,
                        or covers a food cell.
        """
        positions = [tuple(p) for p in positions]
        if not positions:
            raise ValueError("Snake needs at least one segment.")
        if len(set(positions)) != len(positions):
            raise ValueError("Snake segments must not overlap.")
        for (x, y) in positions:
            if not (0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE):
                raise ValueError(f"Snake segment out of bounds at {(x, y)}.")

        with self._state_lock:
            current = self.state.value
            if current.target.position in positions or current.distractor.position in positions:
                raise ValueError("Snake covers a food cell.")
            segment_color = color or current.snake[0].color
            snake = tuple(SnakeSegment(p, segment_color) for p in positions)
            self.snake_length = len(snake)
            updated = current.copy(snake=snake)
            self.state.set(updated)
        return updated

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    @property
    def phase(self) -> GamePhase:
        if self.state.value.is_game_over:
            return GamePhase.GAME_OVER
        if not self.is_active.value:
            return GamePhase.MENU
        if self.is_paused.value:
            return GamePhase.PAUSED
        return GamePhase.PLAYING

    def current_delay_ms(self) -> int:
        """Delay the scheduler should wait before the next tick."""
        return tick_delay_ms(len(self.state.value.snake))

    def status(self) -> Dict[str, object]:
        return {
            "phase": self.phase.value,
            "is_active": self.is_active.value,
            "is_paused": self.is_paused.value,
            "is_game_over": self.state.value.is_game_over,
            "delay_ms": self.current_delay_ms(),
        }

    def tick(self) -> GameState:
        """
        Advance the round by one step:
          1) Read the pending direction once and compute the wrapped new head
          2) Self-collision against the full pre-move body ends the round
          3) Target eaten: grow, score, advance the letter, respawn both foods
          4) Distractor eaten: lose points, respawn the distractor
          5) Otherwise the head keeps the previous head's color
        The new body is always new head + the old body truncated to the target length.
        """
        event = None
        with self._state_lock:
            current = self.state.value
            if current.is_game_over:
                return current
            # A pause or menu command may land between the scheduler check and here
            if not self.is_active.value or self.is_paused.value:
                return current

            speed = speed_percent(len(current.snake))
            new_head = next_head_position(current.head, self.pending_direction)

            if new_head in occupied_cells(current.snake):
                next_state = self._end_round(current)
                event = GameEvent.GAME_OVER
            elif new_head == current.target.position:
                next_state = self._eat_target(current, new_head, speed)
                event = GameEvent.CORRECT_EAT
            elif new_head == current.distractor.position:
                next_state = self._eat_distractor(current, new_head, speed)
                event = GameEvent.WRONG_EAT
            else:
                head = SnakeSegment(new_head, current.snake[0].color)
                body = build_next_body(head, current.snake, self.snake_length)
                next_state = current.copy(snake=tuple(body), speed=speed)

            self.state.set(next_state)

        if event is not None:
            self.hooks.emit(event, next_state)
        return next_state

    def _eat_target(self, current: GameState, new_head, speed: int) -> GameState:
        target = current.target
        self.snake_length += 1

        eaten = dict(current.eaten_letter_colors)
        eaten[target.letter] = target.color

        head = SnakeSegment(new_head, target.color)
        body = build_next_body(head, current.snake, self.snake_length)

        letter = next_letter(target.letter)
        target_position = self._random_safe_position(body, current.distractor.position)
        new_target = FoodItem(target_position, letter, self._random_food_color())
        new_distractor = FoodItem(
            self._random_safe_position(body, target_position),
            random_letter(self.rng, exclude=letter),
            self._random_food_color(),
        )

        logger.debug(f"Ate '{target.letter}', next target '{letter}', length {self.snake_length}")
        return current.copy(
            target=new_target,
            distractor=new_distractor,
            snake=tuple(body),
            score=current.score + CORRECT_EAT_POINTS,
            speed=speed,
            eaten_letter_colors=eaten,
        )

    def _eat_distractor(self, current: GameState, new_head, speed: int) -> GameState:
        distractor = current.distractor
        head = SnakeSegment(new_head, distractor.color)
        body = build_next_body(head, current.snake, self.snake_length)

        new_distractor = FoodItem(
            self._random_safe_position(body, current.target.position),
            random_letter(self.rng, exclude=current.target.letter),
            self._random_food_color(),
        )

        logger.debug(f"Ate distractor '{distractor.letter}' while hunting '{current.target.letter}'")
        return current.copy(
            distractor=new_distractor,
            snake=tuple(body),
            score=current.score - WRONG_EAT_PENALTY,
            speed=speed,
        )

    def _end_round(self, current: GameState) -> GameState:
        self._check_and_save_high_score(current.score)
        self.snake_length = INITIAL_SNAKE_LENGTH
        self.is_active.set(False)
        logger.info(f"Game Over: score {current.score}, high score {self.high_score}")
        return current.copy(is_game_over=True, high_score=self.high_score)

    def print_board(self):
        """
        Prints a visual representation of the current board state.
        """
        print("\n" + self.state.value.print_board() + "\n")


# -------------------------------
# Headless Simulation
# -------------------------------

def run_simulation(
    player: Player,
    max_ticks: int = 1000,
    store: Optional[HighScoreStore] = None,
    seed: Optional[int] = None,
    show_board: bool = False,
) -> Dict:
    """
    Play one round with an autopilot player, ticking synchronously.

    Args:
        player: Picks the direction before every tick.
        max_ticks: Upper limit on ticks if the snake never collides.
        store: High score store (in-memory when omitted).
        seed: Seed for food placement.
        show_board: Print the board after every tick.

    Returns:
        A dictionary summarizing the round.
    """
    game = SnakeGame(store=store, rng=random.Random(seed))

    eats = {GameEvent.CORRECT_EAT: 0, GameEvent.WRONG_EAT: 0}

    def track(event: GameEvent, state: GameState) -> None:
        if event in eats:
            eats[event] += 1

    game.add_listener(track)
    game.start_game()

    ticks = 0
    while game.is_active.value and ticks < max_ticks:
        game.set_direction(*player.get_move(game.state.value))
        game.tick()
        ticks += 1
        if show_board:
            game.print_board()

    final = game.state.value
    return {
        "score": final.score,
        "high_score": game.high_score,
        "ticks": ticks,
        "snake_length": len(final.snake),
        "letters_eaten": eats[GameEvent.CORRECT_EAT],
        "distractors_eaten": eats[GameEvent.WRONG_EAT],
        "target_letter": final.target.letter,
        "game_over": final.is_game_over,
    }


# -------------------------------
# Example Usage (Main Entry Point)
# -------------------------------
def main():
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    players_help = "\n".join(f"  {v['key']:<8} {v['description']}" for v in list_variants())
    parser = argparse.ArgumentParser(
        description="Run a headless letter snake round with an autopilot player.",
        epilog=f"players:\n{players_help}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--player", type=str, choices=AVAILABLE_VARIANTS, default="seeker",
                        help="Autopilot that steers the snake")
    parser.add_argument("--max-ticks", type=int, required=False, default=1000,
                        help="Stop after this many ticks if the snake is still alive")
    parser.add_argument("--seed", type=int, required=False, default=None,
                        help="Random seed for food placement and the player")
    parser.add_argument("--persist", action="store_true",
                        help="Load and save the high score in the SQLite database")
    parser.add_argument("--show-board", action="store_true",
                        help="Print the board after every tick")

    args = parser.parse_args()

    store = None
    if args.persist:
        from data_access.high_score_store import SqliteHighScoreStore
        store = SqliteHighScoreStore()

    player = get_player_class(args.player)(rng=random.Random(args.seed))
    result = run_simulation(player, args.max_ticks, store, args.seed, args.show_board)

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
