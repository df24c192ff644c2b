"""
Tests for main.py - letter snake simulation engine.

These tests pin down the tick rules, the round state machine and the
high score handling.
"""

import pytest
import random
import sys
import os
import threading
import time
from unittest.mock import Mock

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import SnakeGame, GamePhase, run_simulation
from data_access.high_score_store import InMemoryHighScoreStore
from domain.constants import (
    UP, DOWN, LEFT, RIGHT,
    BOARD_SIZE,
    FOOD_COLORS,
    INITIAL_SNAKE_LENGTH,
    LETTERS,
    SNAKE_HEAD_COLOR,
)
from domain.events import GameEvent
from domain.snake import next_head_position
from players import TargetSeekingPlayer
from players.base import Player
from services.tick_scheduler import GameLoop


FAR_TARGET = (20, 20)
FAR_DISTRACTOR = (25, 25)


def make_game(seed=0, store=None):
    """Start a round with both foods parked far away from row 7."""
    game = SnakeGame(store=store or InMemoryHighScoreStore(), rng=random.Random(seed))
    game.start_game()
    game.set_food(target_position=FAR_TARGET, distractor_position=FAR_DISTRACTOR)
    return game


def cell_ahead(game):
    return next_head_position(game.state.value.head, game.pending_direction)


def eat_target_ahead(game, distractor_position=(0, 20)):
    """Put the target right in front of the head and tick onto it."""
    game.set_food(target_position=cell_ahead(game), distractor_position=distractor_position)
    return game.tick()


def assert_invariants(game):
    state = game.state.value
    positions = state.snake_positions
    assert len(positions) == game.snake_length
    assert len(set(positions)) == len(positions)
    assert state.target.position not in positions
    assert state.distractor.position not in positions
    assert state.target.position != state.distractor.position
    assert state.target.letter != state.distractor.letter


class TestInitialState:
    """Tests for construction and a fresh round."""

    def test_starts_in_menu(self):
        game = SnakeGame(rng=random.Random(1))
        assert game.phase == GamePhase.MENU
        assert game.is_active.value is False
        assert game.is_paused.value is False
        assert game.state.value.is_game_over is False

    def test_fresh_round_layout(self):
        game = SnakeGame(rng=random.Random(1))
        state = game.start_game()

        assert state.snake_positions == [(7, 7), (6, 7), (5, 7), (4, 7)]
        assert all(segment.color == SNAKE_HEAD_COLOR for segment in state.snake)
        assert state.score == 0
        assert state.speed == 0
        assert state.eaten_letter_colors == {}
        assert state.target.letter == "a"
        assert state.distractor.letter != "a"
        assert state.target.color in FOOD_COLORS
        assert state.distractor.color in FOOD_COLORS
        assert game.pending_direction == RIGHT
        assert game.phase == GamePhase.PLAYING
        assert_invariants(game)

    def test_high_score_loaded_from_store(self):
        game = SnakeGame(store=InMemoryHighScoreStore(40), rng=random.Random(1))
        assert game.high_score == 40
        assert game.state.value.high_score == 40

    def test_high_score_load_failure_defaults_to_zero(self):
        store = Mock()
        store.load_high_score.side_effect = RuntimeError("store offline")
        game = SnakeGame(store=store, rng=random.Random(1))
        assert game.high_score == 0


class TestSetDirection:
    """Tests for the direction command."""

    @pytest.mark.parametrize("direction", [UP, DOWN, LEFT, RIGHT])
    def test_accepts_unit_vectors(self, direction):
        game = make_game()
        game.set_direction(*direction)
        assert game.pending_direction == direction

    @pytest.mark.parametrize("direction", [(1, 1), (2, 0), (0, 0), (-1, -1), (True, 0), (1.0, 0)])
    def test_rejects_other_vectors(self, direction):
        game = make_game()
        game.set_direction(*UP)
        with pytest.raises(ValueError):
            game.set_direction(*direction)
        assert game.pending_direction == UP

    def test_concurrent_writers_leave_a_valid_direction(self):
        game = make_game()
        moves = [UP, DOWN, LEFT, RIGHT]

        def writer(offset):
            for i in range(200):
                game.set_direction(*moves[(i + offset) % 4])

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert game.pending_direction in moves


class TestMovement:
    """Tests for plain moves and wraparound."""

    def test_single_tick_moves_right(self):
        game = make_game()
        state = game.tick()
        assert state.snake_positions == [(8, 7), (7, 7), (6, 7), (5, 7)]
        assert state.is_game_over is False
        assert state.score == 0

    def test_new_head_inherits_previous_head_color(self):
        game = make_game()
        game.set_snake([(7, 7), (6, 7), (5, 7), (4, 7)], color="#123456")
        state = game.tick()
        assert state.snake[0].color == "#123456"

    @pytest.mark.parametrize("body, direction, expected_head", [
        ([(31, 5), (30, 5), (29, 5), (28, 5)], RIGHT, (0, 5)),
        ([(0, 5), (1, 5), (2, 5), (3, 5)], LEFT, (31, 5)),
        ([(5, 0), (5, 1), (5, 2), (5, 3)], UP, (5, 31)),
        ([(5, 31), (5, 30), (5, 29), (5, 28)], DOWN, (5, 0)),
    ])
    def test_wraparound(self, body, direction, expected_head):
        game = make_game()
        game.set_snake(body)
        game.set_direction(*direction)
        state = game.tick()
        assert state.head == expected_head
        assert state.is_game_over is False
        assert_invariants(game)

    def test_speed_reflects_delay_before_tick(self):
        game = make_game()
        assert game.current_delay_ms() == 200
        eat_target_ahead(game)
        assert game.current_delay_ms() == 195
        state = game.tick()
        assert state.speed == 3


class TestEating:
    """Tests for target and distractor resolution."""

    def test_target_eat_grows_scores_and_advances_letter(self):
        game = make_game()
        target_color = game.state.value.target.color

        state = eat_target_ahead(game)

        assert state.score == 5
        assert game.snake_length == 5
        assert len(state.snake) == 5
        assert state.snake_positions == [(8, 7), (7, 7), (6, 7), (5, 7), (4, 7)]
        assert state.snake[0].color == target_color
        assert state.eaten_letter_colors == {"a": target_color}
        assert state.target.letter == "b"
        assert state.distractor.letter != "b"
        assert_invariants(game)

    def test_length_stays_after_growth(self):
        game = make_game()
        eat_target_ahead(game)
        game.set_food(target_position=FAR_TARGET, distractor_position=FAR_DISTRACTOR)
        state = game.tick()
        assert len(state.snake) == 5
        assert state.snake_positions == [(9, 7), (8, 7), (7, 7), (6, 7), (5, 7)]

    def test_distractor_eat_costs_points_without_growth(self):
        game = make_game()
        before = game.state.value
        game.set_food(distractor_position=(8, 7))
        distractor_color = game.state.value.distractor.color

        state = game.tick()

        assert state.score == -5
        assert len(state.snake) == INITIAL_SNAKE_LENGTH
        assert state.snake[0].color == distractor_color
        assert state.target == before.target
        assert state.distractor.letter != state.target.letter
        assert state.eaten_letter_colors == {}
        assert_invariants(game)

    def test_score_has_no_floor(self):
        game = make_game()
        game.set_food(distractor_position=(8, 7))
        game.tick()
        game.set_food(distractor_position=(9, 7))
        state = game.tick()
        assert state.score == -10

    def test_letters_cycle_through_alphabet(self):
        game = make_game()
        eaten = []

        for _ in range(len(LETTERS) + 1):
            eaten.append(game.state.value.target.letter)
            state = eat_target_ahead(game)
            assert state.is_game_over is False
            assert state.distractor.letter != state.target.letter
            assert_invariants(game)

        assert "".join(eaten) == LETTERS + "a"
        assert game.state.value.target.letter == "b"
        assert set(game.state.value.eaten_letter_colors) == set(LETTERS)


class TestCollision:
    """Tests for self-collision and the game-over transition."""

    def test_reversal_into_neck_is_game_over(self):
        game = make_game()
        before = game.state.value
        game.set_direction(*LEFT)

        state = game.tick()

        assert state.is_game_over is True
        assert state.snake == before.snake
        assert game.is_active.value is False
        assert game.phase == GamePhase.GAME_OVER

    def test_moving_onto_own_tail_square_is_game_over(self):
        game = make_game()
        game.tick()
        game.set_direction(*DOWN)
        game.tick()
        game.set_direction(*LEFT)
        state = game.tick()
        assert state.is_game_over is False
        assert state.snake_positions[-1] == (7, 7)

        game.set_direction(*UP)
        state = game.tick()

        assert state.is_game_over is True

    def test_closed_loop_of_snake_length_collides(self):
        game = make_game()
        game.set_snake([(1, 0), (0, 0), (0, 1), (1, 1)])
        game.set_direction(*DOWN)
        state = game.tick()
        assert state.is_game_over is True

    def test_tick_after_game_over_is_frozen(self):
        game = make_game()
        game.set_direction(*LEFT)
        final = game.tick()
        assert game.tick() is final

    def test_snake_length_resets_on_game_over(self):
        game = make_game()
        eat_target_ahead(game)
        game.set_direction(*LEFT)
        game.tick()
        assert game.snake_length == INITIAL_SNAKE_LENGTH


class TestHighScore:
    """Tests for high score comparison and persistence."""

    def test_new_high_score_is_saved_on_game_over(self):
        store = InMemoryHighScoreStore(7)
        game = make_game(store=store)
        for _ in range(3):
            eat_target_ahead(game)
        game.set_direction(*UP)
        game.set_direction(*DOWN)
        game.set_direction(*LEFT)

        state = game.tick()

        assert state.is_game_over is True
        assert state.score == 15
        assert state.high_score == 15
        assert game.high_score == 15
        assert store.load_high_score() == 15

    def test_lower_score_keeps_previous_high_score(self):
        store = InMemoryHighScoreStore(100)
        game = make_game(store=store)
        eat_target_ahead(game)
        game.set_direction(*LEFT)

        state = game.tick()

        assert state.score == 5
        assert state.high_score == 100
        assert store.save_calls == 0

    def test_save_failure_keeps_in_memory_value(self):
        store = Mock()
        store.load_high_score.return_value = 0
        store.save_high_score.side_effect = OSError("disk full")
        game = make_game(store=store)
        eat_target_ahead(game)
        game.set_direction(*LEFT)

        state = game.tick()

        assert state.is_game_over is True
        assert state.high_score == 5
        assert game.high_score == 5
        store.save_high_score.assert_called_once_with(5)


class TestStateMachine:
    """Tests for pause, start, restart and menu transitions."""

    def test_toggle_pause_twice_restores_value(self):
        game = make_game()
        assert game.toggle_pause() is True
        assert game.phase == GamePhase.PAUSED
        assert game.toggle_pause() is False
        assert game.phase == GamePhase.PLAYING

    def test_restart_after_game_over(self):
        game = make_game()
        eat_target_ahead(game)
        game.set_direction(*LEFT)
        assert game.tick().is_game_over is True

        state = game.restart_game()

        assert game.phase == GamePhase.PLAYING
        assert state.score == 0
        assert state.is_game_over is False
        assert state.snake_positions == [(7, 7), (6, 7), (5, 7), (4, 7)]
        assert game.pending_direction == RIGHT
        assert game.snake_length == INITIAL_SNAKE_LENGTH

    def test_start_clears_pause(self):
        game = make_game()
        game.toggle_pause()
        game.start_game()
        assert game.is_paused.value is False

    def test_return_to_menu_keeps_score_and_snake(self):
        game = make_game()
        eat_target_ahead(game)
        game.set_direction(*LEFT)
        final = game.tick()

        state = game.return_to_menu()

        assert game.phase == GamePhase.MENU
        assert state.is_game_over is False
        assert state.score == final.score
        assert state.snake == final.snake

    def test_tick_while_paused_changes_nothing(self):
        game = make_game()
        before = game.state.value
        game.toggle_pause()

        assert game.tick() is before
        assert game.state.value is before

    def test_tick_in_menu_changes_nothing(self):
        game = make_game()
        game.set_direction(*LEFT)
        before = game.return_to_menu()

        state = game.tick()

        assert state == before
        assert state.snake == before.snake
        assert state.is_game_over is False
        assert game.phase == GamePhase.MENU

    def test_tick_ignores_pause_that_races_the_scheduler(self):
        game = make_game()
        loop = GameLoop(game, idle_interval=0.005)
        # The loop has already decided to tick; the pause lands while it sleeps
        loop._should_idle = lambda: False
        frozen = []

        def pause_during_sleep():
            if not frozen:
                game.toggle_pause()
                frozen.append(game.state.value)
            return 1

        game.current_delay_ms = pause_during_sleep
        loop.start()
        time.sleep(0.05)
        loop.stop()

        assert loop.ticks > 0
        assert game.is_paused.value is True
        assert game.state.value is frozen[0]

    def test_return_to_menu_while_playing(self):
        game = make_game()
        game.return_to_menu()
        assert game.is_active.value is False
        assert game.phase == GamePhase.MENU


class TestEvents:
    """Tests for side-effect hooks and published snapshots."""

    def test_events_are_raised_in_order(self):
        game = SnakeGame(rng=random.Random(3))
        events = []
        game.add_listener(lambda event, state: events.append(event))

        game.start_game()
        game.set_food(target_position=(8, 7), distractor_position=(20, 20))
        game.tick()
        game.set_food(target_position=(20, 20), distractor_position=(9, 7))
        game.tick()
        game.set_direction(*LEFT)
        game.tick()

        assert events == [
            GameEvent.GAME_START,
            GameEvent.CORRECT_EAT,
            GameEvent.WRONG_EAT,
            GameEvent.GAME_OVER,
        ]

    def test_failing_listener_does_not_break_tick(self):
        game = make_game()
        game.add_listener(Mock(side_effect=RuntimeError("no sound device")))
        state = eat_target_ahead(game)
        assert state.score == 5

    def test_state_subscribers_see_each_tick(self):
        game = make_game()
        seen = []
        game.state.subscribe(seen.append)

        game.tick()
        game.tick()

        assert [s.head for s in seen] == [(8, 7), (9, 7)]

    def test_is_active_stream_reports_game_over(self):
        game = make_game()
        flags = []
        game.is_active.subscribe(flags.append)
        game.set_direction(*LEFT)
        game.tick()
        assert flags == [False]


class TestSetFood:
    """Tests for explicit food placement."""

    def test_rejects_food_on_snake(self):
        game = make_game()
        with pytest.raises(ValueError):
            game.set_food(target_position=(6, 7))

    def test_rejects_out_of_bounds(self):
        game = make_game()
        with pytest.raises(ValueError):
            game.set_food(target_position=(BOARD_SIZE, 0))

    def test_rejects_shared_cell(self):
        game = make_game()
        with pytest.raises(ValueError):
            game.set_food(target_position=(1, 1), distractor_position=(1, 1))

    def test_rejects_overlapping_snake(self):
        game = make_game()
        with pytest.raises(ValueError):
            game.set_snake([(1, 1), (1, 1)])


class EatOnceThenReverse(Player):
    """Seeks the target until it has scored, then turns back into its neck."""

    def __init__(self, rng=None):
        super().__init__(rng)
        self.seeker = TargetSeekingPlayer(rng=self.rng)

    def get_move(self, game_state):
        if game_state.score <= 0:
            return self.seeker.get_move(game_state)
        neck = game_state.snake[1].position
        return next(
            move for move in (UP, DOWN, LEFT, RIGHT)
            if next_head_position(game_state.head, move) == neck
        )


class TestRunSimulation:
    """Tests for the headless runner."""

    def test_summary_shape(self):
        player = TargetSeekingPlayer(rng=random.Random(5))
        result = run_simulation(player, max_ticks=50, seed=5)

        assert set(result) == {
            "score", "high_score", "ticks", "snake_length",
            "letters_eaten", "distractors_eaten", "target_letter", "game_over",
        }
        assert 0 < result["ticks"] <= 50
        assert result["score"] == 5 * (result["letters_eaten"] - result["distractors_eaten"])

    def test_game_over_persists_high_score(self):
        store = InMemoryHighScoreStore()
        result = run_simulation(EatOnceThenReverse(rng=random.Random(2)), max_ticks=5000, store=store, seed=2)

        assert result["game_over"] is True
        assert result["score"] > 0
        assert store.load_high_score() == result["score"]
        assert result["high_score"] == result["score"]
