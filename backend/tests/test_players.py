"""
Tests for the autopilot players.
"""

import pytest
import random
import sys
import os

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from players import RandomPlayer, TargetSeekingPlayer, get_player_class, list_variants
from players.random_player import safe_moves
from players.seeker_player import wrapped_distance
from domain.constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES
from domain.food import FoodItem
from domain.game_state import GameState
from domain.snake import initial_snake


def state_with(target=(10, 7), distractor=(20, 20)):
    return GameState(
        target=FoodItem(target, "a", "#FF0000"),
        distractor=FoodItem(distractor, "b", "#FFFF00"),
        snake=tuple(initial_snake()),
    )


class TestRandomPlayer:
    """Tests for RandomPlayer."""

    def test_never_turns_into_body(self):
        player = RandomPlayer(rng=random.Random(0))
        state = state_with()
        moves = {player.get_move(state) for _ in range(100)}
        assert LEFT not in moves
        assert moves <= {UP, DOWN, RIGHT}

    def test_safe_moves(self):
        assert set(safe_moves(state_with())) == {UP, DOWN, RIGHT}


class TestTargetSeekingPlayer:
    """Tests for TargetSeekingPlayer."""

    def test_heads_for_target(self):
        player = TargetSeekingPlayer(rng=random.Random(0))
        assert player.get_move(state_with(target=(10, 7))) == RIGHT

    def test_steers_around_distractor(self):
        player = TargetSeekingPlayer(rng=random.Random(0))
        move = player.get_move(state_with(target=(10, 7), distractor=(8, 7)))
        assert move in {UP, DOWN}

    def test_wrapped_distance(self):
        assert wrapped_distance((0, 0), (31, 0)) == 1
        assert wrapped_distance((0, 0), (16, 16)) == 32


class TestRegistry:
    """Tests for the player registry."""

    def test_lookup(self):
        assert get_player_class("random") is RandomPlayer
        assert get_player_class(None) is TargetSeekingPlayer

    def test_unknown_variant(self):
        with pytest.raises(ValueError):
            get_player_class("llm")

    def test_list_variants(self):
        assert {v["key"] for v in list_variants()} == {"random", "seeker"}

    def test_moves_are_valid(self):
        for cls in (RandomPlayer, TargetSeekingPlayer):
            assert cls(rng=random.Random(1)).get_move(state_with()) in VALID_MOVES
