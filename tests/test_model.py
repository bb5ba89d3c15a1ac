"""
Tests for model.py - the tick-driven snake engine.

The engine has no clock of its own, so every test drives it by calling
advance() directly.
"""

import random
from collections import deque

import pytest

from gridsnake.config import (
    EVENT_ATE,
    STATE_SETUP, STATE_WAITING, STATE_PLAYING, STATE_PAUSED, STATE_OVER,
)
from gridsnake.model import ALL_DIRS, Direction, GameModel, RunState, Snake
from gridsnake.settings import GameSettings, configure


class ScriptedRng:
    """Stands in for random.Random; hands out pre-set randrange results."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        return self.values.pop(0)


def playing_model(body, direction=Direction.RIGHT, food=(0, 0), board_size=20, rng=None):
    """A model mid-run with the given snake body, heading and food."""
    model = GameModel(rng=random.Random(7))
    model.start(configure(board_size=board_size))
    if rng is not None:
        model.rng = rng
    model.snake.body = deque(body)
    model.snake.dir = direction
    model.snake.next_dir = direction
    model.food = food
    model.state = STATE_PLAYING
    return model


class TestDirection:
    """Tests for the Direction value object."""

    def test_opposites(self):
        assert Direction.UP.is_opposite(Direction.DOWN)
        assert Direction.DOWN.is_opposite(Direction.UP)
        assert Direction.LEFT.is_opposite(Direction.RIGHT)
        assert Direction.RIGHT.is_opposite(Direction.LEFT)
        assert not Direction.UP.is_opposite(Direction.LEFT)
        assert not Direction.UP.is_opposite(Direction.UP)

    def test_from_name(self):
        assert Direction.from_name("up") is Direction.UP
        assert Direction.from_name("RIGHT") is Direction.RIGHT
        with pytest.raises(ValueError):
            Direction.from_name("NORTH")

    def test_immutable(self):
        with pytest.raises(AttributeError):
            Direction.UP.x = 1

    def test_hashable_and_equal_by_value(self):
        assert Direction("UP", 0, -1) == Direction.UP
        assert len({Direction.UP, Direction("UP", 0, -1), Direction.DOWN}) == 2


class TestSnake:
    """Tests for the Snake entity."""

    def test_request_direction_rejects_reversal(self):
        snake = Snake((5, 5), Direction.RIGHT)
        assert snake.request_direction(Direction.LEFT) is False
        assert snake.next_dir == Direction.RIGHT

    def test_reversal_checked_against_committed_direction(self):
        """A pending UP does not make DOWN a reversal before the tick commits it."""
        snake = Snake((5, 5), Direction.RIGHT)
        assert snake.request_direction(Direction.UP)
        assert snake.request_direction(Direction.DOWN)
        assert snake.next_dir == Direction.DOWN

    def test_move_to_without_growth_keeps_length(self):
        snake = Snake((5, 5), Direction.RIGHT)
        snake.body = deque([(5, 5), (4, 5)])
        snake.move_to((6, 5), grow=False)
        assert list(snake.body) == [(6, 5), (5, 5)]

    def test_move_to_with_growth_keeps_tail(self):
        snake = Snake((5, 5), Direction.RIGHT)
        snake.move_to((6, 5), grow=True)
        assert list(snake.body) == [(6, 5), (5, 5)]


class TestStart:
    """Tests for GameModel.start()."""

    def test_new_model_is_in_setup(self):
        model = GameModel()
        assert model.state == STATE_SETUP
        assert model.snapshot() == RunState(phase=STATE_SETUP)

    @pytest.mark.parametrize("board_size,centre", [(15, 7), (20, 10), (25, 12)])
    def test_snake_starts_centred(self, board_size, centre):
        model = GameModel(rng=random.Random(1))
        state = model.start(configure(board_size=board_size))
        assert state.snake == ((centre, centre),)
        assert state.board_size == board_size

    def test_initial_run_state(self):
        model = GameModel(rng=ScriptedRng([3, 4]))
        state = model.start(configure())
        assert state.phase == STATE_WAITING
        assert state.direction == Direction.RIGHT
        assert state.pending_direction == Direction.RIGHT
        assert state.food == (3, 4)
        assert state.score == 0
        assert state.events == ()
        assert state.death_reason is None

    def test_start_defaults_to_current_settings(self):
        settings = GameSettings(board_size=15, tick_interval_ms=50, snake_color="Pink")
        model = GameModel(rng=random.Random(1), settings=settings)
        state = model.start()
        assert model.config == configure(15, 50, "#ec4899")
        assert state.snake_color == "#ec4899"

    def test_start_replaces_previous_run(self):
        model = playing_model([(5, 5), (4, 5)])
        model.score = 30
        model.start(configure())
        assert model.state == STATE_WAITING
        assert model.score == 0
        assert model.snapshot().snake == ((10, 10),)


class TestQueueDirection:
    """Tests for GameModel.queue_direction()."""

    def test_first_input_starts_the_run(self):
        model = GameModel(rng=random.Random(1))
        model.start(configure())
        model.queue_direction(Direction.UP)
        assert model.state == STATE_PLAYING
        assert model.snake.next_dir == Direction.UP

    def test_rejected_first_input_still_starts_the_run(self):
        model = GameModel(rng=random.Random(1))
        model.start(configure())
        model.queue_direction(Direction.LEFT)
        assert model.state == STATE_PLAYING
        assert model.snake.next_dir == Direction.RIGHT

    def test_reverse_is_ignored(self):
        """Reversing into the body is refused and the snake keeps going."""
        model = playing_model([(5, 5), (4, 5), (3, 5)])
        model.queue_direction(Direction.LEFT)
        assert model.snake.next_dir == Direction.RIGHT
        state = model.advance()
        assert state.head == (6, 5)
        assert state.phase == STATE_PLAYING

    def test_latest_valid_direction_wins(self):
        model = playing_model([(5, 5), (4, 5)])
        model.queue_direction(Direction.UP)
        model.queue_direction(Direction.DOWN)
        state = model.advance()
        assert state.head == (5, 6)
        assert state.direction == Direction.DOWN

    def test_input_after_tick_applies_to_next_tick(self):
        model = playing_model([(5, 5)])
        model.advance()
        model.queue_direction(Direction.DOWN)
        assert model.snake.dir == Direction.RIGHT
        state = model.advance()
        assert state.snake == ((6, 6),)

    def test_paused_run_accepts_direction_without_resuming(self):
        model = playing_model([(5, 5)])
        model.toggle_pause()
        model.queue_direction(Direction.UP)
        assert model.state == STATE_PAUSED
        assert model.snake.next_dir == Direction.UP

    def test_ignored_in_setup(self):
        model = GameModel()
        model.queue_direction(Direction.UP)
        assert model.state == STATE_SETUP

    def test_ignored_after_game_over(self):
        model = playing_model([(19, 10)])
        model.advance()
        assert model.state == STATE_OVER
        model.queue_direction(Direction.UP)
        assert model.state == STATE_OVER
        assert model.snake.next_dir == Direction.RIGHT


class TestTogglePause:
    """Tests for GameModel.toggle_pause()."""

    def test_pause_and_resume(self):
        model = playing_model([(5, 5)])
        model.toggle_pause()
        assert model.state == STATE_PAUSED
        model.toggle_pause()
        assert model.state == STATE_PLAYING

    def test_paused_run_does_not_advance(self):
        model = playing_model([(5, 5)])
        model.toggle_pause()
        before = model.snapshot()
        assert model.advance() == before

    @pytest.mark.parametrize("phase", [STATE_SETUP, STATE_WAITING, STATE_OVER])
    def test_no_op_outside_running_and_paused(self, phase):
        model = playing_model([(5, 5)])
        model.state = phase
        model.toggle_pause()
        assert model.state == phase


class TestAdvance:
    """Tests for the per-tick simulation step."""

    def test_moves_one_cell_without_growing(self):
        """A fresh length-1 snake moves right and stays length 1."""
        model = GameModel(rng=ScriptedRng([0, 0]))
        model.start(configure(board_size=20))
        model.queue_direction(Direction.RIGHT)
        state = model.advance()
        assert state.snake == ((11, 10),)
        assert state.score == 0
        assert state.events == ()

    @pytest.mark.parametrize("direction,expected", [
        (Direction.UP, (5, 4)),
        (Direction.DOWN, (5, 6)),
        (Direction.LEFT, (4, 5)),
        (Direction.RIGHT, (6, 5)),
    ])
    def test_head_moves_in_direction(self, direction, expected):
        model = playing_model([(5, 5)], direction=direction)
        assert model.advance().head == expected

    def test_body_follows_head(self):
        model = playing_model([(5, 5), (4, 5), (3, 5)], direction=Direction.RIGHT)
        model.queue_direction(Direction.DOWN)
        state = model.advance()
        assert state.snake == ((5, 6), (5, 5), (4, 5))

    @pytest.mark.parametrize("head,direction", [
        ((19, 10), Direction.RIGHT),
        ((0, 10), Direction.LEFT),
        ((10, 0), Direction.UP),
        ((10, 19), Direction.DOWN),
    ])
    def test_wall_collision_ends_the_run(self, head, direction):
        model = playing_model([head], direction=direction)
        state = model.advance()
        assert state.phase == STATE_OVER
        assert state.death_reason == "wall"
        assert state.snake == (head,)

    def test_self_collision_ends_the_run(self):
        body = [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6), (4, 5), (3, 5)]
        model = playing_model(body, direction=Direction.UP)
        model.queue_direction(Direction.RIGHT)
        state = model.advance()
        assert state.phase == STATE_OVER
        assert state.death_reason == "self"
        assert state.snake == tuple(body)

    def test_moving_into_vacating_tail_is_lethal(self):
        """The tail is still on the board when the new head is checked."""
        body = [(5, 5), (5, 6), (4, 6), (4, 5)]
        model = playing_model(body, direction=Direction.UP)
        model.queue_direction(Direction.LEFT)
        state = model.advance()
        assert state.phase == STATE_OVER
        assert state.death_reason == "self"

    def test_eating_food_grows_and_scores(self):
        """Head reaches food, score +10, length +1, food resampled."""
        rng = ScriptedRng([12, 13])
        model = playing_model([(5, 5), (4, 5), (3, 5)], food=(6, 5), rng=rng)
        state = model.advance()
        assert state.score == 10
        assert state.snake == ((6, 5), (5, 5), (4, 5), (3, 5))
        assert state.food == (12, 13)
        assert rng.calls == [20, 20]
        assert state.events == (EVENT_ATE,)
        assert state.ate

    def test_ate_event_only_on_the_eating_tick(self):
        model = playing_model([(5, 5)], food=(6, 5), rng=ScriptedRng([0, 19]))
        assert model.advance().ate
        assert model.advance().events == ()

    def test_food_may_spawn_on_the_snake(self):
        """Food placement is not filtered against the body."""
        model = playing_model([(5, 5), (4, 5)], food=(6, 5), rng=ScriptedRng([6, 5]))
        state = model.advance()
        assert state.food == state.head

    def test_no_progress_before_first_input(self):
        """advance() while waiting for input changes nothing."""
        model = GameModel(rng=random.Random(3))
        before = model.start(configure())
        after = model.advance()
        assert after == before
        assert after.phase == STATE_WAITING

    def test_no_op_after_game_over(self):
        model = playing_model([(19, 10)])
        over = model.advance()
        assert model.advance() == over

    def test_no_op_in_setup(self):
        model = GameModel()
        assert model.advance() == RunState(phase=STATE_SETUP)

    def test_snapshot_is_detached_from_live_state(self):
        model = playing_model([(5, 5)])
        state = model.advance()
        model.advance()
        assert state.snake == ((6, 5),)


class TestReset:
    """Tests for GameModel.reset()."""

    @pytest.mark.parametrize("phase", [STATE_WAITING, STATE_PLAYING, STATE_PAUSED, STATE_OVER])
    def test_reset_returns_to_setup(self, phase):
        model = playing_model([(5, 5)])
        model.state = phase
        model.reset()
        assert model.state == STATE_SETUP
        assert model.snake is None
        assert model.snapshot() == RunState(phase=STATE_SETUP)

    def test_reset_keeps_setup_choices(self):
        settings = GameSettings(board_size=25)
        model = GameModel(settings=settings)
        model.start()
        model.reset()
        assert model.settings.board_size == 25


class TestInvariants:
    """Random play keeps the engine's invariants."""

    @pytest.mark.parametrize("seed", range(20))
    def test_random_play(self, seed):
        rng = random.Random(seed)
        model = GameModel(rng=random.Random(seed + 1000))
        board_size = rng.choice([15, 20, 25])
        model.start(configure(board_size=board_size))
        model.queue_direction(Direction.UP)
        eats = 0

        for _ in range(500):
            if rng.random() < 0.3:
                model.queue_direction(rng.choice(ALL_DIRS))
            if rng.random() < 0.05:
                model.toggle_pause()
                model.toggle_pause()

            before = model.snapshot()
            after = model.advance()

            if after.phase == STATE_OVER:
                assert after.snake == before.snake
                break

            growth = len(after.snake) - len(before.snake)
            assert growth in (0, 1)
            assert (growth == 1) == after.ate
            eats += growth

            assert len(set(after.snake)) == len(after.snake)
            for x, y in after.snake:
                assert 0 <= x < board_size and 0 <= y < board_size
            assert after.score == 10 * eats
