"""
model.py — Model layer.

Owns ALL game state and rules. Zero rendering, zero input handling, zero
timers: the controller owns the clock and calls advance() once per tick.

Classes:
    Direction   — immutable (dx, dy) value object
    Snake       — body, committed and pending direction
    RunState    — read-only snapshot handed to the renderer
    GameModel   — the state machine: start / queue_direction /
                  toggle_pause / advance / reset
"""

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Optional

from .config import (
    FOOD_REWARD, EVENT_ATE,
    STATE_SETUP, STATE_WAITING, STATE_PLAYING, STATE_PAUSED, STATE_OVER,
)
from .settings import Configuration, GameSettings

logger = logging.getLogger(__name__)

Position = tuple[int, int]


# ─────────────────────────── Direction ───────────────────────────
class Direction:
    """Immutable 2-D unit direction."""
    UP    = None  # filled below after class definition
    DOWN  = None
    LEFT  = None
    RIGHT = None

    __slots__ = ("name", "x", "y")

    def __init__(self, name: str, x: int, y: int):
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    def __setattr__(self, key, value):
        raise AttributeError("Direction is immutable")

    def is_opposite(self, other: "Direction") -> bool:
        return self.x == -other.x and self.y == -other.y

    @classmethod
    def from_name(cls, name: str) -> "Direction":
        try:
            return _BY_NAME[name.upper()]
        except KeyError:
            raise ValueError(f"unknown direction: {name!r}") from None

    def __eq__(self, other):
        return isinstance(other, Direction) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Direction.{self.name}"


Direction.UP    = Direction("UP",     0, -1)
Direction.DOWN  = Direction("DOWN",   0,  1)
Direction.LEFT  = Direction("LEFT",  -1,  0)
Direction.RIGHT = Direction("RIGHT",  1,  0)
ALL_DIRS = [Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT]
_BY_NAME = {d.name: d for d in ALL_DIRS}


# ──────────────────────────── Snake ──────────────────────────────
class Snake:
    """
    Pure game data for the snake.
    No rendering. No input handling. No board knowledge.
    """

    def __init__(self, start: Position, start_dir: Direction):
        self.body: deque[Position] = deque([start])
        self.dir: Direction = start_dir
        self.next_dir: Direction = start_dir

    # ── Accessors ────────────────────────────────────────────────
    @property
    def head(self) -> Position:
        return self.body[0]

    # ── Commands ─────────────────────────────────────────────────
    def request_direction(self, new_dir: Direction) -> bool:
        """Set the pending direction unless it reverses the committed one."""
        if new_dir.is_opposite(self.dir):
            return False
        self.next_dir = new_dir
        return True

    def commit_direction(self) -> None:
        self.dir = self.next_dir

    def next_head(self) -> Position:
        hx, hy = self.head
        return hx + self.dir.x, hy + self.dir.y

    def move_to(self, new_head: Position, grow: bool) -> None:
        self.body.appendleft(new_head)
        if not grow:
            self.body.pop()

    # ── Queries ──────────────────────────────────────────────────
    def occupies(self, pos: Position) -> bool:
        return pos in self.body


# ─────────────────────────── RunState ────────────────────────────
@dataclass(frozen=True)
class RunState:
    """Snapshot of one run, safe to hand to the view."""
    phase: str
    snake: tuple = ()
    direction: Direction = Direction.RIGHT
    pending_direction: Direction = Direction.RIGHT
    food: Optional[Position] = None
    score: int = 0
    board_size: int = 0
    snake_color: str = ""
    events: tuple = ()
    death_reason: Optional[str] = None
    ticks: int = 0

    @property
    def head(self) -> Optional[Position]:
        return self.snake[0] if self.snake else None

    @property
    def ate(self) -> bool:
        return EVENT_ATE in self.events


# ─────────────────────────── GameModel ───────────────────────────
class GameModel:
    """
    Top-level model. Owns the live run.
    Operations called outside their phase are no-ops, never errors.
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 settings: Optional[GameSettings] = None):
        self.rng = rng or random.Random()
        self.settings: GameSettings = settings or GameSettings()
        self.state: str = STATE_SETUP
        self.config: Optional[Configuration] = None
        self.snake: Optional[Snake] = None
        self.food: Optional[Position] = None
        self.score: int = 0
        self.ticks: int = 0
        self.death_reason: Optional[str] = None
        self._events: list[str] = []

    # ── Public API ───────────────────────────────────────────────
    def start(self, config: Optional[Configuration] = None) -> RunState:
        """Begin a fresh run; the snake waits for the first direction."""
        self.config = config or self.settings.build()
        centre = self.config.board_size // 2
        self.snake = Snake((centre, centre), Direction.RIGHT)
        self.food = self.sample_food()
        self.score = 0
        self.ticks = 0
        self.death_reason = None
        self._events = []
        self.state = STATE_WAITING
        logger.info("Run started: board=%d tick=%dms color=%s",
                    self.config.board_size, self.config.tick_interval_ms,
                    self.config.snake_color)
        return self.snapshot()

    def queue_direction(self, direction: Direction) -> None:
        if self.state not in (STATE_WAITING, STATE_PLAYING, STATE_PAUSED):
            return
        self.snake.request_direction(direction)
        # Any direction input starts the run, even a rejected reversal
        if self.state == STATE_WAITING:
            self.state = STATE_PLAYING

    def toggle_pause(self) -> None:
        if self.state == STATE_PLAYING:
            self.state = STATE_PAUSED
        elif self.state == STATE_PAUSED:
            self.state = STATE_PLAYING

    def advance(self) -> RunState:
        """Run one simulation tick and return the resulting snapshot."""
        self._events = []
        if self.state != STATE_PLAYING:
            return self.snapshot()

        self.ticks += 1
        self.snake.commit_direction()
        new_head = self.snake.next_head()

        if not self.in_bounds(new_head):
            self._game_over("wall")
            return self.snapshot()

        # Checked before the tail moves: the vacating tail cell is lethal
        if self.snake.occupies(new_head):
            self._game_over("self")
            return self.snapshot()

        ate = new_head == self.food
        self.snake.move_to(new_head, grow=ate)
        if ate:
            self.score += FOOD_REWARD
            self.food = self.sample_food()
            self._events.append(EVENT_ATE)
            logger.debug("Food eaten at %s, score=%d, next food at %s",
                         new_head, self.score, self.food)
        return self.snapshot()

    def reset(self) -> None:
        """Drop the current run and return to the setup screen."""
        if self.state != STATE_SETUP:
            logger.info("Run discarded (phase=%s, score=%d)", self.state, self.score)
        self.state = STATE_SETUP
        self.config = None
        self.snake = None
        self.food = None
        self.score = 0
        self.ticks = 0
        self.death_reason = None
        self._events = []

    def sample_food(self) -> Position:
        """Uniform over the whole board. Not filtered against the snake."""
        size = self.config.board_size
        return self.rng.randrange(size), self.rng.randrange(size)

    def in_bounds(self, pos: Position) -> bool:
        size = self.config.board_size
        x, y = pos
        return 0 <= x < size and 0 <= y < size

    def snapshot(self) -> RunState:
        if self.snake is None:
            return RunState(phase=self.state)
        return RunState(
            phase=self.state,
            snake=tuple(self.snake.body),
            direction=self.snake.dir,
            pending_direction=self.snake.next_dir,
            food=self.food,
            score=self.score,
            board_size=self.config.board_size,
            snake_color=self.config.snake_color,
            events=tuple(self._events),
            death_reason=self.death_reason,
            ticks=self.ticks,
        )

    # ── Private helpers ──────────────────────────────────────────
    def _game_over(self, reason: str) -> None:
        self.state = STATE_OVER
        self.death_reason = reason
        logger.info("Game over (%s collision) after %d ticks, score=%d",
                    reason, self.ticks, self.score)
