"""
settings.py — Run configuration.

Validated game parameters chosen on the setup screen before a run starts:
board size, tick interval and the (purely cosmetic) snake colour.

Classes:
    InvalidOption   — a value outside its enumerated option set
    Configuration   — frozen parameters for one run
    GameSettings    — mutable setup-screen choices; builds a Configuration
"""

from dataclasses import dataclass

from .config import (
    SNAKE_COLORS, BOARD_SIZES, SPEED_OPTIONS, CELL_SIZES,
    DEFAULT_BOARD_SIZE, DEFAULT_TICK_MS, DEFAULT_SNAKE_COLOR,
)

BOARD_SIZE_VALUES = [value for _, value in BOARD_SIZES]
TICK_VALUES       = [value for _, value in SPEED_OPTIONS]
COLOR_VALUES      = [value for _, value in SNAKE_COLORS]


class InvalidOption(ValueError):
    """Raised when a setting is not one of its enumerated options."""

    def __init__(self, field: str, value, allowed):
        self.field = field
        self.value = value
        self.allowed = list(allowed)
        super().__init__(f"invalid {field}: {value!r} (expected one of {self.allowed})")


# ─────────────────────────── lookups ─────────────────────────────
def _label_for(options: list, value) -> str:
    for label, option in options:
        if option == value:
            return label
    raise KeyError(value)


def color_name(value: str) -> str:
    return _label_for(SNAKE_COLORS, value)


def board_label(size: int) -> str:
    return _label_for(BOARD_SIZES, size)


def speed_label(tick_ms: int) -> str:
    return _label_for(SPEED_OPTIONS, tick_ms)


def cell_size_for(board_size: int) -> int:
    """Pixel size of one cell so every board fits the same window."""
    return CELL_SIZES[board_size]


def _check_board_size(value) -> int:
    # bool is an int subclass; True must not pass as an option
    if isinstance(value, bool) or not isinstance(value, int) or value not in BOARD_SIZE_VALUES:
        raise InvalidOption("board_size", value, BOARD_SIZE_VALUES)
    return value


def _check_tick_interval(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value not in TICK_VALUES:
        raise InvalidOption("tick_interval_ms", value, TICK_VALUES)
    return value


def _check_color(value) -> str:
    """Accept a palette hex value or a colour name; return the hex value."""
    if isinstance(value, str):
        if value.lower() in COLOR_VALUES:
            return value.lower()
        for label, hex_value in SNAKE_COLORS:
            if value.lower() == label.lower():
                return hex_value
    raise InvalidOption("snake_color", value, COLOR_VALUES)


# ──────────────────────── Configuration ──────────────────────────
@dataclass(frozen=True)
class Configuration:
    board_size: int = DEFAULT_BOARD_SIZE
    tick_interval_ms: int = DEFAULT_TICK_MS
    snake_color: str = DEFAULT_SNAKE_COLOR

    def __post_init__(self):
        _check_board_size(self.board_size)
        _check_tick_interval(self.tick_interval_ms)
        object.__setattr__(self, "snake_color", _check_color(self.snake_color))


def configure(
    board_size: int = DEFAULT_BOARD_SIZE,
    tick_interval_ms: int = DEFAULT_TICK_MS,
    color: str = DEFAULT_SNAKE_COLOR,
) -> Configuration:
    """Validate the three parameters and return a Configuration.

    Raises InvalidOption for the first value outside its option set.
    """
    return Configuration(board_size, tick_interval_ms, color)


# ───────────────────────── GameSettings ──────────────────────────
class GameSettings:
    """
    Current choices on the setup screen.
    Setters validate; a rejected value leaves the previous choice in place.
    """

    def __init__(
        self,
        board_size: int = DEFAULT_BOARD_SIZE,
        tick_interval_ms: int = DEFAULT_TICK_MS,
        snake_color: str = DEFAULT_SNAKE_COLOR,
    ):
        self.board_size: int = _check_board_size(board_size)
        self.tick_interval_ms: int = _check_tick_interval(tick_interval_ms)
        self.snake_color: str = _check_color(snake_color)

    # ── Setters ──────────────────────────────────────────────────
    def set_board_size(self, value: int) -> None:
        self.board_size = _check_board_size(value)

    def set_tick_interval(self, value: int) -> None:
        self.tick_interval_ms = _check_tick_interval(value)

    def set_color(self, value: str) -> None:
        self.snake_color = _check_color(value)

    # ── Keyboard cycling (setup screen) ──────────────────────────
    @staticmethod
    def _neighbour(values: list, current, step: int):
        return values[(values.index(current) + step) % len(values)]

    def cycle_board_size(self, step: int = 1) -> None:
        self.board_size = self._neighbour(BOARD_SIZE_VALUES, self.board_size, step)

    def cycle_tick_interval(self, step: int = 1) -> None:
        self.tick_interval_ms = self._neighbour(TICK_VALUES, self.tick_interval_ms, step)

    def cycle_color(self, step: int = 1) -> None:
        self.snake_color = self._neighbour(COLOR_VALUES, self.snake_color, step)

    def build(self) -> Configuration:
        return Configuration(self.board_size, self.tick_interval_ms, self.snake_color)

    def __repr__(self):
        return (f"GameSettings(board_size={self.board_size}, "
                f"tick_interval_ms={self.tick_interval_ms}, "
                f"snake_color={self.snake_color!r})")
