"""
controller.py — Controller layer.

Responsibilities:
  - Own the pygame event loop and the only clock in the game.
  - Translate raw keyboard events into model commands.
  - Call model.advance() once per configured tick interval while playing.
  - Play the eat beep when a tick reports that food was eaten.
  - Know nothing about rendering details (that's the View's job).
  - Know nothing about game rules (that's the Model's job).

Audio notes:
  - The beep is synthesised at start-up (800 Hz square wave, 0.1 s,
    exponential fade), so no sound file ships with the game.
  - If no audio device is available the game runs silently with a
    logged warning.
"""

import logging
from array import array
from typing import Optional

import pygame

from .config import (
    WIDTH, HEIGHT, FPS,
    BEEP_FREQ, BEEP_SECONDS, BEEP_GAIN_START, BEEP_GAIN_END,
    STATE_SETUP, STATE_WAITING, STATE_PLAYING, STATE_PAUSED, STATE_OVER,
)
from .model import Direction, GameModel
from .view import GameView, SETUP_ROWS

logger = logging.getLogger(__name__)

DIRECTION_KEYS = {
    key: Direction.from_name(name)
    for name, keys in (
        ("UP",    (pygame.K_UP, pygame.K_w)),
        ("DOWN",  (pygame.K_DOWN, pygame.K_s)),
        ("LEFT",  (pygame.K_LEFT, pygame.K_a)),
        ("RIGHT", (pygame.K_RIGHT, pygame.K_d)),
    )
    for key in keys
}


def build_beep_samples(frequency: int, channels: int) -> array:
    """Signed 16-bit square wave with an exponential fade-out."""
    count = int(frequency * BEEP_SECONDS)
    ratio = BEEP_GAIN_END / BEEP_GAIN_START
    samples = array("h")
    for i in range(count):
        t = i / frequency
        gain = BEEP_GAIN_START * ratio ** (t / BEEP_SECONDS)
        high = (t * BEEP_FREQ) % 1.0 < 0.5
        value = int(32767 * gain) * (1 if high else -1)
        samples.extend([value] * channels)
    return samples


class GameController:
    """
    Owns the main loop.
    Glues Model <-> View without them knowing about each other.
    Also owns the pygame mixer so the beep lifecycle stays in one place.
    """

    def __init__(self, model: Optional[GameModel] = None):
        pygame.init()
        self.screen     = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("Snake Game")
        self.clock      = pygame.time.Clock()
        self.model      = model or GameModel()
        self.view       = GameView(self.screen)
        self.setup_row  = 0
        self.running    = False
        self._elapsed_ms = 0
        self._beep      = self._load_beep()

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Run the game loop until the player closes the window."""
        self.running = True
        while self.running:
            dt_ms = self.clock.tick(FPS)
            self._handle_events()
            self.tick(dt_ms)
            self.view.render(self.model, self.setup_row)
        pygame.quit()

    def tick(self, dt_ms: int) -> int:
        """
        Feed elapsed wall-clock time to the model.
        Runs at most one simulation step per frame; missed ticks after a
        slow frame are dropped. Returns how many steps were run (0 or 1).
        """
        if self.model.state != STATE_PLAYING:
            self._elapsed_ms = 0
            return 0

        interval = self.model.config.tick_interval_ms
        self._elapsed_ms += dt_ms
        if self._elapsed_ms < interval:
            return 0

        self._elapsed_ms = min(self._elapsed_ms - interval, interval)
        state = self.model.advance()
        if state.ate:
            self._play_beep()
        return 1

    # ── Audio helpers ─────────────────────────────────────────────
    def _load_beep(self) -> Optional[pygame.mixer.Sound]:
        """Synthesise the eat beep. Returns None when audio is unavailable."""
        try:
            pygame.mixer.init()
        except pygame.error as exc:
            logger.warning("[audio] mixer unavailable, running without sound: %s", exc)
            return None
        mixer_format = pygame.mixer.get_init()
        if mixer_format is None:
            logger.warning("[audio] mixer did not initialise, running without sound")
            return None
        frequency, size, channels = mixer_format
        if size != -16:
            logger.warning("[audio] unsupported sample format %s, running without sound", size)
            return None
        try:
            return pygame.mixer.Sound(buffer=build_beep_samples(frequency, channels).tobytes())
        except pygame.error as exc:
            logger.warning("[audio] could not build eat sound: %s", exc)
            return None

    def _play_beep(self) -> None:
        if self._beep is not None:
            self._beep.play()

    # ── Event dispatch ────────────────────────────────────────────
    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.quit()
            elif event.type == pygame.KEYDOWN:
                self.handle_keydown(event.key)

    def handle_keydown(self, key: int) -> None:
        # Q quits from any state
        if key == pygame.K_q:
            self.quit()
            return

        state = self.model.state

        if state == STATE_SETUP:
            self._handle_setup_keys(key)
        elif state in (STATE_WAITING, STATE_PLAYING, STATE_PAUSED):
            self._handle_run_keys(key)
        elif state == STATE_OVER:
            self._handle_over_keys(key)

    # ── Per-state key handlers ────────────────────────────────────
    def _handle_setup_keys(self, key: int) -> None:
        settings = self.model.settings
        cycles = (settings.cycle_color, settings.cycle_board_size, settings.cycle_tick_interval)
        if key in (pygame.K_RETURN, pygame.K_SPACE):
            self.model.start()
        elif key == pygame.K_ESCAPE:
            self.quit()
        elif key == pygame.K_UP:
            self.setup_row = (self.setup_row - 1) % len(SETUP_ROWS)
        elif key == pygame.K_DOWN:
            self.setup_row = (self.setup_row + 1) % len(SETUP_ROWS)
        elif key == pygame.K_LEFT:
            cycles[self.setup_row](-1)
        elif key == pygame.K_RIGHT:
            cycles[self.setup_row](1)

    def _handle_run_keys(self, key: int) -> None:
        if key in DIRECTION_KEYS:
            self.model.queue_direction(DIRECTION_KEYS[key])
        elif key == pygame.K_SPACE:
            self.model.toggle_pause()
        elif key == pygame.K_ESCAPE:
            self.model.reset()

    def _handle_over_keys(self, key: int) -> None:
        if key in (pygame.K_r, pygame.K_SPACE, pygame.K_RETURN, pygame.K_ESCAPE):
            self.model.reset()

    # ── Utilities ─────────────────────────────────────────────────
    def quit(self) -> None:
        self.running = False
