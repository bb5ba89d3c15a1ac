"""
view.py — View layer.

Draws one frame from a GameModel snapshot: either the setup screen or the
board with its HUD and the Paused / Game Over overlays. Reads the model,
never writes to it.

Public API:
    GameView(screen)                  — bind to a pygame surface
    view.render(model, setup_row=0)   — draw the current frame
"""

import pygame

from .config import (
    WIDTH, PANEL_H, MARGIN, BOARD_PX,
    BG, BOARD_BG, BORDER_COL, FOOD_COL, TEXT_COL, HINT_COL,
    START_COL, SELECT_COL, ROW_COL, BLACK,
    SNAKE_COLORS,
    STATE_SETUP, STATE_WAITING, STATE_PAUSED, STATE_OVER,
)
from .model import GameModel, RunState
from .settings import GameSettings, board_label, speed_label, color_name, cell_size_for

SETUP_ROWS = ("Snake Color", "Board Size", "Speed")


# ─────────────────────── colour helpers ──────────────────────────
def hex_to_rgb(value: str) -> tuple:
    value = value.lstrip("#")
    return tuple(int(value[i:i + 2], 16) for i in (0, 2, 4))


def _lerp_color(c1: tuple, c2: tuple, t: float) -> tuple:
    t = max(0.0, min(1.0, t))
    return tuple(int(c1[i] + (c2[i] - c1[i]) * t) for i in range(3))


def board_origin(board_size: int) -> tuple[int, int]:
    """Top-left pixel of a board, centred in the play area."""
    side = board_size * cell_size_for(board_size)
    ox = (WIDTH - side) // 2
    oy = PANEL_H + MARGIN + (BOARD_PX - side) // 2
    return ox, oy


def cell_rect(board_size: int, pos: tuple[int, int]) -> pygame.Rect:
    """Screen rectangle of one cell, inset by a pixel on each side."""
    cell = cell_size_for(board_size)
    ox, oy = board_origin(board_size)
    return pygame.Rect(ox + pos[0] * cell + 1, oy + pos[1] * cell + 1, cell - 2, cell - 2)


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """Renders the complete game frame from a GameModel."""

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self._init_fonts()

    # ── Main entry ───────────────────────────────────────────────
    def render(self, model: GameModel, setup_row: int = 0) -> None:
        self.screen.fill(BG)
        if model.state == STATE_SETUP:
            self._draw_setup(model.settings, setup_row)
        else:
            state = model.snapshot()
            self._draw_panel(state)
            self._draw_board(state)
            if state.phase == STATE_OVER:
                self._draw_game_over_overlay(state)
            elif state.phase == STATE_PAUSED:
                self._draw_paused_overlay(state)
        pygame.display.flip()

    # ── Setup screen ─────────────────────────────────────────────
    def _draw_setup(self, settings: GameSettings, active_row: int) -> None:
        cy = 40
        title = self.font_title.render("Snake Game Setup", True, TEXT_COL)
        self.screen.blit(title, title.get_rect(center=(WIDTH // 2, cy)))
        cy += 60

        values = (
            color_name(settings.snake_color),
            board_label(settings.board_size),
            speed_label(settings.tick_interval_ms),
        )
        for i, (label, value) in enumerate(zip(SETUP_ROWS, values)):
            selected = i == active_row
            row = pygame.Rect(MARGIN, cy, WIDTH - 2 * MARGIN, 44)
            pygame.draw.rect(self.screen, SELECT_COL if selected else ROW_COL,
                             row, 0 if selected else 1, border_radius=6)
            self.screen.blit(self.font_med.render(label, True, TEXT_COL),
                             (row.x + 12, row.y + 12))
            text = self.font_med.render(f"<  {value}  >", True, TEXT_COL)
            self.screen.blit(text, text.get_rect(midright=(row.right - 12, row.centery)))
            cy += 56

        cy += 6
        self._draw_swatches(settings.snake_color, cy)
        cy += 60

        for hint in ("UP / DOWN  choose   LEFT / RIGHT  change",
                     "ENTER  start game      ESC  close"):
            surf = self.font_small.render(hint, True, HINT_COL)
            self.screen.blit(surf, surf.get_rect(center=(WIDTH // 2, cy)))
            cy += 24

    def _draw_swatches(self, current: str, cy: int) -> None:
        spacing = 44
        sx = WIDTH // 2 - (len(SNAKE_COLORS) - 1) * spacing // 2
        for i, (_, value) in enumerate(SNAKE_COLORS):
            centre = (sx + i * spacing, cy + 20)
            pygame.draw.circle(self.screen, hex_to_rgb(value), centre, 16)
            if value == current:
                pygame.draw.circle(self.screen, TEXT_COL, centre, 19, 2)

    # ── HUD Panel ─────────────────────────────────────────────────
    def _draw_panel(self, state: RunState) -> None:
        score = self.font_big.render(f"Score: {state.score}", True, TEXT_COL)
        self.screen.blit(score, score.get_rect(center=(WIDTH // 2, 20)))

        if state.phase == STATE_WAITING:
            hint, color = "Press any arrow key or WASD to start!", START_COL
        else:
            hint, color = "Controls: Arrow Keys or WASD | Space to Pause", HINT_COL
        surf = self.font_small.render(hint, True, color)
        self.screen.blit(surf, surf.get_rect(center=(WIDTH // 2, 46)))

    # ── Board ────────────────────────────────────────────────────
    def _draw_board(self, state: RunState) -> None:
        size = state.board_size
        side = size * cell_size_for(size)
        ox, oy = board_origin(size)
        board = pygame.Rect(ox, oy, side, side)
        pygame.draw.rect(self.screen, BOARD_BG, board, border_radius=6)
        pygame.draw.rect(self.screen, BORDER_COL, board.inflate(2, 2), 1, border_radius=6)

        if state.food is not None:
            pygame.draw.rect(self.screen, FOOD_COL, cell_rect(size, state.food), border_radius=2)

        head_col = hex_to_rgb(state.snake_color)
        # Body segments at 80 % opacity over the board
        body_col = _lerp_color(BOARD_BG, head_col, 0.8)
        for i, segment in enumerate(state.snake):
            pygame.draw.rect(self.screen, head_col if i == 0 else body_col,
                             cell_rect(size, segment), border_radius=2)

    # ── State overlays ────────────────────────────────────────────
    def _draw_overlay_base(self, state: RunState, alpha: int) -> None:
        side = state.board_size * cell_size_for(state.board_size)
        surf = pygame.Surface((side, side), pygame.SRCALPHA)
        surf.fill((*BLACK, alpha))
        self.screen.blit(surf, board_origin(state.board_size))

    def _board_centre(self, state: RunState) -> tuple[int, int]:
        side = state.board_size * cell_size_for(state.board_size)
        ox, oy = board_origin(state.board_size)
        return ox + side // 2, oy + side // 2

    def _draw_paused_overlay(self, state: RunState) -> None:
        self._draw_overlay_base(state, 153)
        title = self.font_title.render("Paused", True, TEXT_COL)
        self.screen.blit(title, title.get_rect(center=self._board_centre(state)))

    def _draw_game_over_overlay(self, state: RunState) -> None:
        self._draw_overlay_base(state, 204)
        cx, cy = self._board_centre(state)
        lines = [
            (self.font_title, "Game Over!", TEXT_COL),
            (self.font_med, f"Final Score: {state.score}", TEXT_COL),
            (self.font_small, "ENTER  play again", START_COL),
        ]
        y = cy - 40
        for font, text, color in lines:
            surf = font.render(text, True, color)
            self.screen.blit(surf, surf.get_rect(center=(cx, y)))
            y += surf.get_height() + 12

    # ── Font init ─────────────────────────────────────────────────
    def _init_fonts(self) -> None:
        # pygame's bundled default font; always available, even headless
        specs = [
            ("font_title", 36),
            ("font_big",   28),
            ("font_med",   24),
            ("font_small", 20),
        ]
        for attr, size in specs:
            setattr(self, attr, pygame.font.Font(None, size))
