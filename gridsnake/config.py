"""
config.py — Shared constants for the entire application.
No logic, no imports from internal modules.
"""

# ── Setup options ─────────────────────────────────────────────────
# (label, value) pairs, in the order the setup screen shows them.
SNAKE_COLORS = [
    ("Green",  "#22c55e"),
    ("Blue",   "#3b82f6"),
    ("Purple", "#a855f7"),
    ("Red",    "#ef4444"),
    ("Yellow", "#eab308"),
    ("Pink",   "#ec4899"),
    ("Cyan",   "#06b6d4"),
    ("Orange", "#f97316"),
]

BOARD_SIZES = [
    ("Small",  15),
    ("Medium", 20),
    ("Large",  25),
]

SPEED_OPTIONS = [
    ("Slow",    200),
    ("Normal",  150),
    ("Fast",    100),
    ("Extreme", 50),
]

DEFAULT_BOARD_SIZE   = 20
DEFAULT_TICK_MS      = 150
DEFAULT_SNAKE_COLOR  = SNAKE_COLORS[0][1]

# Pixels per cell, keyed by board size
CELL_SIZES = {15: 26, 20: 20, 25: 16}

# ── Gameplay ──────────────────────────────────────────────────────
FOOD_REWARD = 10
EVENT_ATE   = "ate"

# ── Game States ───────────────────────────────────────────────────
STATE_SETUP   = "setup"
STATE_WAITING = "waiting"
STATE_PLAYING = "playing"
STATE_PAUSED  = "paused"
STATE_OVER    = "over"

# ── Window ────────────────────────────────────────────────────────
BOARD_PX        = 400          # largest board: 20 * 20 and 25 * 16
PANEL_H         = 64
MARGIN          = 20
WIDTH           = BOARD_PX + 2 * MARGIN
HEIGHT          = PANEL_H + BOARD_PX + 2 * MARGIN
FPS             = 60

# ── Colors ────────────────────────────────────────────────────────
BG          = (17,  24,  39)
BOARD_BG    = (31,  41,  55)
BORDER_COL  = (55,  65,  81)
FOOD_COL    = (239, 68,  68)
TEXT_COL    = (255, 255, 255)
HINT_COL    = (156, 163, 175)
START_COL   = (250, 204, 21)
SELECT_COL  = (59,  130, 246)
ROW_COL     = (55,  65,  81)
BLACK       = (0,   0,   0)

# ── Eat sound ─────────────────────────────────────────────────────
BEEP_FREQ       = 800
BEEP_SECONDS    = 0.1
BEEP_GAIN_START = 0.3
BEEP_GAIN_END   = 0.01
