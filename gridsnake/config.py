"""
config.py — Shared constants for the entire application.
No logic, no imports from internal modules.
"""

import os

# ── Grid ──────────────────────────────────────────────────────────
GRID_SIZE       = 20
OBSTACLE_COUNT  = 5
MAX_PLACEMENT_TRIES = 1000

# ── Timing (milliseconds per tick) ────────────────────────────────
BASE_SPEED      = 150
SPEED_STEP      = 10
MIN_SPEED       = 50
SPEED_UP_EVERY  = 5      # speed up each time the score hits a multiple of this

# ── Scoring ───────────────────────────────────────────────────────
FOOD_POINTS      = 1
POWER_UP_POINTS  = 3
POWER_UP_CHANCE  = 0.3

# ── Persistence ───────────────────────────────────────────────────
HIGH_SCORE_KEY  = "highScore"
STORE_PATH      = os.path.join(os.path.expanduser("~"), ".gridsnake", "store.json")

# ── Window ────────────────────────────────────────────────────────
PANEL_H         = 60
GAME_W = GAME_H = 400
OFFSET_X        = 10
OFFSET_Y        = PANEL_H + 10
WIDTH           = GAME_W + 2 * OFFSET_X
HEIGHT          = OFFSET_Y + GAME_H + 10
FPS             = 60

# ── Input ─────────────────────────────────────────────────────────
SWIPE_MIN_DISTANCE = 10  # pixels
INPUT_QUEUE_SIZE   = 3

# ── Colors ────────────────────────────────────────────────────────
BG            = (0,   0,   0)
GRID_COL      = (18,  18,  18)
SNAKE_COL     = (0,   255, 0)
FOOD_COL      = (255, 0,   0)
POWER_UP_COL  = (255, 215, 0)
OBSTACLE_COL  = (128, 128, 128)
UI_COL        = (170, 170, 170)
PANEL_BG      = (12,  12,  12)
BORDER_COL    = (60,  60,  60)

# ── UI States ─────────────────────────────────────────────────────
STATE_PLAYING = "playing"
STATE_PAUSED  = "paused"
STATE_OVER    = "over"
