"""
config.py - Shared constants for the entire application.
No logic, no imports from internal modules.
"""

import os

# ── Window ────────────────────────────────────────────────────────
WIDTH, HEIGHT   = 520, 640
PANEL_H         = 64
FPS             = 60

# ── Colors ────────────────────────────────────────────────────────
BG          = (10,  10,  15)
GRID_COL    = (40,  34,  8)
GOLD        = (255, 215, 0)
GOLD_DIM    = (140, 110, 0)
ORANGE      = (255, 140, 40)
FOOD_COL    = (255, 77,  77)
UI_COL      = (120, 120, 170)
WHITE       = (255, 255, 255)
BLACK       = (0,   0,   0)
PANEL_BG    = (12,  12,  20)
BORDER_COL  = (90,  75,  10)
SKY_TOP     = (255, 154, 86)
SKY_BOTTOM  = (255, 192, 72)

# ── Snake ─────────────────────────────────────────────────────────
GRID_SIZE        = 20
SNAKE_CELL       = 22
INITIAL_SNAKE    = ((10, 10),)
INITIAL_FOOD     = (15, 15)
INITIAL_DIR      = (0, -1)
BASE_SPEED       = 200     # ms between ticks
SPEED_INCREASE   = 10      # ms removed per level
MIN_SPEED        = 80      # interval floor
FOOD_POINTS      = 10
POINTS_PER_LEVEL = 50

# ── Brick breaker ─────────────────────────────────────────────────
CANVAS_W, CANVAS_H = 400, 500
PADDLE_W, PADDLE_H = 80, 12
PADDLE_Y           = CANVAS_H - 30
PADDLE_KEY_STEP    = 6     # px per frame while an arrow key is held
PADDLE_DEFLECT     = 6     # dx spans -PADDLE_DEFLECT/2 .. +PADDLE_DEFLECT/2
BALL_SIZE          = 8
BALL_START         = (CANVAS_W / 2, CANVAS_H - 50)
BALL_SPEED         = 3
LEVEL_SPEEDUP      = 0.5
RESPAWN_DELAY      = 100   # ms
START_LIVES        = 3
BRICK_W, BRICK_H   = 45, 25
BRICK_ROWS         = 8
BRICK_COLS         = 8
BRICK_GAP          = 5
BRICK_OFFSET       = (20, 50)

# name, points, color
BRICK_TYPES = (
    ("controller", 10, (255, 107, 107)),
    ("card",       15, (78,  205, 196)),
    ("powerup",    20, (69,  183, 209)),
    ("coin",       25, (249, 202, 36)),
    ("gem",        30, (108, 92,  231)),
)

# ── Game select ───────────────────────────────────────────────────
GAMES = (
    {
        "id": "snake",
        "name": "GAMAKAY SNAKE",
        "description": "Classic snake with retro neon styling",
        "icon": "snake",
    },
    {
        "id": "brick-breaker",
        "name": "BRICK BREAKER",
        "description": "Break gaming-themed bricks, clear boards to level up",
        "icon": "bricks",
    },
)

# ── Persistence ───────────────────────────────────────────────────
SNAKE_HIGH_SCORE_KEY   = "gamakay-snake-high-score"
BREAKER_HIGH_SCORE_KEY = "gamakay-breaker-high-score"
HIGHSCORE_FILE = os.environ.get(
    "MINIGAMES_HIGHSCORE_FILE",
    os.path.join(os.path.expanduser("~"), ".gamakay_highscores.json"),
)
LOG_LEVEL = os.environ.get("MINIGAMES_LOG_LEVEL", "INFO")

# ── Game States ───────────────────────────────────────────────────
STATE_IDLE    = "idle"
STATE_MENU    = "menu"
STATE_PLAYING = "playing"
STATE_PAUSED  = "paused"
STATE_OVER    = "over"
STATE_VICTORY = "victory"
