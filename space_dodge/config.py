from __future__ import annotations

"""Game configuration constants for Space Dodge."""

import os

# Game configuration
FIELD_WIDTH = 800
FIELD_HEIGHT = 600
FPS = 60

# Player physics (per frame)
PLAYER_X = 50
PLAYER_SIZE = 30  # height; width is 1.5x
GRAVITY = 0.2
THRUST = -0.4  # added on top of gravity while boosting

# Obstacles
OBSTACLE_BASE_SPEED = 5.0  # px/frame
SPEED_STEP = 0.1
SPEED_CAP = 10.0
SPEED_RAMP_INTERVAL = 500  # score points between ramps
SPAWN_INTERVAL_MS = 2000
COLLISION_PADDING = 5  # inset on every side of an obstacle hitbox

# Curved obstacles
CURVE_AMPLITUDE = 100.0
CURVE_PHASE_SPEED = 0.05
CURVE_UNLOCK_SCORE = 500
CURVE_CHANCE = 0.3
PREDICTION_STEPS = 80
PREDICTION_STEP_GAP = 1
PREDICTION_DOT_RADIUS = 2

# Particles
PARTICLE_FADE = 0.001  # alpha per frame
BG_PARTICLE_COUNT = 100

# Palette
COL_BACKGROUND = (0, 0, 0)
COL_STAR = (255, 255, 255)
COL_EXHAUST = (255, 255, 255)
COL_OBSTACLE = (255, 0, 0)
COL_CURVED = (255, 136, 0)
COL_FORECAST = (255, 255, 255)
COL_HULL = (204, 204, 255)
COL_HULL_EDGE = (255, 255, 255)
COL_CANOPY = (238, 238, 255)
COL_ENGINE = (16, 16, 255)
COL_TEXT = (230, 230, 230)
COL_TEXT_DIM = (180, 180, 190)
COL_BUTTON = (60, 60, 90)

# Persistence
HIGH_SCORE_KEY = "high_score"
HIGH_SCORE_FILE = os.environ.get(
    "SPACE_DODGE_HIGH_SCORE_FILE", os.path.join(os.path.expanduser("~"), ".space_dodge.json")
)

# Leaderboard
LEADERBOARD_URL = os.environ.get(
    "SPACE_DODGE_LEADERBOARD_URL", "https://spaceship-adventure-server.onrender.com"
)
LEADERBOARD_TIMEOUT = 10.0  # seconds

RANK_LOADING = "Loading rank..."
RANK_UNAVAILABLE = "Ranking unavailable"

LOG_LEVEL = os.environ.get("SPACE_DODGE_LOG_LEVEL", "INFO")
