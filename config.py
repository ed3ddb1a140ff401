# config.py
# All configurable constants and settings

import os

# Optional debug logging toggle – when enabled, log_debug() calls emit a
# timestamped trace to logs/debug.txt. Disabled by default for normal play.
LOG_ENABLED = bool(int(os.getenv("INVADERS_LOG_ENABLED", "0")))
LOG_FILE_PATH = "logs/debug.txt"

# Central audio toggle; with audio off every cue becomes a no-op.
AUDIO_ENABLED = bool(int(os.getenv("INVADERS_AUDIO_ENABLED", "1")))

# Default window dimensions (the window is resizable)
WIDTH = 1280
HEIGHT = 800

# Frames per second
FPS = 60

# Player
PLAYER_WIDTH = 40
PLAYER_HEIGHT = 24
PLAYER_SPEED = 500.0          # px/s
PLAYER_BOTTOM_OFFSET = 60     # y = viewport height - offset
TOUCH_SPEED_FACTOR = 1.5
TOUCH_SNAP_DISTANCE = 5
TAP_FIRE_DEBOUNCE = 0.15      # seconds between tap shots

# Bullets
PLAYER_BULLET_SIZE = (4, 10)
PLAYER_BULLET_SPEED = 600.0
ENEMY_BULLET_SIZE = (4, 12)
ENEMY_BULLET_SPEED = 300.0

# Enemies & difficulty
BASE_ENEMY_SPEED = 100.0
BASE_FIRE_INTERVAL = 1.0
MIN_FIRE_INTERVAL = 0.2
SPEED_STEP = 0.2
FIRE_INTERVAL_STEP = 0.15
ENEMY_DROP_DISTANCE = 30
ENEMY_EDGE_MARGIN = 20
GRID_TOP = 80
MAX_GRID_WIDTH_RATIO = 0.6
MAX_ENEMY_SIZE = 50
NARROW_VIEWPORT = 500         # below this width the grid shrinks to 4x5

# Scoring
ENEMY_POINTS = 100
TARGET_POINTS = 50
LEVEL_BONUS = 500

# Explosions
EXPLOSION_PARTICLES = 10
PARTICLE_LIFE = 0.5
DEFAULT_EXPLOSION_SIZE = 20
PLAYER_EXPLOSION_SIZE = 50
TARGET_EXPLOSION_CAP = 100

# Page targets
TARGET_MIN_SIZE = 10

# High scores
HIGH_SCORE_KEY = "spaceInvadersHighScores"
HIGH_SCORE_FILE = os.getenv("INVADERS_HIGHSCORE_FILE", "highscores.json")
MAX_HIGH_SCORES = 5
NAME_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ "
NAME_LENGTH = 3

# Audio
SAMPLE_RATE = 44_100
READY_ARPEGGIO = (262, 330, 392, 523, 659, 784, 1047)
ARPEGGIO_NOTE_LENGTH = 0.12
ARPEGGIO_GAP = 0.02
RHYTHM_BASE_FREQ = 82.41      # E2
RHYTHM_BASE_INTERVAL_MS = 500
RHYTHM_MIN_INTERVAL_MS = 100
SOUND_SFX_VOLUME = 0.7
SOUND_RHYTHM_VOLUME = 0.6

# Overlays
LEVEL_BANNER_DURATION = 2.0
LEVEL_BANNER_FADE = 0.5
START_HINT_DURATION = 4.0
TRIGGER_ENTRANCE_DURATION = 0.4

# Mosaic source image
MOSAIC_IMAGE_PATH = os.getenv("INVADERS_MOSAIC_IMAGE", "images/profile.png")
MOSAIC_FALLBACK_SIZE = 300

# Palette
GREEN = (0, 255, 0)
GREEN_SHADOW = (0, 85, 0)
CYAN = (34, 211, 238)
CYAN_SHADOW = (0, 85, 85)
WHITE = (255, 255, 255)
RED = (255, 0, 0)
YELLOW = (255, 255, 0)
GREY = (170, 170, 170)

# Settings dictionary for live editing
settings_data = {
    "FPS": FPS,
    "SOUND_SFX_VOLUME": SOUND_SFX_VOLUME,
    "SOUND_RHYTHM_VOLUME": SOUND_RHYTHM_VOLUME,
}
