"""Game constants."""

import os

GRID_SIZE = 20
BASE_SPEED = 10
BASE_HEALTH = 3
BASE_EXTRA_SEGMENTS = 2
START_HEAD = (10, 10)
FOOD_TO_ADVANCE = 5
ENEMIES_PER_LEVEL = 2

DASH_BASE_COOLDOWN = 10
DASH_MIN_COOLDOWN = 1
DASH_GEMS = 2
BLOCK_BREAK_CHANCE = 0.20
BLOCK_GEMS = 1
FOOD_GEMS = 1

UPGRADE_COSTS = {
    "speed_boost": 5,
    "health_boost": 5,
    "gem_multiplier": 10,
    "snake_length": 8,
    "wall_bounce": 15,
    "dash_power": 12,
    "block_breaker": 10,
}
GEM_MULTIPLIER_STEP = 0.5

PROGRESSION_KEY = "progression"
DEFAULT_SAVE_PATH = os.path.join(os.path.expanduser("~"), ".snake_roguelite.json")

HOST = "127.0.0.1"
PORT = 8765
