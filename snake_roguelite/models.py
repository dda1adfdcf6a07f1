"""Data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .constants import BASE_HEALTH, BASE_SPEED
from .grid import Position


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def vector(self) -> tuple[int, int]:
        return _VECTORS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_VECTORS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}
_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Mode(Enum):
    TITLE = "title"
    PLAYING = "playing"
    UPGRADE_SELECT = "upgrade"
    GAME_OVER = "gameover"
    ACHIEVEMENTS = "achievements"


class EnemyKind(Enum):
    STATIC = "static"
    MOVING = "moving"


@dataclass
class Enemy:
    pos: Position
    kind: EnemyKind = EnemyKind.STATIC
    heading: Optional[Direction] = None

    @property
    def is_static(self) -> bool:
        return self.kind is EnemyKind.STATIC


@dataclass
class Session:
    """Transient state of one run, discarded at game over."""

    snake: list = field(default_factory=list)
    direction: Direction = Direction.RIGHT
    next_direction: Direction = Direction.RIGHT
    enemies: list = field(default_factory=list)
    food: Optional[Position] = None
    score: int = 0
    health: int = BASE_HEALTH
    max_health: int = BASE_HEALTH
    level: int = 1
    food_eaten: int = 0
    dash_cooldown: int = 0
    dash_requested: bool = False
    wall_bounce_active: bool = False
    current_speed: int = BASE_SPEED

    def head(self):
        return self.snake[0] if self.snake else None


@dataclass
class PermanentUpgrades:
    speed_boost: int = 0
    health_boost: int = 0
    gem_multiplier: float = 1.0
    snake_length: int = 0
    wall_bounce: int = 0
    dash_power: int = 0
    block_breaker: int = 0


@dataclass
class Stats:
    total_gems: float = 0.0
    wall_bounces: int = 0
    enemies_destroyed: int = 0
    blocks_destroyed: int = 0
    high_score: int = 0
    time_played: float = 0.0
    deaths: int = 0


@dataclass
class Progression:
    """Meta-progression that survives across runs."""

    gems: float = 0.0
    permanent_upgrades: PermanentUpgrades = field(default_factory=PermanentUpgrades)
    stats: Stats = field(default_factory=Stats)
    achievements: dict = field(default_factory=dict)

    def award_gems(self, amount: float):
        self.gems += amount
        self.stats.total_gems += amount
