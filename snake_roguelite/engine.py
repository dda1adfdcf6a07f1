"""Per-tick simulation: enemies, snake movement and collision resolution."""

import logging
import random
from dataclasses import dataclass
from enum import Enum

from .constants import (
    BASE_EXTRA_SEGMENTS, BASE_HEALTH, BASE_SPEED, BLOCK_BREAK_CHANCE,
    BLOCK_GEMS, DASH_BASE_COOLDOWN, DASH_GEMS, DASH_MIN_COOLDOWN,
    ENEMIES_PER_LEVEL, FOOD_GEMS, FOOD_TO_ADVANCE, GRID_SIZE, START_HEAD,
)
from .grid import Position, clamp, in_bounds, random_empty_position, step
from .models import Direction, Enemy, EnemyKind, Progression, Session

logger = logging.getLogger(__name__)


class TickResult(Enum):
    CONTINUE = "continue"
    LEVEL_COMPLETE = "level_complete"
    GAME_OVER = "game_over"


@dataclass
class TickReport:
    """What happened during one call to :func:`advance`."""

    result: TickResult = TickResult.CONTINUE
    wall_bounced: bool = False
    food_eaten: bool = False
    damage_taken: int = 0
    enemies_destroyed: int = 0
    blocks_destroyed: int = 0
    gems_awarded: float = 0

    @property
    def progression_changed(self) -> bool:
        return bool(self.food_eaten or self.wall_bounced
                    or self.enemies_destroyed or self.blocks_destroyed)


def dash_cooldown_for(dash_power: int) -> int:
    return max(DASH_MIN_COOLDOWN, DASH_BASE_COOLDOWN - dash_power)


def block_break_chance(block_breaker: int) -> float:
    return min(1.0, max(0.0, BLOCK_BREAK_CHANCE * block_breaker))


def build_snake(extra_segments: int) -> list[Position]:
    """Straight snake along the start row, head first, facing right.

    The head moves right of the usual start cell when the body would not fit,
    and the body is capped so the head stays one cell short of the wall.
    """
    length = 1 + BASE_EXTRA_SEGMENTS + extra_segments
    head_x, y = START_HEAD
    head_x = min(GRID_SIZE - 2, max(head_x, length - 1))
    length = min(length, head_x + 1)
    return [(head_x - i, y) for i in range(length)]


def occupied_cells(session: Session) -> list[Position]:
    return list(session.snake) + [e.pos for e in session.enemies]


def place_enemies(session: Session, rng: random.Random):
    session.enemies = []
    for _ in range(session.level * ENEMIES_PER_LEVEL):
        pos = random_empty_position(rng, occupied_cells(session))
        if pos is None:
            break
        kind = rng.choice(list(EnemyKind))
        heading = rng.choice(list(Direction)) if kind is EnemyKind.MOVING else None
        session.enemies.append(Enemy(pos, kind, heading))


def place_food(session: Session, rng: random.Random):
    session.food = random_empty_position(rng, occupied_cells(session))


def start_level(session: Session, rng: random.Random):
    """Re-populate enemies and food for ``session.level``; the snake is kept."""
    place_enemies(session, rng)
    place_food(session, rng)
    session.food_eaten = 0
    logger.info("Level %d started with %d enemies", session.level, len(session.enemies))


def init_session(progression: Progression, rng: random.Random) -> Session:
    upgrades = progression.permanent_upgrades
    max_health = BASE_HEALTH + upgrades.health_boost
    session = Session(
        snake=build_snake(upgrades.snake_length),
        direction=Direction.RIGHT,
        next_direction=Direction.RIGHT,
        max_health=max_health,
        health=max_health,
        current_speed=BASE_SPEED + upgrades.speed_boost,
    )
    start_level(session, rng)
    return session


def _move_enemies(session: Session):
    for enemy in session.enemies:
        if enemy.kind is not EnemyKind.MOVING:
            continue
        target = step(enemy.pos, enemy.heading.vector)
        if in_bounds(target):
            enemy.pos = target
        else:
            enemy.heading = enemy.heading.opposite


def _slide(session: Session, head: Position):
    session.snake.insert(0, head)
    session.snake.pop()


def _wall_bounce(session: Session, progression: Progression, candidate: Position, report: TickReport):
    session.wall_bounce_active = True
    progression.stats.wall_bounces += 1
    report.wall_bounced = True

    bounced = session.direction.opposite
    session.direction = bounced
    session.next_direction = bounced
    _slide(session, clamp(candidate))

    session.health -= 1
    report.damage_taken += 1
    if session.health <= 0:
        report.result = TickResult.GAME_OVER
        return

    # second step so the head clears the wall within this tick
    _slide(session, step(session.head(), bounced.vector))
    logger.debug("Wall bounce, heading %s, health %d", bounced.value, session.health)


def _resolve_enemy_contacts(session: Session, progression: Progression,
                            rng: random.Random, report: TickReport):
    upgrades = progression.permanent_upgrades
    head = session.head()
    for enemy in [e for e in session.enemies if e.pos == head]:
        if session.dash_cooldown == 0 and upgrades.dash_power > 0:
            session.enemies.remove(enemy)
            session.dash_cooldown = dash_cooldown_for(upgrades.dash_power)
            progression.award_gems(DASH_GEMS)
            progression.stats.enemies_destroyed += 1
            report.enemies_destroyed += 1
            report.gems_awarded += DASH_GEMS
            logger.debug("Dashed through enemy at %s", enemy.pos)
            continue

        if (enemy.is_static and upgrades.block_breaker > 0
                and rng.random() < block_break_chance(upgrades.block_breaker)):
            session.enemies.remove(enemy)
            progression.award_gems(BLOCK_GEMS)
            progression.stats.blocks_destroyed += 1
            report.blocks_destroyed += 1
            report.gems_awarded += BLOCK_GEMS
            logger.debug("Broke block at %s", enemy.pos)
            continue

        session.health -= 1
        report.damage_taken += 1
        if session.health <= 0:
            report.result = TickResult.GAME_OVER
            break


def advance(session: Session, progression: Progression, rng: random.Random) -> TickReport:
    """Advance the run by one tick.

    ``rng`` is only used to place food and to roll the block breaker.
    The caller owns mode transitions and persistence.
    """
    report = TickReport()
    upgrades = progression.permanent_upgrades

    if session.dash_cooldown > 0:
        session.dash_cooldown -= 1
    session.wall_bounce_active = False
    session.dash_requested = False

    _move_enemies(session)

    session.direction = session.next_direction
    candidate = step(session.head(), session.direction.vector)

    if not in_bounds(candidate):
        if upgrades.wall_bounce > 0:
            _wall_bounce(session, progression, candidate, report)
        else:
            report.result = TickResult.GAME_OVER
        return report

    if candidate in session.snake:
        report.result = TickResult.GAME_OVER
        return report

    session.snake.insert(0, candidate)

    if candidate == session.food:
        session.score += 1
        session.food_eaten += 1
        gems = FOOD_GEMS * upgrades.gem_multiplier
        progression.award_gems(gems)
        report.food_eaten = True
        report.gems_awarded += gems
        if session.food_eaten >= FOOD_TO_ADVANCE:
            session.food = None
            report.result = TickResult.LEVEL_COMPLETE
        else:
            place_food(session, rng)
    else:
        session.snake.pop()

    _resolve_enemy_contacts(session, progression, rng, report)
    return report
