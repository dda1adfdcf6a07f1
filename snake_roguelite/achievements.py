"""Achievement catalogue and evaluation."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .models import Progression, Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    predicate: Callable[[Progression, Optional[Session]], bool]


def _snake_length(session: Optional[Session]) -> int:
    return len(session.snake) if session else 0


ACHIEVEMENTS = (
    Achievement(
        "first_death", "First Fall", "Die for the first time.",
        lambda prog, session: prog.stats.deaths >= 1,
    ),
    Achievement(
        "speed_demon", "Speed Demon", "Buy the speed upgrade five times.",
        lambda prog, session: prog.permanent_upgrades.speed_boost >= 5,
    ),
    Achievement(
        "bouncer", "Bouncer", "Bounce off the walls 10 times.",
        lambda prog, session: prog.stats.wall_bounces >= 10,
    ),
    Achievement(
        "gem_hoarder", "Gem Hoarder", "Collect 100 gems in total.",
        lambda prog, session: prog.stats.total_gems >= 100,
    ),
    Achievement(
        "long_snake", "Long Snake", "Grow the snake to 15 segments.",
        lambda prog, session: _snake_length(session) >= 15,
    ),
)
ACHIEVEMENTS_BY_ID = {a.id: a for a in ACHIEVEMENTS}


def evaluate(progression: Progression, session: Optional[Session] = None) -> list[Achievement]:
    """Unlock every achievement whose predicate now holds.

    Already unlocked entries are skipped, so calling this repeatedly never
    reports the same achievement twice. Returns the newly unlocked ones.
    """
    unlocked = []
    for achievement in ACHIEVEMENTS:
        if progression.achievements.get(achievement.id):
            continue
        if achievement.predicate(progression, session):
            progression.achievements[achievement.id] = True
            unlocked.append(achievement)
            logger.info("Achievement unlocked: %s", achievement.name)
    return unlocked
