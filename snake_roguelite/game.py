"""Top-level game state machine: modes, intents and persistence."""

import logging
import random
from typing import Optional

from . import achievements
from .constants import FOOD_TO_ADVANCE, GRID_SIZE, UPGRADE_COSTS
from .engine import TickReport, TickResult, advance, dash_cooldown_for, init_session, start_level
from .intents import (
    BackIntent, DashIntent, PurchaseIntent, ResetProgressIntent, RestartIntent,
    StartIntent, TurnIntent, UpgradeChoiceIntent, ViewAchievementsIntent,
)
from .models import Mode, Session
from .progression import default_progression, progression_to_dict, purchase
from .storage import BlobStore, load_progression, save_progression

logger = logging.getLogger(__name__)


class Game:
    def __init__(self, store: BlobStore, rng: Optional[random.Random] = None):
        self.store = store
        self.rng = rng or random.Random()
        self.progression = load_progression(store)
        self.mode = Mode.TITLE
        self.session: Optional[Session] = None
        self.last_score = 0
        self.notifications: list[dict] = []
        self._return_mode = Mode.TITLE

    def save(self):
        save_progression(self.store, self.progression)

    # ── Intents ────────────────────────────────────────────────────

    def handle(self, intent) -> bool:
        """Apply an intent. Returns False if it is not legal right now."""
        if isinstance(intent, TurnIntent):
            return self._turn(intent)
        if isinstance(intent, DashIntent):
            return self._dash()
        if isinstance(intent, UpgradeChoiceIntent):
            return self._choose_upgrade(intent.choice)
        if isinstance(intent, PurchaseIntent):
            return self._purchase(intent.upgrade_id)
        if isinstance(intent, StartIntent):
            if self.mode is not Mode.TITLE:
                return False
            self._new_run()
            return True
        if isinstance(intent, RestartIntent):
            if self.mode is not Mode.GAME_OVER:
                return False
            self._new_run()
            return True
        if isinstance(intent, ResetProgressIntent):
            return self._reset_progress()
        if isinstance(intent, ViewAchievementsIntent):
            if self.mode is Mode.ACHIEVEMENTS:
                return False
            self._return_mode = self.mode
            self.mode = Mode.ACHIEVEMENTS
            return True
        if isinstance(intent, BackIntent):
            return self._back()
        return False

    def _turn(self, intent: TurnIntent) -> bool:
        if self.mode is not Mode.PLAYING:
            return False
        if intent.direction is self.session.direction.opposite:
            return False
        self.session.next_direction = intent.direction
        return True

    def _dash(self) -> bool:
        if self.mode is not Mode.PLAYING:
            return False
        if self.session.dash_cooldown != 0 or self.progression.permanent_upgrades.dash_power <= 0:
            return False
        self.session.dash_requested = True
        return True

    def _choose_upgrade(self, choice: str) -> bool:
        if self.mode is not Mode.UPGRADE_SELECT:
            return False
        session = self.session
        if choice == "speed":
            session.current_speed += 1
        elif choice == "health":
            session.max_health += 1
            session.health = session.max_health
        else:
            return False
        session.level += 1
        start_level(session, self.rng)
        self.mode = Mode.PLAYING
        return True

    def _purchase(self, upgrade_id: str) -> bool:
        if self.mode is not Mode.GAME_OVER:
            return False
        if not purchase(self.progression, upgrade_id):
            return False
        self._check_achievements()
        self.save()
        return True

    def _reset_progress(self) -> bool:
        if self.mode is not Mode.GAME_OVER:
            return False
        logger.info("Resetting all progression")
        self.progression = default_progression()
        self.save()
        self._new_run()
        return True

    def _back(self) -> bool:
        """Resume a paused run, else go to GameOver if the last run scored, else Title."""
        if self.mode is not Mode.ACHIEVEMENTS:
            return False
        if self._return_mode in (Mode.PLAYING, Mode.UPGRADE_SELECT) and self.session:
            self.mode = self._return_mode
        elif self.last_score > 0:
            self.mode = Mode.GAME_OVER
        else:
            self.mode = Mode.TITLE
        return True

    # ── Run lifecycle ──────────────────────────────────────────────

    def _new_run(self):
        self.session = init_session(self.progression, self.rng)
        self.last_score = 0
        self.mode = Mode.PLAYING
        logger.info("New run: health %d, speed %d",
                    self.session.max_health, self.session.current_speed)

    def _check_achievements(self) -> bool:
        unlocked = achievements.evaluate(self.progression, self.session)
        for a in unlocked:
            self.notifications.append({"id": a.id, "name": a.name, "description": a.description})
        return bool(unlocked)

    def _game_over(self):
        session = self.session
        stats = self.progression.stats
        stats.deaths += 1
        stats.high_score = max(stats.high_score, session.score)
        self.last_score = session.score
        self._check_achievements()
        self.session = None
        self.mode = Mode.GAME_OVER
        self.save()
        logger.info("Game over at level %d with score %d", session.level, session.score)

    def tick(self) -> Optional[TickReport]:
        """Advance one tick while playing; other modes ignore the call."""
        if self.mode is not Mode.PLAYING:
            return None
        report = advance(self.session, self.progression, self.rng)
        changed = self._check_achievements() or report.progression_changed

        if report.result is TickResult.GAME_OVER:
            self._game_over()
            return report
        if report.result is TickResult.LEVEL_COMPLETE:
            self.mode = Mode.UPGRADE_SELECT
            logger.info("Level %d complete", self.session.level)
        if changed:
            self.save()
        return report

    def add_play_time(self, seconds: float):
        if seconds > 0:
            self.progression.stats.time_played += seconds

    def drain_notifications(self) -> list[dict]:
        pending, self.notifications = self.notifications, []
        return pending

    # ── Presentation ───────────────────────────────────────────────

    def snapshot(self) -> dict:
        progression = progression_to_dict(self.progression)
        progression["achievements"] = [
            {
                "id": a.id,
                "name": a.name,
                "description": a.description,
                "unlocked": bool(self.progression.achievements.get(a.id)),
            }
            for a in achievements.ACHIEVEMENTS
        ]
        return {
            "mode": self.mode.value,
            "grid_size": GRID_SIZE,
            "session": self._session_dict(),
            "last_score": self.last_score,
            "progression": progression,
            "upgrade_costs": dict(UPGRADE_COSTS),
            "dash_cooldown_on_kill": dash_cooldown_for(self.progression.permanent_upgrades.dash_power),
            "notifications": list(self.notifications),
        }

    def _session_dict(self) -> Optional[dict]:
        s = self.session
        if s is None:
            return None
        return {
            "snake": [list(p) for p in s.snake],
            "direction": s.direction.value,
            "enemies": [
                {
                    "pos": list(e.pos),
                    "kind": e.kind.value,
                    "heading": e.heading.value if e.heading else None,
                }
                for e in s.enemies
            ],
            "food": list(s.food) if s.food else None,
            "score": s.score,
            "health": s.health,
            "max_health": s.max_health,
            "level": s.level,
            "food_eaten": s.food_eaten,
            "food_target": FOOD_TO_ADVANCE,
            "dash_cooldown": s.dash_cooldown,
            "dash_requested": s.dash_requested,
            "wall_bounce_active": s.wall_bounce_active,
            "current_speed": s.current_speed,
        }
