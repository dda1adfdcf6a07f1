"""Permanent upgrades, purchases and progression (de)serialization."""

import logging
import math
from dataclasses import asdict, fields

from .achievements import ACHIEVEMENTS
from .constants import GEM_MULTIPLIER_STEP, UPGRADE_COSTS
from .models import PermanentUpgrades, Progression, Stats

logger = logging.getLogger(__name__)


def default_progression() -> Progression:
    return Progression(achievements={a.id: False for a in ACHIEVEMENTS})


def purchase(progression: Progression, upgrade_id: str) -> bool:
    """Buy one level of a permanent upgrade.

    Either the cost is deducted and the level raised, or nothing changes.
    """
    cost = UPGRADE_COSTS.get(upgrade_id)
    if cost is None or progression.gems < cost:
        return False
    upgrades = progression.permanent_upgrades
    step = GEM_MULTIPLIER_STEP if upgrade_id == "gem_multiplier" else 1
    setattr(upgrades, upgrade_id, getattr(upgrades, upgrade_id) + step)
    progression.gems -= cost
    logger.info("Purchased %s (level %s), %s gems left",
                upgrade_id, getattr(upgrades, upgrade_id), progression.gems)
    return True


def progression_to_dict(progression: Progression) -> dict:
    return asdict(progression)


def _number(value, default, minimum=0, integer=False):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if not math.isfinite(value):
        return default
    value = max(value, minimum)
    return int(value) if integer else value


def _fill(cls, raw, minimums=None):
    minimums = minimums or {}
    if not isinstance(raw, dict):
        raw = {}
    defaults = cls()
    values = {}
    for f in fields(cls):
        default = getattr(defaults, f.name)
        values[f.name] = _number(
            raw.get(f.name), default,
            minimum=minimums.get(f.name, 0),
            integer=isinstance(default, int),
        )
    return cls(**values)


def progression_from_dict(raw) -> Progression:
    """Rebuild a Progression, defaulting each missing or malformed field."""
    if not isinstance(raw, dict):
        raw = {}
    progression = default_progression()
    progression.gems = _number(raw.get("gems"), 0.0)
    progression.permanent_upgrades = _fill(
        PermanentUpgrades, raw.get("permanent_upgrades"), {"gem_multiplier": 1.0})
    progression.stats = _fill(Stats, raw.get("stats"))
    saved = raw.get("achievements")
    if isinstance(saved, dict):
        for key in progression.achievements:
            if saved.get(key) is True:
                progression.achievements[key] = True
    return progression
