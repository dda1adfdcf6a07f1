from snake_roguelite.achievements import ACHIEVEMENTS, evaluate
from snake_roguelite.progression import (
    default_progression, progression_from_dict, progression_to_dict, purchase,
)


def test_purchase_is_atomic(progression):
    progression.gems = 4
    assert not purchase(progression, "speed_boost")
    assert progression.gems == 4
    assert progression.permanent_upgrades.speed_boost == 0

    progression.gems = 5
    assert purchase(progression, "speed_boost")
    assert progression.gems == 0
    assert progression.permanent_upgrades.speed_boost == 1


def test_gem_multiplier_grows_by_half(progression):
    progression.gems = 20
    purchase(progression, "gem_multiplier")
    purchase(progression, "gem_multiplier")
    assert progression.permanent_upgrades.gem_multiplier == 2.0
    assert progression.gems == 0


def test_unknown_upgrade_is_rejected(progression):
    progression.gems = 100
    assert not purchase(progression, "gems")
    assert progression.gems == 100


def test_missing_record_gives_defaults():
    prog = progression_from_dict(None)
    assert prog == default_progression()
    assert prog.permanent_upgrades.gem_multiplier == 1.0
    assert set(prog.achievements) == {a.id for a in ACHIEVEMENTS}


def test_partial_record_defaults_each_field():
    prog = progression_from_dict({
        "gems": 12.5,
        "permanent_upgrades": {"dash_power": 2, "wall_bounce": "lots"},
        "stats": {"deaths": 3},
        "achievements": {"first_death": True, "bouncer": "yes", "made_up": True},
    })
    assert prog.gems == 12.5
    assert prog.permanent_upgrades.dash_power == 2
    assert prog.permanent_upgrades.wall_bounce == 0
    assert prog.stats.deaths == 3
    assert prog.stats.high_score == 0
    assert prog.achievements["first_death"] is True
    assert prog.achievements["bouncer"] is False
    assert "made_up" not in prog.achievements


def test_corrupt_values_are_clamped():
    prog = progression_from_dict({
        "gems": -30,
        "permanent_upgrades": {"gem_multiplier": 0.2, "speed_boost": -1, "health_boost": True},
        "stats": {"wall_bounces": -4, "time_played": float("nan")},
    })
    assert prog.gems == 0
    assert prog.permanent_upgrades.gem_multiplier == 1.0
    assert prog.permanent_upgrades.speed_boost == 0
    assert prog.permanent_upgrades.health_boost == 0
    assert prog.stats.wall_bounces == 0
    assert prog.stats.time_played == 0.0


def test_dict_form_survives_reload(progression):
    progression.gems = 7.5
    progression.stats.total_gems = 40.5
    progression.permanent_upgrades.block_breaker = 2
    progression.achievements["bouncer"] = True
    assert progression_from_dict(progression_to_dict(progression)) == progression


def test_achievement_unlocks_once(progression, make_session):
    progression.stats.wall_bounces = 10
    first = evaluate(progression)
    assert [a.id for a in first] == ["bouncer"]
    assert evaluate(progression) == []
    assert progression.achievements["bouncer"]


def test_achievement_predicates(progression, make_session):
    progression.permanent_upgrades.speed_boost = 5
    progression.stats.total_gems = 100
    session = make_session(snake=[(x, 0) for x in range(15, 0, -1)])
    unlocked = {a.id for a in evaluate(progression, session)}
    assert unlocked == {"speed_demon", "gem_hoarder", "long_snake"}


def test_short_snake_does_not_unlock(progression, make_session):
    session = make_session(snake=[(x, 0) for x in range(14, 0, -1)])
    assert evaluate(progression, session) == []


def test_non_finite_numbers_fall_back_to_defaults():
    prog = progression_from_dict({
        "gems": float("inf"),
        "permanent_upgrades": {"dash_power": float("inf"), "gem_multiplier": float("-inf")},
        "stats": {"deaths": float("inf"), "high_score": 4},
    })
    assert prog.gems == 0
    assert prog.permanent_upgrades.dash_power == 0
    assert prog.permanent_upgrades.gem_multiplier == 1.0
    assert prog.stats.deaths == 0
    assert prog.stats.high_score == 4
