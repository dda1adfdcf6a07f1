"""Player intents, already abstracted from the input device."""

from dataclasses import dataclass

from .models import Direction


@dataclass(frozen=True)
class StartIntent:
    pass


@dataclass(frozen=True)
class TurnIntent:
    direction: Direction


@dataclass(frozen=True)
class DashIntent:
    pass


@dataclass(frozen=True)
class UpgradeChoiceIntent:
    choice: str  # "speed" or "health"


@dataclass(frozen=True)
class PurchaseIntent:
    upgrade_id: str


@dataclass(frozen=True)
class RestartIntent:
    pass


@dataclass(frozen=True)
class ResetProgressIntent:
    pass


@dataclass(frozen=True)
class ViewAchievementsIntent:
    pass


@dataclass(frozen=True)
class BackIntent:
    pass


def intent_from_msg(msg: dict):
    """Translate a presentation-layer message into an intent, or None."""
    name = msg.get("intent")
    if not isinstance(name, str):
        return None
    if name == "turn":
        try:
            return TurnIntent(Direction(msg.get("direction")))
        except ValueError:
            return None
    if name == "upgrade_choice":
        return UpgradeChoiceIntent(str(msg.get("choice", "")))
    if name == "purchase":
        return PurchaseIntent(str(msg.get("upgrade_id", "")))
    simple = {
        "start": StartIntent,
        "dash": DashIntent,
        "restart": RestartIntent,
        "reset_progress": ResetProgressIntent,
        "view_achievements": ViewAchievementsIntent,
        "back": BackIntent,
    }
    cls = simple.get(name)
    return cls() if cls else None
