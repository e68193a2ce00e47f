from dataclasses import dataclass
from datetime import datetime
from numbers import Real

from ..config import DEFAULT_DECK_SETTINGS, DEFAULT_EASE
from .enums import LifecycleState

# stored settings use the client's camelCase keys
SETTINGS_ALIASES = {
    "learningSteps": "learning_steps",
    "graduatingInterval": "graduating_interval",
    "easyInterval": "easy_interval",
}


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and value >= 0


@dataclass(frozen=True)
class DeckSettings:
    learning_steps: tuple = DEFAULT_DECK_SETTINGS["learning_steps"]
    graduating_interval: float = DEFAULT_DECK_SETTINGS["graduating_interval"]
    easy_interval: float = DEFAULT_DECK_SETTINGS["easy_interval"]

    @classmethod
    def resolve(cls, raw=None) -> "DeckSettings":
        """
        Build settings from None, a (partial) mapping or an existing instance.
        Unknown keys are ignored and malformed values fall back to defaults.
        """
        if raw is None:
            return cls()
        if isinstance(raw, cls):
            return raw

        values = {}
        for key, value in raw.items():
            name = SETTINGS_ALIASES.get(key, key)
            if name == "learning_steps":
                if isinstance(value, (list, tuple)) and all(_is_number(s) for s in value):
                    values[name] = tuple(value)
            elif name in ("graduating_interval", "easy_interval"):
                if _is_number(value):
                    values[name] = value
        return cls(**values)

    def as_dict(self) -> dict:
        return {
            "learningSteps": list(self.learning_steps),
            "graduatingInterval": self.graduating_interval,
            "easyInterval": self.easy_interval,
        }


@dataclass(frozen=True)
class SchedulingState:
    due_date: datetime
    interval: float = 0.0
    ease: float = DEFAULT_EASE
    repetitions: int = 0
    lifecycle_state: LifecycleState = LifecycleState.LEARNING
    step_index: int = 0

    @classmethod
    def new(cls, now: datetime) -> "SchedulingState":
        """State of a freshly created card: learning, first step, due immediately."""
        return cls(due_date=now)

    @property
    def is_learning(self) -> bool:
        return self.lifecycle_state == LifecycleState.LEARNING
