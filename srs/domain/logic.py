import random
from datetime import datetime, timedelta, timezone

from .enums import LifecycleState, Rating
from .state import DeckSettings, SchedulingState
from ..config import (
    AGAIN_EASE_PENALTY,
    EASE_FLOOR,
    EASY_BONUS,
    EASY_EASE_BONUS,
    FUZZ_MAX,
    FUZZ_MIN,
    FUZZ_THRESHOLD_DAYS,
    HARD_EASE_PENALTY,
    HARD_MULTIPLIER,
    MAX_INTERVAL_DAYS,
    MINUTES_PER_DAY,
)


def fuzz_multiplier(rng) -> float:
    return FUZZ_MIN + (FUZZ_MAX - FUZZ_MIN) * rng.random()


def compute_next_review(state: SchedulingState, rating, settings=None,
                        now: datetime = None, rng=None) -> SchedulingState:
    """
    Compute the scheduling state that follows `state` after `rating`.

    Pure: reads nothing but its arguments and never mutates them. `rng` only
    needs a `random()` method; pass a seeded or stubbed one for repeatable
    fuzz. Raises InvalidRating for anything outside Again/Hard/Good/Easy.
    """
    rating = Rating.parse(rating)
    settings = DeckSettings.resolve(settings)
    now = now or datetime.now(timezone.utc)
    rng = rng or random

    steps = settings.learning_steps
    interval = state.interval
    ease = state.ease
    repetitions = state.repetitions
    lifecycle = state.lifecycle_state
    step_index = state.step_index
    learning = state.is_learning

    if rating == Rating.AGAIN:
        lifecycle = LifecycleState.LEARNING
        step_index = 0
        interval = 0.0
        repetitions = 0
        ease = ease - AGAIN_EASE_PENALTY

    elif rating == Rating.HARD:
        if learning and steps:
            # the deck may have fewer steps than when this card last moved
            step_index = min(step_index, len(steps) - 1)
            interval = steps[step_index] / MINUTES_PER_DAY
        elif learning:
            lifecycle = LifecycleState.GRADUATED
            interval = settings.graduating_interval
        else:
            interval = interval * HARD_MULTIPLIER
            ease = ease - HARD_EASE_PENALTY

    elif rating == Rating.GOOD:
        if learning and step_index < len(steps) - 1:
            step_index += 1
            interval = steps[step_index] / MINUTES_PER_DAY
        elif learning:
            lifecycle = LifecycleState.GRADUATED
            interval = settings.graduating_interval
        else:
            interval = interval * ease
        repetitions += 1

    else:  # Easy
        if learning:
            lifecycle = LifecycleState.GRADUATED
            interval = settings.easy_interval
        else:
            interval = interval * ease * EASY_BONUS
            ease = ease + EASY_EASE_BONUS
        repetitions += 1

    ease = max(EASE_FLOOR, ease)
    if interval > FUZZ_THRESHOLD_DAYS:
        interval *= fuzz_multiplier(rng)
    interval = min(interval, MAX_INTERVAL_DAYS)

    return SchedulingState(
        due_date=now + timedelta(days=interval),
        interval=float(interval),
        ease=ease,
        repetitions=repetitions,
        lifecycle_state=lifecycle,
        step_index=step_index,
    )


class _Unfuzzed:
    # random() == 0.5 puts the multiplier at exactly 1.0
    def random(self):
        return 0.5


def preview_intervals(state: SchedulingState, settings=None) -> dict:
    """Interval in days each rating would award, without fuzz."""
    now = state.due_date
    return {
        rating: compute_next_review(state, rating, settings, now=now, rng=_Unfuzzed()).interval
        for rating in Rating
    }


def format_interval(days: float) -> str:
    minutes = days * MINUTES_PER_DAY
    if minutes < 1:
        return "now"
    if minutes < 60:
        return f"{round(minutes)}m"
    if days < 1:
        return f"{round(minutes / 60)}h"
    if days < 30:
        return f"{round(days)}d"
    if days < 365:
        return f"{round(days / 30)}mo"
    return f"{round(days / 365, 1):g}y"
