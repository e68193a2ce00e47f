import logging
import random
from datetime import timedelta

import pytest

from srs.domain.enums import LifecycleState, Rating
from srs.domain.errors import InvalidRating
from srs.domain.logic import compute_next_review, format_interval, preview_intervals
from srs.domain.state import DeckSettings, SchedulingState

from .conftest import FixedRandom

logger = logging.getLogger(__name__)


def graduated(now, interval, ease=2.5, repetitions=3):
    return SchedulingState(
        due_date=now,
        interval=interval,
        ease=ease,
        repetitions=repetitions,
        lifecycle_state=LifecycleState.GRADUATED,
        step_index=1,
    )


def learning(now, step_index, ease=2.5):
    return SchedulingState(due_date=now, ease=ease, step_index=step_index)


# Scenarios

def test_new_card_good_moves_to_next_step(now, new_state, no_fuzz):
    """Scenario A: Good on a new card advances to the 10 minute step."""
    s = compute_next_review(new_state, Rating.GOOD, {"learning_steps": [1, 10]}, now, no_fuzz)

    assert s.lifecycle_state == LifecycleState.LEARNING
    assert s.step_index == 1
    assert s.interval == pytest.approx(10 / 1440)
    assert s.repetitions == 1
    assert s.ease == 2.5
    assert abs(s.due_date - (now + timedelta(minutes=10))) < timedelta(seconds=1)
    logger.info("✓ Passed: new card Good -> step 1, due in 10 minutes")


def test_last_step_good_graduates(now, no_fuzz):
    """Scenario B: Good on the last learning step graduates with graduating_interval."""
    s = compute_next_review(learning(now, 1), Rating.GOOD, None, now, no_fuzz)

    assert s.lifecycle_state == LifecycleState.GRADUATED
    assert s.interval == 1
    assert s.due_date == now + timedelta(days=1)


def test_last_step_good_uses_deck_graduating_interval(now, no_fuzz):
    s = compute_next_review(learning(now, 1), Rating.GOOD, {"graduatingInterval": 2}, now, no_fuzz)
    assert s.interval == 2


def test_graduated_good_multiplies_by_ease(now):
    """Scenario C: interval 4, ease 2.5, Good -> 10 days within fuzz."""
    state = graduated(now, 4)

    low = compute_next_review(state, Rating.GOOD, None, now, FixedRandom(0.0))
    high = compute_next_review(state, Rating.GOOD, None, now, FixedRandom(0.999999))
    seeded = compute_next_review(state, Rating.GOOD, None, now, random.Random(42))

    assert low.interval == pytest.approx(9.5)
    assert high.interval == pytest.approx(10.5, abs=1e-4)
    assert 9.5 <= seeded.interval <= 10.5
    assert seeded.ease == 2.5
    assert seeded.repetitions == 4
    logger.info("✓ Passed: graduated Good interval %s", seeded.interval)


@pytest.mark.parametrize("state_factory", [
    lambda now: SchedulingState.new(now),
    lambda now: learning(now, 1, ease=1.4),
    lambda now: graduated(now, 30, ease=2.7),
])
def test_again_resets_card(now, state_factory, no_fuzz):
    """Scenario D: Again -> learning, step 0, interval 0, due now, ease -0.2."""
    state = state_factory(now)
    s = compute_next_review(state, Rating.AGAIN, None, now, no_fuzz)

    assert s.lifecycle_state == LifecycleState.LEARNING
    assert s.step_index == 0
    assert s.interval == 0
    assert s.repetitions == 0
    assert s.due_date == now
    assert s.ease == pytest.approx(max(1.3, state.ease - 0.2))


# Hard / Easy

def test_learning_hard_repeats_current_step(now, no_fuzz):
    s = compute_next_review(learning(now, 1), Rating.HARD, None, now, no_fuzz)

    assert s.lifecycle_state == LifecycleState.LEARNING
    assert s.step_index == 1
    assert s.interval == pytest.approx(10 / 1440)
    assert s.repetitions == 0
    assert s.ease == 2.5


def test_graduated_hard_grows_slowly_and_lowers_ease(now, no_fuzz):
    s = compute_next_review(graduated(now, 10), Rating.HARD, None, now, no_fuzz)

    assert s.interval == pytest.approx(12)
    assert s.ease == pytest.approx(2.35)
    assert s.repetitions == 3


def test_learning_easy_graduates_immediately(now, no_fuzz):
    s = compute_next_review(SchedulingState.new(now), Rating.EASY, None, now, no_fuzz)

    assert s.lifecycle_state == LifecycleState.GRADUATED
    assert s.interval == pytest.approx(4)
    assert s.ease == 2.5
    assert s.repetitions == 1


def test_graduated_easy_applies_bonus(now, no_fuzz):
    s = compute_next_review(graduated(now, 4), Rating.EASY, None, now, no_fuzz)

    assert s.interval == pytest.approx(4 * 2.5 * 1.3)
    assert s.ease == pytest.approx(2.65)
    assert s.repetitions == 4


def test_short_intervals_are_not_fuzzed(now):
    s = compute_next_review(graduated(now, 1, ease=2.0), Rating.GOOD, None, now, FixedRandom(0.0))
    assert s.interval == 2.0


# Step bounds

def test_empty_steps_good_graduates(now, no_fuzz):
    s = compute_next_review(SchedulingState.new(now), Rating.GOOD, {"learning_steps": []}, now, no_fuzz)

    assert s.lifecycle_state == LifecycleState.GRADUATED
    assert s.interval == 1
    assert s.repetitions == 1


def test_empty_steps_hard_graduates_without_repetition(now, no_fuzz):
    s = compute_next_review(SchedulingState.new(now), Rating.HARD, {"learningSteps": []}, now, no_fuzz)

    assert s.lifecycle_state == LifecycleState.GRADUATED
    assert s.interval == 1
    assert s.repetitions == 0


def test_shrunk_steps_are_bounds_checked(now, no_fuzz):
    """Deck went from three steps to one while the card sat on step 2."""
    state = learning(now, 2)
    settings = {"learning_steps": [5]}

    hard = compute_next_review(state, Rating.HARD, settings, now, no_fuzz)
    assert hard.step_index == 0
    assert hard.interval == pytest.approx(5 / 1440)

    good = compute_next_review(state, Rating.GOOD, settings, now, no_fuzz)
    assert good.lifecycle_state == LifecycleState.GRADUATED


def test_step_index_stays_in_range_while_learning(now):
    rng = random.Random(3)
    settings = DeckSettings(learning_steps=(1, 5, 10, 30))
    state = SchedulingState.new(now)
    for _ in range(500):
        state = compute_next_review(state, rng.choice(list(Rating)), settings, now, rng)
        if state.is_learning:
            assert 0 <= state.step_index < len(settings.learning_steps)
    logger.info("✓ Passed: step index bounds over 500 random reviews")


# Properties

def test_ease_never_drops_below_floor(now):
    rng = random.Random(7)
    for _ in range(50):
        state = graduated(now, rng.uniform(1, 50), ease=rng.uniform(1.3, 3.0))
        for _ in range(40):
            state = compute_next_review(state, rng.choice(list(Rating)), None, now, rng)
            assert state.ease >= 1.3
    logger.info("✓ Passed: ease floor held across random rating sequences")


def test_repeated_good_is_monotonic_after_graduation(now):
    """Even with the lowest fuzz and the floor ease, intervals do not shrink."""
    state = graduated(now, 1, ease=1.3)
    intervals = []
    for _ in range(12):
        state = compute_next_review(state, Rating.GOOD, None, now, FixedRandom(0.0))
        intervals.append(state.interval)

    assert all(a <= b for a, b in zip(intervals, intervals[1:]))
    logger.info("✓ Passed: intervals grew monotonically %s", intervals)


def test_input_state_is_not_mutated(now, new_state, no_fuzz):
    compute_next_review(new_state, Rating.EASY, None, now, no_fuzz)
    assert new_state == SchedulingState.new(now)


# Ratings & settings

@pytest.mark.parametrize("bad", [0, 5, -1, True, None, 2.5, "meh", ""])
def test_invalid_rating_is_rejected(now, new_state, bad):
    with pytest.raises(InvalidRating):
        compute_next_review(new_state, bad, None, now)


@pytest.mark.parametrize("value,expected", [
    (3, Rating.GOOD),
    ("easy", Rating.EASY),
    (" Hard ", Rating.HARD),
    (Rating.AGAIN, Rating.AGAIN),
])
def test_rating_parse(value, expected):
    assert Rating.parse(value) is expected


def test_settings_fall_back_to_defaults():
    assert DeckSettings.resolve(None) == DeckSettings()
    partial = DeckSettings.resolve({"graduatingInterval": 3, "unknown": 1})
    assert partial.learning_steps == (1, 10)
    assert partial.graduating_interval == 3
    assert partial.easy_interval == 4

    malformed = DeckSettings.resolve({"learningSteps": "1,10", "easyInterval": -2})
    assert malformed == DeckSettings()


# Preview

def test_preview_intervals_for_new_card(new_state):
    preview = preview_intervals(new_state)

    labels = {rating: format_interval(days) for rating, days in preview.items()}
    assert labels == {
        Rating.AGAIN: "now",
        Rating.HARD: "1m",
        Rating.GOOD: "10m",
        Rating.EASY: "4d",
    }


@pytest.mark.parametrize("days,label", [
    (0, "now"),
    (10 / 1440, "10m"),
    (0.5, "12h"),
    (1, "1d"),
    (60, "2mo"),
    (730, "2y"),
    (400, "1.1y"),
])
def test_format_interval(days, label):
    assert format_interval(days) == label


def test_interval_cap(now, no_fuzz):
    """Intervals never exceed the hundred year ceiling."""
    state = graduated(now, 4)
    for _ in range(40):
        state = compute_next_review(state, Rating.EASY, None, now, no_fuzz)

    assert state.interval == 100 * 365
    assert state.due_date == now + timedelta(days=100 * 365)
    logger.info("✓ Passed: interval capped at %s days", state.interval)
