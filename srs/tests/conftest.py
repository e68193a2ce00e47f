import uuid
from datetime import datetime, timezone

import pytest

from srs.domain.errors import CardNotFound
from srs.domain.state import SchedulingState


class FixedRandom:
    """random() always returns `value`; 0.5 means no fuzz."""

    def __init__(self, value=0.5):
        self.value = value

    def random(self):
        return self.value


class InMemoryCardStore:
    def __init__(self, states=None):
        self.states = dict(states or {})
        self.writes = []

    def get_state(self, card_id):
        try:
            return self.states[card_id]
        except KeyError:
            raise CardNotFound(card_id) from None

    def save_state(self, card_id, state):
        self.states[card_id] = state
        self.writes.append(card_id)


@pytest.fixture
def now():
    return datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def no_fuzz():
    return FixedRandom(0.5)


@pytest.fixture
def new_state(now):
    return SchedulingState.new(now)


@pytest.fixture
def user_id():
    return uuid.uuid4()
