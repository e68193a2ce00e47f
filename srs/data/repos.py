from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from ..domain.enums import LifecycleState
from ..domain.errors import CardNotFound, DeckNotFound, InvalidSettings, StaleCardState
from ..domain.state import DeckSettings, SchedulingState
from .models import Card, Deck, StudyLog
from .serializers import DeckSettingsSerializer


# Decks & cards

def create_deck(owner_id, name, settings=None):
    deck = Deck(owner_id=owner_id, name=name)
    if settings:
        deck.settings = {**deck.settings, **_validated_settings(settings)}
    deck.save()
    return deck


def get_deck(deck_id):
    try:
        return Deck.objects.get(pk=deck_id)
    except Deck.DoesNotExist:
        raise DeckNotFound(deck_id) from None


def delete_deck(deck_id):
    deleted, _ = Deck.objects.filter(pk=deck_id).delete()
    if not deleted:
        raise DeckNotFound(deck_id)


def add_card(deck_id, front, back, front_image="", back_image="", now=None):
    deck = get_deck(deck_id)
    initial = SchedulingState.new(now or timezone.now())
    card = Card(deck=deck, front=front, back=back,
                front_image=front_image or "", back_image=back_image or "")
    _apply_state(card, initial)
    card.save()
    return card


def get_card(card_id):
    try:
        return Card.objects.get(pk=card_id)
    except Card.DoesNotExist:
        raise CardNotFound(card_id) from None


def _validated_settings(partial):
    s = DeckSettingsSerializer(data=partial)
    if not s.is_valid():
        raise InvalidSettings(s.errors)
    return dict(s.validated_data)


def update_deck_settings(deck_id, partial):
    """Merge validated `partial` settings into the deck's stored settings."""
    with transaction.atomic():
        try:
            deck = Deck.objects.select_for_update().get(pk=deck_id)
        except Deck.DoesNotExist:
            raise DeckNotFound(deck_id) from None
        deck.settings = {**deck.settings, **_validated_settings(partial)}
        deck.save(update_fields=["settings"])
    return DeckSettings.resolve(deck.settings)


def deck_settings(deck_id):
    return DeckSettings.resolve(get_deck(deck_id).settings)


def due_snapshot(deck_id):
    """(card_id, due_date) for every card in the deck; the queue filters by time."""
    get_deck(deck_id)
    return list(Card.objects.filter(deck_id=deck_id).values_list("id", "due_date"))


# Scheduling state

def _to_state(card):
    return SchedulingState(
        due_date=card.due_date,
        interval=card.interval,
        ease=card.ease,
        repetitions=card.repetitions,
        lifecycle_state=LifecycleState(card.lifecycle_state),
        step_index=card.step_index,
    )


def _apply_state(card, state):
    card.interval = state.interval
    card.ease = state.ease
    card.repetitions = state.repetitions
    card.lifecycle_state = state.lifecycle_state.value
    card.step_index = state.step_index
    card.due_date = state.due_date


def load_state(card_id):
    card = get_card(card_id)
    return _to_state(card), card.version


def save_state(card_id, state, version):
    """
    Write `state` only if the card is still at `version`.
    Raises StaleCardState when another writer got there first.
    """
    updated = Card.objects.filter(pk=card_id, version=version).update(
        interval=state.interval,
        ease=state.ease,
        repetitions=state.repetitions,
        lifecycle_state=state.lifecycle_state.value,
        step_index=state.step_index,
        due_date=state.due_date,
        version=F("version") + 1,
    )
    if not updated:
        if not Card.objects.filter(pk=card_id).exists():
            raise CardNotFound(card_id)
        raise StaleCardState(card_id, version)
    return version + 1


class DjangoCardStore:
    """Card-store collaborator for the queue manager, backed by the ORM."""

    def __init__(self):
        self._versions = {}

    def get_state(self, card_id):
        state, version = load_state(card_id)
        self._versions[card_id] = version
        return state

    def save_state(self, card_id, state):
        if card_id not in self._versions:
            _, self._versions[card_id] = load_state(card_id)
        self._versions[card_id] = save_state(card_id, state, self._versions[card_id])


# Study log

def increment_study_log(user_id, date):
    """
    Upsert-and-increment the (user, date) counter; returns the new count.
    The increment runs in the database so concurrent reviews never lose counts.
    """
    with transaction.atomic():
        try:
            with transaction.atomic():
                StudyLog.objects.create(user_id=user_id, date=date, count=1)
            return 1
        except IntegrityError:
            pass
        StudyLog.objects.filter(user_id=user_id, date=date).update(count=F("count") + 1)
        return StudyLog.objects.get(user_id=user_id, date=date).count


def study_log_entries(user_id):
    return list(
        StudyLog.objects.filter(user_id=user_id)
        .order_by("date")
        .values_list("date", "count")
    )
