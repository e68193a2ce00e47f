import uuid

from django.db import models
from django.utils import timezone

from ..config import DEFAULT_EASE
from ..domain.enums import LifecycleState


def default_deck_settings():
    return {"learningSteps": [1, 10], "graduatingInterval": 1, "easyInterval": 4}


class Deck(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner_id = models.UUIDField()
    name = models.CharField(max_length=200)
    created_at = models.DateTimeField(default=timezone.now)
    settings = models.JSONField(default=default_deck_settings)

    class Meta:
        app_label = "srs"
        indexes = [
            models.Index(fields=["owner_id", "created_at"], name="srs_deck_owner_created_idx"),
        ]


class Card(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    deck = models.ForeignKey(Deck, on_delete=models.CASCADE, related_name="cards")
    front = models.TextField()
    back = models.TextField()
    front_image = models.CharField(max_length=500, blank=True, default="")
    back_image = models.CharField(max_length=500, blank=True, default="")

    # scheduling state
    interval = models.FloatField(default=0.0)  # days
    ease = models.FloatField(default=DEFAULT_EASE)
    repetitions = models.PositiveIntegerField(default=0)
    lifecycle_state = models.CharField(
        max_length=16,
        choices=[(s.value, s.value) for s in LifecycleState],
        default=LifecycleState.LEARNING.value,
    )
    step_index = models.PositiveIntegerField(default=0)
    due_date = models.DateTimeField(default=timezone.now)  # UTC

    # optimistic concurrency token, bumped on every scheduling write
    version = models.PositiveIntegerField(default=0)

    class Meta:
        app_label = "srs"
        indexes = [
            models.Index(fields=["deck", "due_date"], name="srs_card_deck_due_idx"),
        ]


class StudyLog(models.Model):
    user_id = models.UUIDField()
    date = models.DateField()
    count = models.PositiveIntegerField(default=0)

    class Meta:
        app_label = "srs"
        unique_together = (("user_id", "date"),)
        indexes = [
            models.Index(fields=["user_id", "date"], name="srs_studylog_user_date_idx"),
        ]
