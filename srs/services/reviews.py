import uuid
from dataclasses import dataclass

import structlog
from django.utils import timezone

from ..data.repos import DjangoCardStore, deck_settings, due_snapshot, get_card
from ..domain.enums import RATING_LABELS, Rating
from ..domain.errors import SrsError
from ..domain.state import SchedulingState
from ..utils.time import study_date, to_local_iso
from .session import SessionQueueManager
from .study_log import StudyLogAggregator

logger = structlog.get_logger()


@dataclass(frozen=True)
class ReviewOutcome:
    card_id: uuid.UUID
    state: SchedulingState
    requeued: bool
    study_count: int


class StudySession:
    """
    One user studying one deck: owns the session queue, resolves the deck
    settings once at start and records every accepted review in the study log.
    """

    def __init__(self, user_id, deck_id, now=None, rng=None, store=None, study_log=None):
        self.user_id = user_id
        self.deck_id = deck_id
        self.rng = rng
        self.session_id = str(uuid.uuid4())
        self.logger = logger.bind(
            session_id=self.session_id, user_id=str(user_id), deck_id=str(deck_id)
        )
        self.study_log = study_log or StudyLogAggregator()

        now = now or timezone.now()
        self.settings = deck_settings(deck_id)
        self.manager = SessionQueueManager(store or DjangoCardStore())
        self.manager.initialize(due_snapshot(deck_id), now)

        self.logger.info("session_started",
            due_count=self.manager.remaining,
            settings=self.settings.as_dict(),
        )
        if self.manager.finished:
            self._log_finished()

    @property
    def finished(self) -> bool:
        return self.manager.finished

    @property
    def remaining(self) -> int:
        return self.manager.remaining

    @property
    def reviewed(self) -> int:
        return self.manager.reviewed

    def current(self):
        card_id = self.manager.current()
        if card_id is None:
            return None
        return get_card(card_id)

    def rate(self, card_id, rating, now=None) -> ReviewOutcome:
        now = now or timezone.now()
        try:
            state = self.manager.submit_rating(card_id, rating, self.settings, now, self.rng)
        except SrsError as e:
            self.logger.warning("review_rejected",
                card_id=str(card_id),
                rating=str(rating),
                error=type(e).__name__,
                current_card=str(self.manager.current()),
            )
            raise

        rating = Rating.parse(rating)
        count = self.study_log.record(self.user_id, study_date(now))

        self.logger.info("review_scheduled",
            card_id=str(card_id),
            rating=int(rating),
            rating_label=RATING_LABELS[rating],
            lifecycle_state=state.lifecycle_state.value,
            interval_days=round(state.interval, 4),
            ease=round(state.ease, 2),
            due_utc=state.due_date.isoformat(),
            due_local=to_local_iso(state.due_date),
            remaining=self.manager.remaining,
            study_count=count,
        )
        if self.manager.finished:
            self._log_finished()

        return ReviewOutcome(
            card_id=card_id,
            state=state,
            requeued=rating == Rating.AGAIN,
            study_count=count,
        )

    def _log_finished(self):
        self.logger.info("session_finished", reviewed=self.manager.reviewed)
