from collections import deque
from enum import Enum

from .enums import Rating
from .errors import OutOfOrderSubmission, SessionStateError


class QueueStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    FINISHED = "finished"


class SessionQueue:
    """
    Ordered card ids for one study session.

    Built once from the cards due at session start and drained head first.
    Lapsed cards (Again) go back to the tail; every other rating removes the
    card for the rest of the session. Never persisted.
    """

    def __init__(self):
        self._ids = deque()
        self.status = QueueStatus.UNINITIALIZED

    def initialize(self, due_cards, now):
        if self.status != QueueStatus.UNINITIALIZED:
            raise SessionStateError(f"Queue already initialized ({self.status.value})")

        due = [(card_id, due_date) for card_id, due_date in due_cards if due_date <= now]
        due.sort(key=lambda item: (item[1], str(item[0])))
        self._ids.extend(card_id for card_id, _ in due)
        self.status = QueueStatus.ACTIVE if self._ids else QueueStatus.FINISHED
        return self

    def current(self):
        if self.status != QueueStatus.ACTIVE:
            return None
        return self._ids[0]

    def check_head(self, card_id):
        head = self.current()
        if head is None or head != card_id:
            raise OutOfOrderSubmission(card_id, head)

    def advance(self, card_id, rating: Rating):
        """Pop the head after a review; requeue it at the tail on Again."""
        self.check_head(card_id)
        self._ids.popleft()
        if rating == Rating.AGAIN:
            self._ids.append(card_id)
        if not self._ids:
            self.status = QueueStatus.FINISHED

    @property
    def finished(self) -> bool:
        return self.status == QueueStatus.FINISHED

    def __len__(self):
        return len(self._ids)

    def __iter__(self):
        return iter(self._ids)

    def __repr__(self):
        return f"SessionQueue(status={self.status.value}, ids={list(self._ids)!r})"
