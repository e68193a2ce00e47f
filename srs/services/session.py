from ..domain.enums import Rating
from ..domain.logic import compute_next_review
from ..domain.queue import SessionQueue


class SessionQueueManager:
    """
    Drains one SessionQueue, scheduling each reviewed card.

    `store` is the card-store collaborator: anything with
    `get_state(card_id) -> SchedulingState` and `save_state(card_id, state)`.
    Single owner, single thread; a submission for anything but the current
    head is rejected with OutOfOrderSubmission.
    """

    def __init__(self, store, queue=None):
        self.store = store
        self.queue = queue if queue is not None else SessionQueue()
        self.reviewed = 0

    def initialize(self, due_cards, now):
        self.queue.initialize(due_cards, now)
        return self

    def current(self):
        return self.queue.current()

    def submit_rating(self, card_id, rating, settings=None, now=None, rng=None):
        self.queue.check_head(card_id)
        rating = Rating.parse(rating)

        state = self.store.get_state(card_id)
        new_state = compute_next_review(state, rating, settings, now=now, rng=rng)
        # queue only moves once the write went through
        self.store.save_state(card_id, new_state)
        self.queue.advance(card_id, rating)

        self.reviewed += 1
        return new_state

    @property
    def finished(self) -> bool:
        return self.queue.finished

    @property
    def remaining(self) -> int:
        return len(self.queue)


def initialize_queue(due_cards, now) -> SessionQueue:
    return SessionQueue().initialize(due_cards, now)


def current_card(queue: SessionQueue):
    return queue.current()


def submit_rating(queue: SessionQueue, card_id, rating, settings, now, rng, store):
    new_state = SessionQueueManager(store, queue).submit_rating(card_id, rating, settings, now, rng)
    return queue, new_state
