class SrsError(Exception):
    """Base class for every error raised by the scheduling core."""


class InvalidRating(SrsError):
    def __init__(self, rating):
        self.rating = rating
        super().__init__(f"Invalid rating: {rating!r} (expected 1-4 or Again/Hard/Good/Easy)")


class OutOfOrderSubmission(SrsError):
    def __init__(self, card_id, expected):
        self.card_id = card_id
        self.expected = expected
        super().__init__(f"Rating submitted for {card_id}, but the current card is {expected}")


class SessionStateError(SrsError):
    pass


class CardNotFound(SrsError):
    def __init__(self, card_id):
        self.card_id = card_id
        super().__init__(f"Card not found: {card_id}")


class DeckNotFound(SrsError):
    def __init__(self, deck_id):
        self.deck_id = deck_id
        super().__init__(f"Deck not found: {deck_id}")


class StaleCardState(SrsError):
    """The card was rescheduled elsewhere since its state was read."""

    def __init__(self, card_id, version):
        self.card_id = card_id
        self.version = version
        super().__init__(f"Card {card_id} changed since version {version}")


class InvalidSettings(SrsError):
    def __init__(self, errors):
        self.errors = errors
        super().__init__(f"Invalid deck settings: {errors}")
