from enum import Enum, IntEnum

from .errors import InvalidRating


class Rating(IntEnum):
    AGAIN = 1
    HARD = 2
    GOOD = 3
    EASY = 4

    @classmethod
    def parse(cls, value):
        """Accept a Rating, its ordinal or its name; anything else is rejected."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise InvalidRating(value)
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise InvalidRating(value) from None
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise InvalidRating(value) from None
        raise InvalidRating(value)


class LifecycleState(str, Enum):
    LEARNING = "learning"
    GRADUATED = "graduated"


RATING_LABELS = {
    Rating.AGAIN: "Again",
    Rating.HARD: "Hard",
    Rating.GOOD: "Good",
    Rating.EASY: "Easy",
}
