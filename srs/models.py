from .data.models import Card, Deck, StudyLog  # noqa: F401
