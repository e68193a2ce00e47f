from datetime import timedelta

from ..data import repos

# upper bounds of heatmap levels 0-3; anything above is level 4
HEATMAP_LEVELS = (0, 2, 5, 10)


class StudyLogAggregator:
    """Per-user, per-day review counts behind the activity heatmap."""

    def __init__(self, increment=repos.increment_study_log, entries=repos.study_log_entries):
        self._increment = increment
        self._entries = entries

    def record(self, user_id, date) -> int:
        return self._increment(user_id, date)

    def query(self, user_id):
        return [(date, count) for date, count in self._entries(user_id)]

    def heatmap(self, user_id, end_date, days=365):
        """Dense (date, count) series for the `days` calendar days ending at `end_date`."""
        counts = dict(self.query(user_id))
        start = end_date - timedelta(days=days - 1)
        return [
            (day, counts.get(day, 0))
            for day in (start + timedelta(days=i) for i in range(days))
        ]


def intensity(count: int) -> int:
    for level, upper in enumerate(HEATMAP_LEVELS):
        if count <= upper:
            return level
    return len(HEATMAP_LEVELS)


def record_study_event(user_id, date) -> int:
    return StudyLogAggregator().record(user_id, date)


def query_study_log(user_id):
    return StudyLogAggregator().query(user_id)
