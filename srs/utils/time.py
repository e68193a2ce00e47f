from datetime import timedelta, timezone as dt_tz

from django.conf import settings


def study_zone():
    return dt_tz(timedelta(hours=getattr(settings, "SRS_STUDY_UTC_OFFSET_HOURS", 0)))


def to_local_iso(dt_utc):
    return dt_utc.astimezone(study_zone()).isoformat()


def study_date(dt_utc):
    """Calendar day a review at `dt_utc` counts towards on the heatmap."""
    return dt_utc.astimezone(study_zone()).date()
