"""SRS core: SM-2 scheduling, due selection, study stats and streaks."""

from .sm2 import (
    DEFAULT_EASINESS_FACTOR,
    DEFAULT_INTERVAL_DAYS,
    MIN_EASINESS_FACTOR,
    ReviewResult,
    is_valid_quality,
    round_half_up,
    schedule_next_review,
)
from .due import is_due, iter_due, select_due, sort_by_due
from .stats import (
    FAMILIAR_REPETITIONS,
    MASTERED_REPETITIONS,
    StudyStats,
    compute_study_stats,
    mastery_level,
    mastery_progress,
)
from .streak import StreakTotals, record_review, streak_from_history, update_streak
from .analytics import activity_by_day, performance_summary, study_overview, study_time_by_day
from .time import (
    utc_now,
    utc_now_iso,
    utc_today,
    utc_datetime_to_iso_z,
    parse_iso_z,
    to_date,
    date_to_iso_z,
    add_days_iso,
    days_ago_iso,
)

__all__ = [
    "DEFAULT_EASINESS_FACTOR",
    "DEFAULT_INTERVAL_DAYS",
    "MIN_EASINESS_FACTOR",
    "ReviewResult",
    "is_valid_quality",
    "round_half_up",
    "schedule_next_review",
    "is_due",
    "iter_due",
    "select_due",
    "sort_by_due",
    "FAMILIAR_REPETITIONS",
    "MASTERED_REPETITIONS",
    "StudyStats",
    "compute_study_stats",
    "mastery_level",
    "mastery_progress",
    "StreakTotals",
    "record_review",
    "streak_from_history",
    "update_streak",
    "activity_by_day",
    "performance_summary",
    "study_overview",
    "study_time_by_day",
    "utc_now",
    "utc_now_iso",
    "utc_today",
    "utc_datetime_to_iso_z",
    "parse_iso_z",
    "to_date",
    "date_to_iso_z",
    "add_days_iso",
    "days_ago_iso",
]
