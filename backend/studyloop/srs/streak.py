"""Daily review streak tracking.

Streaks are counted in UTC calendar days. Comparing dates rather than
subtracting timestamps keeps a review at 23:59 and one at 00:01 on
consecutive days.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta

from .time import to_date


@dataclass(frozen=True)
class StreakTotals:
    """Running per-user review totals."""

    total_reviews: int = 0
    cards_mastered: int = 0
    current_streak_days: int = 0
    longest_streak_days: int = 0
    last_review_date: date | None = None
    total_study_time_seconds: int = 0


def update_streak(
    last_review_date: str | date | datetime | None,
    current_streak: int,
    today: str | date | datetime,
) -> int:
    """Return the streak after a review made on `today`.

    - already reviewed today: unchanged
    - last reviewed yesterday: streak + 1
    - anything else (gap, no prior review): restart at 1
    """
    today_date = to_date(today)
    if not last_review_date:
        return 1

    last_date = to_date(last_review_date)
    if last_date == today_date:
        return current_streak
    if last_date == today_date - timedelta(days=1):
        return current_streak + 1
    return 1


def record_review(
    totals: StreakTotals,
    passed: bool,
    today: date,
    time_spent_seconds: int | None = None,
) -> StreakTotals:
    """Fold one review into the running totals."""
    streak = update_streak(totals.last_review_date, totals.current_streak_days, today)
    return replace(
        totals,
        total_reviews=totals.total_reviews + 1,
        cards_mastered=totals.cards_mastered + 1 if passed else totals.cards_mastered,
        current_streak_days=streak,
        longest_streak_days=max(totals.longest_streak_days, streak),
        last_review_date=today,
        total_study_time_seconds=totals.total_study_time_seconds + (time_spent_seconds or 0),
    )


def streak_from_history(
    review_dates: Iterable[str | date | datetime],
    today: str | date | datetime,
) -> int:
    """Recompute the current streak from raw review timestamps.

    The most recent review day must be today or yesterday; the streak then
    counts back over consecutive days. A review dated after `today` breaks
    the streak, as it does in `update_streak`.
    """
    days = sorted({to_date(d) for d in review_dates}, reverse=True)
    if not days:
        return 0

    today_date = to_date(today)
    if not 0 <= (today_date - days[0]).days <= 1:
        return 0

    streak = 1
    for previous, current in zip(days, days[1:]):
        if (previous - current).days != 1:
            break
        streak += 1
    return streak
