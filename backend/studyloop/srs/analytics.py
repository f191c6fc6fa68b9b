"""Aggregates over recorded review events."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from datetime import date, timedelta
from typing import Any

from .sm2 import PASSING_QUALITY, round_half_up
from .stats import MASTERED_REPETITIONS, repetition_of
from .streak import StreakTotals
from .time import to_date


def _field(event: Any, name: str) -> Any:
    if isinstance(event, Mapping):
        return event.get(name)
    return getattr(event, name, None)


def performance_summary(events: Iterable[Any]) -> dict[str, float | int]:
    """Average quality/time, review count and accuracy (% of passing reviews)."""
    events = list(events)
    if not events:
        return {"averageQuality": 0, "averageTime": 0, "totalReviews": 0, "accuracy": 0}

    total = len(events)
    qualities = [_field(e, "quality") or 0 for e in events]
    total_time = sum(_field(e, "timeSpentSeconds") or 0 for e in events)
    passed = sum(1 for q in qualities if q >= PASSING_QUALITY)

    return {
        "averageQuality": round(sum(qualities) / total, 2),
        "averageTime": round_half_up(total_time / total),
        "totalReviews": total,
        "accuracy": round_half_up(passed / total * 100),
    }


def activity_by_day(events: Iterable[Any]) -> list[dict[str, Any]]:
    """Count reviews per UTC calendar day, oldest first."""
    counts = Counter(
        to_date(_field(e, "reviewDate")).isoformat()
        for e in events
        if _field(e, "reviewDate")
    )
    return [{"date": day, "count": counts[day]} for day in sorted(counts)]


def study_time_by_day(events: Iterable[Any], today: date, days: int = 30) -> list[dict[str, Any]]:
    """Minutes studied on each of the `days` UTC days ending `today`, oldest first.

    Every day in the window is present; days without reviews report 0.
    """
    seconds: Counter[date] = Counter()
    for e in events:
        review_date = _field(e, "reviewDate")
        if review_date:
            seconds[to_date(review_date)] += _field(e, "timeSpentSeconds") or 0

    start = today - timedelta(days=days - 1)
    window = (start + timedelta(days=offset) for offset in range(days))
    return [{"date": day.isoformat(), "minutes": round_half_up(seconds[day] / 60)} for day in window]


def study_overview(
    cards: Iterable[Any],
    total_reviews: int,
    totals: StreakTotals,
    current_streak: int,
) -> dict[str, int]:
    """Headline counts for a user's dashboard.

    `documents` counts the distinct source documents the cards came from.
    """
    cards = list(cards)
    documents = {_field(c, "documentId") for c in cards} - {None}
    return {
        "documents": len(documents),
        "flashcards": len(cards),
        "reviews": total_reviews,
        "masteredCards": sum(1 for c in cards if repetition_of(c) >= MASTERED_REPETITIONS),
        "totalStudyTime": totals.total_study_time_seconds,
        "currentStreak": current_streak,
        "longestStreak": max(totals.longest_streak_days, current_streak),
    }
