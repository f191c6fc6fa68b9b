"""SM-2 review scheduling.

A review rates recall quality from 0 to 5:

- 0: complete blackout
- 1: incorrect, but the answer seemed familiar
- 2: incorrect, but the answer was easy to recall once shown
- 3: correct, with significant difficulty
- 4: correct, after some hesitation
- 5: perfect recall

Quality >= 3 counts as a pass. Validating the range is the caller's job;
use `is_valid_quality` before scheduling.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta

from .time import utc_today

MIN_EASINESS_FACTOR = 1.3
DEFAULT_EASINESS_FACTOR = 2.5
DEFAULT_INTERVAL_DAYS = 1
PASSING_QUALITY = 3
MIN_QUALITY = 0
MAX_QUALITY = 5


@dataclass(frozen=True)
class ReviewResult:
    repetition: int
    easiness_factor: float
    interval: int
    next_review_date: date
    passed: bool


def is_valid_quality(quality: int) -> bool:
    return MIN_QUALITY <= quality <= MAX_QUALITY


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (same as JavaScript Math.round)."""
    return math.floor(value + 0.5)


def _clamp_easiness_factor(ef: float) -> float:
    return max(MIN_EASINESS_FACTOR, ef)


def next_easiness_factor(easiness_factor: float, quality: int) -> float:
    """EF' = EF + (0.1 - (5-q)*(0.08 + (5-q)*0.02)), clamped to >= 1.3."""
    penalty = 5 - quality
    return _clamp_easiness_factor(easiness_factor + (0.1 - penalty * (0.08 + penalty * 0.02)))


def schedule_next_review(
    quality: int,
    repetition: int = 0,
    easiness_factor: float = DEFAULT_EASINESS_FACTOR,
    interval_days: int = DEFAULT_INTERVAL_DAYS,
    today: date | None = None,
) -> ReviewResult:
    """Compute a card's next scheduling state after a review.

    Rules:
    - EF is updated on every review, pass or fail
    - if q < 3: repetition = 0, interval = 1
    - else:
        repetition += 1
        if repetition == 1: interval = 1
        elif repetition == 2: interval = 6
        else: interval = round_half_up(previous interval * EF')

    The next review date is `today` plus the interval in calendar days,
    where `today` defaults to the current UTC date.
    """
    if today is None:
        today = utc_today()

    passed = quality >= PASSING_QUALITY
    ef_prime = next_easiness_factor(easiness_factor, quality)

    if not passed:
        new_repetition = 0
        new_interval = 1
    else:
        new_repetition = repetition + 1
        if new_repetition == 1:
            new_interval = 1
        elif new_repetition == 2:
            new_interval = 6
        else:
            new_interval = max(1, round_half_up(interval_days * ef_prime))

    return ReviewResult(
        repetition=new_repetition,
        easiness_factor=ef_prime,
        interval=new_interval,
        next_review_date=today + timedelta(days=new_interval),
        passed=passed,
    )
