"""Study statistics over a set of flashcards."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

from .due import is_due
from .sm2 import round_half_up
from .time import utc_now

# A card counts as mastered once it has this many consecutive passing reviews.
MASTERED_REPETITIONS = 3

# Finer progress view only: a familiar card is one passing review short of mastered.
FAMILIAR_REPETITIONS = MASTERED_REPETITIONS - 1

MasteryLevel = Literal["new", "learning", "mastered"]


@dataclass(frozen=True)
class StudyStats:
    total: int = 0
    due: int = 0
    new: int = 0
    learning: int = 0
    mastered: int = 0
    due_percentage: int = 0
    mastered_percentage: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "due": self.due,
            "new": self.new,
            "learning": self.learning,
            "mastered": self.mastered,
            "duePercentage": self.due_percentage,
            "masteredPercentage": self.mastered_percentage,
        }


def repetition_of(card: Any) -> int:
    if isinstance(card, Mapping):
        value = card.get("repetition")
    else:
        value = getattr(card, "repetition", None)
    return value or 0


def mastery_level(repetition: int | None) -> MasteryLevel:
    """Bucket a card by its consecutive passing reviews."""
    if not repetition or repetition <= 0:
        return "new"
    if repetition < MASTERED_REPETITIONS:
        return "learning"
    return "mastered"


def _percentage(part: int, total: int) -> int:
    if total == 0:
        return 0
    return round_half_up(part / total * 100)


def compute_study_stats(cards: Iterable[Any], as_of: datetime | None = None) -> StudyStats:
    """Count new/learning/mastered cards and how many are due at `as_of`.

    Due is an independent axis: a learning card can also be due.
    """
    if as_of is None:
        as_of = utc_now()

    counts = {"new": 0, "learning": 0, "mastered": 0}
    total = 0
    due = 0
    for card in cards:
        total += 1
        counts[mastery_level(repetition_of(card))] += 1
        if is_due(card, as_of):
            due += 1

    return StudyStats(
        total=total,
        due=due,
        new=counts["new"],
        learning=counts["learning"],
        mastered=counts["mastered"],
        due_percentage=_percentage(due, total),
        mastered_percentage=_percentage(counts["mastered"], total),
    )


def mastery_progress(cards: Iterable[Any]) -> dict[str, int]:
    """Distribution of cards over new, learning, familiar and mastered.

    Splits the learning bucket of `compute_study_stats` in two; new and
    mastered counts are the same in both.
    """
    progress = {"new": 0, "learning": 0, "familiar": 0, "mastered": 0}
    for card in cards:
        repetition = repetition_of(card)
        level = mastery_level(repetition)
        if level == "learning" and repetition >= FAMILIAR_REPETITIONS:
            progress["familiar"] += 1
        else:
            progress[level] += 1
    return progress
