"""Due-card selection.

A card is due when it has no next review date (never reviewed) or when that
date is at or before the reference time. Due-ness is derived on read and
never stored.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from datetime import date, datetime
from typing import Any, TypeVar

from .time import to_utc_datetime, utc_now

T = TypeVar("T")

ReviewDate = str | date | datetime | None


def next_review_of(card: Any) -> ReviewDate:
    """Read the next review date from a model, object or storage dict."""
    if isinstance(card, Mapping):
        if "nextReviewDate" in card:
            return card["nextReviewDate"]
        return card.get("next_review_date")
    return getattr(card, "nextReviewDate", getattr(card, "next_review_date", None))


def is_due(card: Any, as_of: datetime | None = None) -> bool:
    next_review = next_review_of(card)
    if not next_review:
        return True
    if as_of is None:
        as_of = utc_now()
    return to_utc_datetime(next_review) <= to_utc_datetime(as_of)


def iter_due(cards: Iterable[T], as_of: datetime | None = None) -> Iterator[T]:
    """Lazily yield the cards that are due at `as_of` (default: now), in input order."""
    if as_of is None:
        as_of = utc_now()
    for card in cards:
        if is_due(card, as_of):
            yield card


def select_due(cards: Iterable[T], as_of: datetime | None = None) -> list[T]:
    return list(iter_due(cards, as_of))


def sort_by_due(cards: Iterable[T]) -> list[T]:
    """Order cards soonest-due first; never-reviewed cards lead."""

    def sort_key(card: T) -> tuple[int, datetime]:
        next_review = next_review_of(card)
        if not next_review:
            return (0, _EPOCH)
        return (1, to_utc_datetime(next_review))

    return sorted(cards, key=sort_key)


_EPOCH = to_utc_datetime("1970-01-01T00:00:00Z")
