"""Reviews API router: submit reviews, list due cards, study statistics."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from studyloop.auth import CurrentUser, get_current_user
from studyloop.models import (
    DueResponse,
    Flashcard,
    FlashcardResponse,
    HistoryEntry,
    HistoryResponse,
    Pagination,
    ReviewEvent,
    ReviewOutcome,
    ReviewRequest,
    ReviewResponse,
    StatsResponse,
    StudyStatsResponse,
    UserStatsResponse,
    UserStudyStats,
    review_message,
)
from studyloop.repositories import (
    FlashcardNotFoundError,
    PersistenceError,
    get_flashcard_repository,
    get_review_repository,
    get_user_stats_repository,
)
from studyloop.srs.due import iter_due, sort_by_due
from studyloop.srs.sm2 import (
    DEFAULT_EASINESS_FACTOR,
    DEFAULT_INTERVAL_DAYS,
    ReviewResult,
    schedule_next_review,
)
from studyloop.srs.stats import compute_study_stats
from studyloop.srs.streak import record_review
from studyloop.srs.time import date_to_iso_z, days_ago_iso, utc_datetime_to_iso_z, utc_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reviews", tags=["reviews"])

RECENT_ACTIVITY_DAYS = 30


def apply_review(flashcard: Flashcard, quality: int, now: datetime) -> ReviewResult:
    """Schedule the next review of `flashcard` and write the new state onto it.

    Updates repetition, easinessFactor, intervalDays, nextReviewDate,
    lastReviewedAt, timesReviewed and updatedAt. The card is mutated in place.
    """
    result = schedule_next_review(
        quality,
        repetition=flashcard.repetition or 0,
        easiness_factor=flashcard.easinessFactor or DEFAULT_EASINESS_FACTOR,
        interval_days=flashcard.intervalDays or DEFAULT_INTERVAL_DAYS,
        today=now.date(),
    )

    now_iso = utc_datetime_to_iso_z(now)
    flashcard.repetition = result.repetition
    flashcard.easinessFactor = result.easiness_factor
    flashcard.intervalDays = result.interval
    flashcard.nextReviewDate = date_to_iso_z(result.next_review_date)
    flashcard.lastReviewedAt = now_iso
    flashcard.timesReviewed = (flashcard.timesReviewed or 0) + 1
    flashcard.updatedAt = now_iso
    return result


def update_user_stats(user_id: str, passed: bool, today: date, time_spent: int | None) -> UserStudyStats:
    """Fold one review into the user's stored totals and streak."""
    repo = get_user_stats_repository()
    stats = repo.get(user_id) or UserStudyStats.empty(user_id)
    totals = record_review(stats.to_totals(), passed, today, time_spent)
    return repo.save(stats.with_totals(totals))


@router.get("/due", response_model=DueResponse)
async def get_due_flashcards(user: Annotated[CurrentUser, Depends(get_current_user)]) -> DueResponse:
    """List flashcards due now, soonest first, with card statistics."""
    repo = get_flashcard_repository()
    flashcards = repo.list_by_user(user.user_id)
    now = utc_now()

    due = sort_by_due(iter_due(flashcards, now))
    stats = compute_study_stats(flashcards, now)

    return DueResponse(
        flashcards=[FlashcardResponse(**card.model_dump()) for card in due],
        stats=StudyStatsResponse(**stats.to_dict()),
        message=f"{len(due)} cards due for review",
    )


@router.get("/stats", response_model=StatsResponse)
async def get_review_stats(user: Annotated[CurrentUser, Depends(get_current_user)]) -> StatsResponse:
    """Stored study totals, card statistics and the last 30 days of reviews."""
    now = utc_now()
    user_stats = get_user_stats_repository().get(user.user_id) or UserStudyStats.empty(user.user_id)
    flashcards = get_flashcard_repository().list_by_user(user.user_id)
    recent = get_review_repository().list_since(user.user_id, days_ago_iso(now, RECENT_ACTIVITY_DAYS))

    return StatsResponse(
        userStats=UserStatsResponse(**user_stats.model_dump()),
        flashcardStats=StudyStatsResponse(**compute_study_stats(flashcards, now).to_dict()),
        recentActivity=recent,
        message="Statistics retrieved successfully",
    )


@router.get("/history", response_model=HistoryResponse)
async def get_review_history(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    limit: Annotated[int, Query(ge=1, le=500)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> HistoryResponse:
    """Page through past reviews, newest first, each with its card's content."""
    events = get_review_repository().list_history(user.user_id, limit=limit, offset=offset)
    flashcards: dict[str, Flashcard] = {}
    if events:
        flashcards = {card.id: card for card in get_flashcard_repository().list_by_user(user.user_id)}

    sessions = [HistoryEntry.from_event(event, flashcards.get(event.flashcardId)) for event in events]
    return HistoryResponse(
        sessions=sessions,
        pagination=Pagination(limit=limit, offset=offset, total=len(sessions)),
    )


@router.post("/{flashcard_id}", response_model=ReviewResponse)
async def submit_review(
    flashcard_id: str,
    review: ReviewRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ReviewResponse:
    """Submit a 0-5 quality rating for a flashcard and reschedule it."""
    card_repo = get_flashcard_repository()
    try:
        flashcard = card_repo.get_by_id(flashcard_id, user.user_id)
    except FlashcardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Flashcard with ID {flashcard_id} not found",
        )

    previous_interval = flashcard.intervalDays or DEFAULT_INTERVAL_DAYS
    previous_easiness = flashcard.easinessFactor or DEFAULT_EASINESS_FACTOR
    now = utc_now()

    result = apply_review(flashcard, review.quality, now)
    try:
        updated = card_repo.replace(flashcard)
    except FlashcardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Flashcard with ID {flashcard_id} not found",
        )

    # The card is already rescheduled; history and totals are best effort.
    event = ReviewEvent.from_result(
        user_id=user.user_id,
        flashcard_id=flashcard_id,
        quality=review.quality,
        previous_interval=previous_interval,
        previous_easiness=previous_easiness,
        result=result,
        review_date=utc_datetime_to_iso_z(now),
        time_spent=review.timeSpent,
    )
    try:
        get_review_repository().add(event)
    except PersistenceError:
        logger.exception("Failed to record review event: user=%s, flashcard=%s", user.user_id, flashcard_id)

    try:
        update_user_stats(user.user_id, result.passed, now.date(), review.timeSpent)
    except PersistenceError:
        logger.exception("Failed to update study stats: user=%s", user.user_id)

    logger.info(
        "Review applied: user=%s, flashcard=%s, quality=%s, passed=%s, interval=%s, next=%s",
        user.user_id,
        flashcard_id,
        review.quality,
        result.passed,
        result.interval,
        updated.nextReviewDate,
    )

    outcome = ReviewOutcome.from_result(result)
    return ReviewResponse(
        flashcard=FlashcardResponse(**updated.model_dump()),
        review=outcome,
        message=review_message(outcome),
    )
