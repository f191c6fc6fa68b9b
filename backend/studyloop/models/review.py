"""Models for review submission, review history and study statistics."""

from __future__ import annotations

from uuid import uuid4

from pydantic import BaseModel, Field

from studyloop.models.flashcard import Flashcard, FlashcardResponse
from studyloop.srs.sm2 import MAX_QUALITY, MIN_QUALITY, ReviewResult
from studyloop.srs.time import date_to_iso_z, utc_now_iso


class ReviewRequest(BaseModel):
    """Body of POST /reviews/{flashcardId}."""

    quality: int = Field(..., ge=MIN_QUALITY, le=MAX_QUALITY, description="Recall quality, 0-5")
    timeSpent: int | None = Field(None, ge=0, description="Seconds spent on the card")


class ReviewOutcome(BaseModel):
    """Scheduler result as returned to clients."""

    repetition: int
    easinessFactor: float
    interval: int
    nextReviewDate: str
    passed: bool

    @classmethod
    def from_result(cls, result: ReviewResult) -> ReviewOutcome:
        return cls(
            repetition=result.repetition,
            easinessFactor=result.easiness_factor,
            interval=result.interval,
            nextReviewDate=date_to_iso_z(result.next_review_date),
            passed=result.passed,
        )


class ReviewEvent(BaseModel):
    """One submitted review, kept for history and analytics."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    userId: str
    flashcardId: str
    quality: int
    reviewDate: str = Field(default_factory=utc_now_iso)
    timeSpentSeconds: int | None = None
    previousInterval: int
    newInterval: int
    previousEasiness: float
    newEasiness: float

    @classmethod
    def from_result(
        cls,
        *,
        user_id: str,
        flashcard_id: str,
        quality: int,
        previous_interval: int,
        previous_easiness: float,
        result: ReviewResult,
        review_date: str,
        time_spent: int | None = None,
    ) -> ReviewEvent:
        return cls(
            userId=user_id,
            flashcardId=flashcard_id,
            quality=quality,
            reviewDate=review_date,
            timeSpentSeconds=time_spent,
            previousInterval=previous_interval,
            newInterval=result.interval,
            previousEasiness=previous_easiness,
            newEasiness=result.easiness_factor,
        )


class StudyStatsResponse(BaseModel):
    """Card counts by mastery bucket plus due counts."""

    total: int
    due: int
    new: int
    learning: int
    mastered: int
    duePercentage: int
    masteredPercentage: int


class UserStatsResponse(BaseModel):
    totalReviews: int
    cardsMastered: int
    currentStreakDays: int
    longestStreakDays: int
    lastReviewDate: str | None
    totalStudyTimeSeconds: int


class ReviewResponse(BaseModel):
    """Response for POST /reviews/{flashcardId}."""

    flashcard: FlashcardResponse
    review: ReviewOutcome
    message: str


class DueResponse(BaseModel):
    """Response for GET /reviews/due."""

    flashcards: list[FlashcardResponse]
    stats: StudyStatsResponse
    message: str


class StatsResponse(BaseModel):
    """Response for GET /reviews/stats."""

    userStats: UserStatsResponse
    flashcardStats: StudyStatsResponse
    recentActivity: list[ReviewEvent]
    message: str


class Pagination(BaseModel):
    limit: int
    offset: int
    total: int


class HistoryEntry(ReviewEvent):
    """A review event with the reviewed card's content attached.

    The card fields are null when the card has since been deleted.
    """

    question: str | None = None
    answer: str | None = None
    documentId: str | None = None

    @classmethod
    def from_event(cls, event: ReviewEvent, flashcard: Flashcard | None) -> HistoryEntry:
        if flashcard is None:
            return cls(**event.model_dump())
        return cls(
            **event.model_dump(),
            question=flashcard.question,
            answer=flashcard.answer,
            documentId=flashcard.documentId,
        )


class HistoryResponse(BaseModel):
    """Response for GET /reviews/history."""

    sessions: list[HistoryEntry]
    pagination: Pagination


class PerformanceResponse(BaseModel):
    averageQuality: float
    averageTime: int
    totalReviews: int
    accuracy: int


class ActivityDay(BaseModel):
    date: str
    count: int


class StreakResponse(BaseModel):
    currentStreak: int
    longestStreak: int
    lastReviewDate: str | None


class StudyTimeDay(BaseModel):
    date: str
    minutes: int


class MasteryProgressResponse(BaseModel):
    """Card counts by repetition: 0, 1, one short of mastered, mastered."""

    new: int
    learning: int
    familiar: int
    mastered: int


class OverviewResponse(BaseModel):
    """Response for GET /analytics/overview."""

    documents: int
    flashcards: int
    reviews: int
    masteredCards: int
    totalStudyTime: int = Field(..., description="Seconds")
    currentStreak: int
    longestStreak: int


def review_message(outcome: ReviewOutcome) -> str:
    """Human-readable feedback for a scheduled review."""
    if outcome.passed:
        suffix = "" if outcome.interval == 1 else "s"
        return f"Great! Review again in {outcome.interval} day{suffix}"
    return "Keep practicing! This card will appear again soon."
