"""Review analytics: overview, performance, study time, mastery, activity and streaks."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from studyloop.auth import CurrentUser, get_current_user
from studyloop.models import (
    ActivityDay,
    MasteryProgressResponse,
    OverviewResponse,
    PerformanceResponse,
    StreakResponse,
    StudyTimeDay,
    UserStudyStats,
)
from studyloop.repositories import (
    get_flashcard_repository,
    get_review_repository,
    get_user_stats_repository,
)
from studyloop.srs.analytics import (
    activity_by_day,
    performance_summary,
    study_overview,
    study_time_by_day,
)
from studyloop.srs.stats import mastery_progress
from studyloop.srs.streak import streak_from_history
from studyloop.srs.time import days_ago_iso, utc_now

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/overview", response_model=OverviewResponse)
async def get_overview(user: Annotated[CurrentUser, Depends(get_current_user)]) -> OverviewResponse:
    """Card, review and mastered counts with total study time and streaks."""
    review_repo = get_review_repository()
    flashcards = get_flashcard_repository().list_by_user(user.user_id)
    stats = get_user_stats_repository().get(user.user_id) or UserStudyStats.empty(user.user_id)
    current = streak_from_history(review_repo.list_review_dates(user.user_id), utc_now())

    overview = study_overview(flashcards, review_repo.count(user.user_id), stats.to_totals(), current)
    return OverviewResponse(**overview)


@router.get("/performance", response_model=PerformanceResponse)
async def get_performance(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    days: Annotated[int, Query(ge=1, le=365)] = 30,
) -> PerformanceResponse:
    """Average quality, time per card and accuracy over the last `days` days."""
    events = get_review_repository().list_since(user.user_id, days_ago_iso(utc_now(), days))
    return PerformanceResponse(**performance_summary(events))


@router.get("/study-time", response_model=list[StudyTimeDay])
async def get_study_time(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    days: Annotated[int, Query(ge=1, le=366)] = 30,
) -> list[StudyTimeDay]:
    """Minutes studied per day over the last `days` days, oldest first."""
    now = utc_now()
    events = get_review_repository().list_since(user.user_id, days_ago_iso(now, days))
    return [StudyTimeDay(**day) for day in study_time_by_day(events, now.date(), days)]


@router.get("/mastery-progress", response_model=MasteryProgressResponse)
async def get_mastery_progress(
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MasteryProgressResponse:
    flashcards = get_flashcard_repository().list_by_user(user.user_id)
    return MasteryProgressResponse(**mastery_progress(flashcards))


@router.get("/activity", response_model=list[ActivityDay])
async def get_activity(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    days: Annotated[int, Query(ge=1, le=366)] = 365,
) -> list[ActivityDay]:
    """Reviews per day, for a heatmap."""
    events = get_review_repository().list_since(user.user_id, days_ago_iso(utc_now(), days))
    return [ActivityDay(**day) for day in activity_by_day(events)]


@router.get("/streak", response_model=StreakResponse)
async def get_streak(user: Annotated[CurrentUser, Depends(get_current_user)]) -> StreakResponse:
    """Current streak recomputed from review history, plus the stored longest streak."""
    review_dates = get_review_repository().list_review_dates(user.user_id)
    current = streak_from_history(review_dates, utc_now())

    stats = get_user_stats_repository().get(user.user_id)
    longest = max(stats.longestStreakDays if stats else 0, current)

    return StreakResponse(
        currentStreak=current,
        longestStreak=longest,
        lastReviewDate=review_dates[0] if review_dates else None,
    )
