"""Models module for Pydantic schemas."""

from .flashcard import (
    Flashcard,
    FlashcardBase,
    FlashcardCreate,
    FlashcardUpdate,
    FlashcardResponse,
    FlashcardListResponse,
)
from .user_stats import UserStudyStats
from .review import (
    ActivityDay,
    DueResponse,
    HistoryEntry,
    HistoryResponse,
    MasteryProgressResponse,
    OverviewResponse,
    Pagination,
    PerformanceResponse,
    ReviewEvent,
    ReviewOutcome,
    ReviewRequest,
    ReviewResponse,
    StatsResponse,
    StreakResponse,
    StudyStatsResponse,
    StudyTimeDay,
    UserStatsResponse,
    review_message,
)

__all__ = [
    "Flashcard",
    "FlashcardBase",
    "FlashcardCreate",
    "FlashcardUpdate",
    "FlashcardResponse",
    "FlashcardListResponse",
    "UserStudyStats",
    "ActivityDay",
    "DueResponse",
    "HistoryEntry",
    "HistoryResponse",
    "MasteryProgressResponse",
    "OverviewResponse",
    "Pagination",
    "PerformanceResponse",
    "ReviewEvent",
    "ReviewOutcome",
    "ReviewRequest",
    "ReviewResponse",
    "StatsResponse",
    "StreakResponse",
    "StudyStatsResponse",
    "StudyTimeDay",
    "UserStatsResponse",
    "review_message",
]
