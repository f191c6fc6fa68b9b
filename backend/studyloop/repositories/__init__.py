"""Repositories module for data access layer."""

from .errors import PersistenceError
from .flashcard_repository import (
    FlashcardRepository,
    FlashcardNotFoundError,
    get_flashcard_repository,
)
from .review_repository import ReviewRepository, get_review_repository
from .user_stats_repository import UserStatsRepository, get_user_stats_repository

__all__ = [
    "PersistenceError",
    "FlashcardRepository",
    "FlashcardNotFoundError",
    "get_flashcard_repository",
    "ReviewRepository",
    "get_review_repository",
    "UserStatsRepository",
    "get_user_stats_repository",
]
