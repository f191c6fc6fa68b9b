"""API routers module."""

from .flashcards import router as flashcards_router
from .reviews import router as reviews_router
from .analytics import router as analytics_router

__all__ = [
    "flashcards_router",
    "reviews_router",
    "analytics_router",
]
