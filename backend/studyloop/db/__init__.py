"""Database module for Cosmos DB integration."""

from .cosmos import (
    get_client,
    get_database,
    get_container,
    get_flashcards_container,
    get_reviews_container,
    get_user_stats_container,
    get_settings,
    verify_connection,
    close_client,
)

__all__ = [
    "get_client",
    "get_database",
    "get_container",
    "get_flashcards_container",
    "get_reviews_container",
    "get_user_stats_container",
    "get_settings",
    "verify_connection",
    "close_client",
]
