"""Repository for per-user study totals."""

from azure.cosmos import ContainerProxy
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from studyloop.db import get_user_stats_container
from studyloop.models import UserStudyStats
from studyloop.repositories.errors import storage_errors


class UserStatsRepository:
    """One UserStudyStats document per user, keyed by the user ID."""

    def __init__(self, container: ContainerProxy | None = None):
        self._container = container

    @property
    def container(self) -> ContainerProxy:
        if self._container is None:
            self._container = get_user_stats_container()
        return self._container

    def get(self, user_id: str) -> UserStudyStats | None:
        """Return the user's totals, or None before their first review."""
        try:
            with storage_errors("read user stats"):
                item = self.container.read_item(item=user_id, partition_key=user_id)
        except CosmosResourceNotFoundError:
            return None
        return UserStudyStats(**item)

    def save(self, stats: UserStudyStats) -> UserStudyStats:
        with storage_errors("save user stats"):
            saved_item = self.container.upsert_item(body=stats.model_dump())
        return UserStudyStats(**saved_item)


# Singleton instance
_user_stats_repository: UserStatsRepository | None = None


def get_user_stats_repository() -> UserStatsRepository:
    """Get the user stats repository singleton."""
    global _user_stats_repository
    if _user_stats_repository is None:
        _user_stats_repository = UserStatsRepository()
    return _user_stats_repository
