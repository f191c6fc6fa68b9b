"""Repository for recorded review events."""

from azure.cosmos import ContainerProxy

from studyloop.db import get_reviews_container
from studyloop.models import ReviewEvent
from studyloop.repositories.errors import storage_errors


class ReviewRepository:
    """Append-only store of review events, partitioned by user."""

    def __init__(self, container: ContainerProxy | None = None):
        self._container = container

    @property
    def container(self) -> ContainerProxy:
        if self._container is None:
            self._container = get_reviews_container()
        return self._container

    def add(self, event: ReviewEvent) -> ReviewEvent:
        with storage_errors("record review"):
            created_item = self.container.create_item(body=event.model_dump())
        return ReviewEvent(**created_item)

    def list_since(self, user_id: str, since_iso: str) -> list[ReviewEvent]:
        """Events at or after `since_iso`, newest first."""
        query = (
            "SELECT * FROM c WHERE c.userId = @userId AND c.reviewDate >= @since "
            "ORDER BY c.reviewDate DESC"
        )
        parameters = [
            {"name": "@userId", "value": user_id},
            {"name": "@since", "value": since_iso},
        ]
        with storage_errors("list recent reviews"):
            items = list(
                self.container.query_items(
                    query=query,
                    parameters=parameters,
                    partition_key=user_id,
                )
            )
        return [ReviewEvent(**item) for item in items]

    def list_history(self, user_id: str, limit: int, offset: int) -> list[ReviewEvent]:
        """One page of the user's review history, newest first."""
        query = (
            "SELECT * FROM c WHERE c.userId = @userId "
            "ORDER BY c.reviewDate DESC OFFSET @offset LIMIT @limit"
        )
        parameters = [
            {"name": "@userId", "value": user_id},
            {"name": "@offset", "value": offset},
            {"name": "@limit", "value": limit},
        ]
        with storage_errors("list review history"):
            items = list(
                self.container.query_items(
                    query=query,
                    parameters=parameters,
                    partition_key=user_id,
                )
            )
        return [ReviewEvent(**item) for item in items]

    def count(self, user_id: str) -> int:
        """Total number of reviews the user has submitted."""
        query = "SELECT VALUE COUNT(1) FROM c WHERE c.userId = @userId"
        parameters = [{"name": "@userId", "value": user_id}]
        with storage_errors("count reviews"):
            result = list(
                self.container.query_items(
                    query=query,
                    parameters=parameters,
                    partition_key=user_id,
                )
            )
        return result[0] if result else 0

    def list_review_dates(self, user_id: str, limit: int = 365) -> list[str]:
        """Most recent review timestamps, newest first."""
        query = (
            "SELECT TOP @limit VALUE c.reviewDate FROM c "
            "WHERE c.userId = @userId ORDER BY c.reviewDate DESC"
        )
        parameters = [
            {"name": "@userId", "value": user_id},
            {"name": "@limit", "value": limit},
        ]
        with storage_errors("list review dates"):
            return list(
                self.container.query_items(
                    query=query,
                    parameters=parameters,
                    partition_key=user_id,
                )
            )


# Singleton instance
_review_repository: ReviewRepository | None = None


def get_review_repository() -> ReviewRepository:
    """Get the review repository singleton."""
    global _review_repository
    if _review_repository is None:
        _review_repository = ReviewRepository()
    return _review_repository
