"""Repository for Flashcard CRUD and review-state writes."""

from azure.cosmos import ContainerProxy
from azure.cosmos.exceptions import CosmosResourceNotFoundError

from studyloop.db import get_flashcards_container
from studyloop.models import Flashcard, FlashcardCreate, FlashcardUpdate
from studyloop.repositories.errors import storage_errors
from studyloop.srs.time import utc_now_iso


class FlashcardNotFoundError(Exception):
    """Raised when a flashcard does not exist or is not owned by the caller."""

    pass


class FlashcardRepository:
    """Repository for Flashcard database operations."""

    def __init__(self, container: ContainerProxy | None = None):
        """Initialize the repository with an optional container."""
        self._container = container

    @property
    def container(self) -> ContainerProxy:
        """Get the container, lazily initializing if needed."""
        if self._container is None:
            self._container = get_flashcards_container()
        return self._container

    def list_by_user(self, user_id: str, document_id: str | None = None) -> list[Flashcard]:
        """List a user's flashcards, optionally limited to one source document."""
        query = "SELECT * FROM c WHERE c.userId = @userId"
        parameters = [{"name": "@userId", "value": user_id}]
        if document_id is not None:
            query += " AND c.documentId = @documentId"
            parameters.append({"name": "@documentId", "value": document_id})
        query += " ORDER BY c.createdAt DESC"

        with storage_errors("list flashcards"):
            items = list(
                self.container.query_items(
                    query=query,
                    parameters=parameters,
                    partition_key=user_id,
                )
            )
        return [Flashcard(**item) for item in items]

    def get_by_id(self, flashcard_id: str, user_id: str) -> Flashcard:
        """Get a flashcard by ID within the user's partition."""
        try:
            with storage_errors("read flashcard"):
                item = self.container.read_item(item=flashcard_id, partition_key=user_id)
        except CosmosResourceNotFoundError:
            raise FlashcardNotFoundError(f"Flashcard with ID {flashcard_id} not found")
        return Flashcard(**item)

    def create(self, user_id: str, flashcard_create: FlashcardCreate) -> Flashcard:
        """Create a new flashcard with a fresh review state."""
        flashcard = Flashcard(userId=user_id, **flashcard_create.model_dump())
        with storage_errors("create flashcard"):
            created_item = self.container.create_item(body=flashcard.model_dump())
        return Flashcard(**created_item)

    def update(self, flashcard_id: str, user_id: str, flashcard_update: FlashcardUpdate) -> Flashcard:
        """Apply a partial content update to a flashcard."""
        existing = self.get_by_id(flashcard_id, user_id)

        update_data = flashcard_update.model_dump(exclude_unset=True, exclude_none=True)
        if not update_data:
            return existing

        for key, value in update_data.items():
            setattr(existing, key, value)
        existing.updatedAt = utc_now_iso()
        return self.replace(existing)

    def replace(self, flashcard: Flashcard) -> Flashcard:
        """Replace (persist) a full flashcard document."""
        try:
            with storage_errors("save flashcard"):
                updated_item = self.container.replace_item(
                    item=flashcard.id,
                    body=flashcard.model_dump(),
                )
        except CosmosResourceNotFoundError:
            raise FlashcardNotFoundError(f"Flashcard with ID {flashcard.id} not found")
        return Flashcard(**updated_item)

    def delete(self, flashcard_id: str, user_id: str) -> None:
        """Delete a flashcard; its review state goes with it."""
        try:
            with storage_errors("delete flashcard"):
                self.container.delete_item(item=flashcard_id, partition_key=user_id)
        except CosmosResourceNotFoundError:
            raise FlashcardNotFoundError(f"Flashcard with ID {flashcard_id} not found")


# Singleton instance
_flashcard_repository: FlashcardRepository | None = None


def get_flashcard_repository() -> FlashcardRepository:
    """Get the flashcard repository singleton."""
    global _flashcard_repository
    if _flashcard_repository is None:
        _flashcard_repository = FlashcardRepository()
    return _flashcard_repository
