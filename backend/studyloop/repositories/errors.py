"""Storage error types shared by the repositories."""

import logging
from contextlib import contextmanager
from collections.abc import Iterator

from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Raised when a storage read or write fails."""

    def __init__(self, action: str, cause: Exception | None = None):
        self.action = action
        self.cause = cause
        super().__init__(f"Failed to {action}")


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Translate Cosmos HTTP failures inside the block into PersistenceError.

    Not-found responses pass through untouched so callers can map them to
    their own domain error.
    """
    try:
        yield
    except CosmosResourceNotFoundError:
        raise
    except CosmosHttpResponseError as exc:
        logger.error("Cosmos DB error while trying to %s: %s", action, exc)
        raise PersistenceError(action, exc) from exc
