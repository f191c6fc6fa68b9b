"""
Cosmos DB client and connection management.

Authentication modes:
1. Azure Managed Identity / Azure CLI: DefaultAzureCredential (production and local dev against Azure)
2. Cosmos DB Emulator (local dev): well-known emulator key

Set COSMOS_EMULATOR=true to use the emulator; otherwise COSMOS_ENDPOINT is required.

All containers are partitioned by /userId.
"""

import os
import logging
from functools import lru_cache
from azure.cosmos import CosmosClient, DatabaseProxy, ContainerProxy
from azure.core.exceptions import AzureError
from azure.identity import DefaultAzureCredential

logger = logging.getLogger(__name__)

# Cosmos DB Emulator well-known key (public, not a secret)
# https://learn.microsoft.com/en-us/azure/cosmos-db/emulator#authentication
EMULATOR_KEY = "C2y6yDjf5/R+ob0N8A7Cgv30VRDJIWEHLM+4QDU5DE2nQ9nDuVTqobD4b8mGGyPMbIZnqyMsEcaGQy67XIw/Jw=="
EMULATOR_ENDPOINT = "https://localhost:8081"


class CosmosDBSettings:
    """Settings for Cosmos DB connection."""

    def __init__(self):
        self.endpoint = os.getenv("COSMOS_ENDPOINT", "")
        self.database_name = os.getenv("COSMOS_DB_NAME", "studyloop")
        self.flashcards_container = os.getenv("COSMOS_FLASHCARDS_CONTAINER", "flashcards")
        self.reviews_container = os.getenv("COSMOS_REVIEWS_CONTAINER", "review_sessions")
        self.user_stats_container = os.getenv("COSMOS_USER_STATS_CONTAINER", "user_stats")
        self.use_emulator = os.getenv("COSMOS_EMULATOR", "false").lower() == "true"

    def is_configured(self) -> bool:
        """Check if Cosmos DB is configured."""
        if self.use_emulator:
            return True
        return bool(self.endpoint)


@lru_cache()
def get_settings() -> CosmosDBSettings:
    """Get cached Cosmos DB settings."""
    return CosmosDBSettings()


_client: CosmosClient | None = None
_database: DatabaseProxy | None = None


def get_client() -> CosmosClient:
    """Get or create the Cosmos DB client."""
    global _client
    if _client is None:
        settings = get_settings()
        if not settings.is_configured():
            raise RuntimeError(
                "Cosmos DB is not configured. "
                "Set COSMOS_ENDPOINT, or COSMOS_EMULATOR=true for the local emulator."
            )

        if settings.use_emulator:
            logger.info("Using Cosmos DB Emulator at %s", EMULATOR_ENDPOINT)
            _client = CosmosClient(
                EMULATOR_ENDPOINT,
                credential=EMULATOR_KEY,
                connection_verify=False,  # Emulator uses self-signed cert
            )
        else:
            logger.info("Using DefaultAzureCredential for Cosmos DB at %s", settings.endpoint)
            _client = CosmosClient(settings.endpoint, credential=DefaultAzureCredential())

    return _client


def get_database() -> DatabaseProxy:
    """Get or create the database proxy."""
    global _database
    if _database is None:
        _database = get_client().get_database_client(get_settings().database_name)
    return _database


def get_container(container_name: str) -> ContainerProxy:
    """Get a container proxy by name."""
    return get_database().get_container_client(container_name)


def get_flashcards_container() -> ContainerProxy:
    return get_container(get_settings().flashcards_container)


def get_reviews_container() -> ContainerProxy:
    return get_container(get_settings().reviews_container)


def get_user_stats_container() -> ContainerProxy:
    return get_container(get_settings().user_stats_container)


def verify_connection() -> bool:
    """Verify the Cosmos DB connection is working."""
    settings = get_settings()
    if not settings.is_configured():
        return False
    try:
        get_database().read()
        return True
    except (AzureError, RuntimeError) as exc:
        logger.warning("Cosmos DB connection check failed: %s", exc)
        return False


def close_client():
    """Drop the cached client and database proxy."""
    global _client, _database
    _client = None
    _database = None
