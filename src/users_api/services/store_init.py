"""User store initialization service."""

import logging

from users_common.config.store_config import StoreConfig
from users_common.infra.cosmos.cosmos_user_store import CosmosUserStore
from users_common.services.user_store import InMemoryUserStore, UserStore

logger = logging.getLogger(__name__)


def open_user_store(config: StoreConfig) -> UserStore:
    """Open the configured user store during application startup.

    For Cosmos DB this creates the database and the users container, with
    its unique key on ``/email``, if they do not exist yet.

    Args:
        config: Store configuration

    Returns:
        An open UserStore; the caller closes it at shutdown
    """
    if config.user_store_backend == "memory":
        logger.warning("Using in-memory user store; records are lost on restart")
        return InMemoryUserStore()

    logger.info("Connecting to Cosmos DB at %s", config.azure_cosmosdb_endpoint)
    try:
        store = CosmosUserStore(config)
    except Exception as e:
        logger.error("Failed to initialize Cosmos DB: %s", e)
        raise
    logger.info(
        "Cosmos DB user store ready (database=%s, container=%s)",
        config.database_name,
        config.users_container,
    )
    return store
