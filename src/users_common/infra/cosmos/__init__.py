"""Cosmos DB infrastructure."""

from users_common.infra.cosmos.cosmos_base import BaseCosmosClient
from users_common.infra.cosmos.cosmos_user_store import CosmosUserStore

__all__ = ["BaseCosmosClient", "CosmosUserStore"]
