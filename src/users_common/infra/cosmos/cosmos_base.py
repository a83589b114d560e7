"""Generic base class for Cosmos DB client operations."""

import logging
from contextlib import ExitStack
from typing import Any, ClassVar

from azure.cosmos import CosmosClient, PartitionKey
from azure.cosmos.exceptions import CosmosResourceNotFoundError
from azure.identity import DefaultAzureCredential
from pydantic import BaseModel

from users_common.config.store_config import StoreConfig

logger = logging.getLogger(__name__)

COSMOS_SYSTEM_FIELDS = frozenset({"_rid", "_self", "_etag", "_attachments", "_ts"})


class BaseCosmosClient[T: BaseModel]:
    """Infrastructure layer: Generic base class for Cosmos DB client operations.

    Subclasses set ``model_class`` and get document conversion plus thin
    wrappers over the container API that strip Cosmos system fields. The
    client connection is held open until ``close`` is called.
    """

    model_class: ClassVar[type[BaseModel]]

    def __init__(
        self,
        container_name: str,
        partition_key_path: str = "/pk",
        unique_key_paths: list[str] | None = None,
        config: StoreConfig | None = None,
    ) -> None:
        """Initialize Cosmos DB client.

        Args:
            container_name: Container name
            partition_key_path: Partition key path (default: "/pk")
            unique_key_paths: Paths the container enforces as unique keys
                within a logical partition
            config: Store configuration. If None, will load from environment.
        """
        if config is None:
            from users_common.config.store_config import get_store_config

            config = get_store_config()

        self.config = config
        self.container_name = container_name
        self.partition_key_path = partition_key_path

        if not config.azure_cosmosdb_endpoint:
            raise ValueError("AZURE_COSMOSDB_ENDPOINT is required")

        self._exit_stack = ExitStack()
        if config.azure_cosmosdb_key:
            # Use key-based authentication
            client = CosmosClient(url=config.azure_cosmosdb_endpoint, credential=config.azure_cosmosdb_key)
        else:
            # Use managed identity
            client = CosmosClient(url=config.azure_cosmosdb_endpoint, credential=DefaultAzureCredential())
        self.client = self._exit_stack.enter_context(client)

        self.database = self.client.create_database_if_not_exists(id=config.database_name)
        self.container = self._ensure_container_exists(container_name, partition_key_path, unique_key_paths or [])

    def _ensure_container_exists(self, container_name: str, partition_key_path: str, unique_key_paths: list[str]):
        """Create the container with its unique key policy if it does not exist.

        Args:
            container_name: Container name
            partition_key_path: Partition key path
            unique_key_paths: Unique key paths

        Returns:
            Container proxy
        """
        # Emulator typically requires provisioned throughput; use 400 only for localhost
        is_emulator = "localhost" in (self.config.azure_cosmosdb_endpoint or "").lower()

        options: dict[str, Any] = {
            "id": container_name,
            "partition_key": PartitionKey(path=partition_key_path),
        }
        if unique_key_paths:
            options["unique_key_policy"] = {"uniqueKeys": [{"paths": unique_key_paths}]}
        if is_emulator:
            options["offer_throughput"] = 400

        container = self.database.create_container_if_not_exists(**options)
        logger.info(
            "Container '%s' ready with partition key '%s' and unique keys %s",
            container_name,
            partition_key_path,
            unique_key_paths,
        )
        return container

    @staticmethod
    def _strip_system_fields(document: dict) -> dict:
        return {k: v for k, v in document.items() if k not in COSMOS_SYSTEM_FIELDS}

    def to_document(self, item: T) -> dict:
        """Serialize a model to a JSON-safe document using field aliases."""
        return item.model_dump(mode="json", by_alias=True)

    def from_document(self, document: dict) -> T:
        """Build a model from a stored document, ignoring Cosmos system fields."""
        return self.model_class.model_validate(self._strip_system_fields(document))

    def create_document(self, document: dict) -> dict:
        """Create a document in Cosmos DB.

        Args:
            document: Document body, including ``id`` and the partition key

        Returns:
            Created document (with Cosmos system fields removed)
        """
        created = self.container.create_item(body=document, enable_automatic_id_generation=False)
        logger.info("Created item %s in container %s", created["id"], self.container_name)
        return self._strip_system_fields(created)

    def read_document(self, item_id: str, partition_key: str) -> dict | None:
        """Read a document from Cosmos DB.

        Args:
            item_id: Item ID
            partition_key: Partition key value

        Returns:
            Document (with Cosmos system fields removed), or None if not found
        """
        try:
            item = self.container.read_item(item=item_id, partition_key=partition_key)
        except CosmosResourceNotFoundError:
            logger.debug("Item %s not found in container %s", item_id, self.container_name)
            return None
        logger.debug("Read item %s from container %s", item_id, self.container_name)
        return self._strip_system_fields(item)

    def replace_document(self, item_id: str, document: dict) -> dict:
        """Replace a document in Cosmos DB (full replace).

        Args:
            item_id: Item ID
            document: New document body

        Returns:
            Replaced document (with Cosmos system fields removed)
        """
        replaced = self.container.replace_item(item=item_id, body=document)
        logger.info("Replaced item %s in container %s", item_id, self.container_name)
        return self._strip_system_fields(replaced)

    def query_documents(
        self,
        query: str,
        partition_key: str,
        parameters: list[dict[str, Any]] | None = None,
    ) -> list[dict]:
        """Query documents from Cosmos DB.

        Args:
            query: SQL query string
            partition_key: Partition key value
            parameters: Query parameters, as ``{"name": ..., "value": ...}`` dicts

        Returns:
            List of documents (with Cosmos system fields removed)
        """
        items = self.container.query_items(query=query, parameters=parameters, partition_key=partition_key)
        documents = [self._strip_system_fields(item) for item in items]
        logger.debug("Queried %d items from container %s", len(documents), self.container_name)
        return documents

    def delete_document(self, item_id: str, partition_key: str) -> bool:
        """Delete a document from Cosmos DB.

        Args:
            item_id: Item ID
            partition_key: Partition key value

        Returns:
            True if the document was deleted, False if it did not exist
        """
        try:
            self.container.delete_item(item=item_id, partition_key=partition_key)
        except CosmosResourceNotFoundError:
            logger.warning("Item %s not found for deletion in %s", item_id, self.container_name)
            return False
        logger.info("Deleted item %s from container %s", item_id, self.container_name)
        return True

    def close(self) -> None:
        """Close the underlying Cosmos client connection."""
        self._exit_stack.close()
