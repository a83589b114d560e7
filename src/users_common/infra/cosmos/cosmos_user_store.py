"""User document store backed by Cosmos DB."""

import logging
from collections.abc import Mapping

from azure.cosmos.exceptions import CosmosResourceExistsError, CosmosResourceNotFoundError

from users_common.config.store_config import StoreConfig
from users_common.exceptions import DuplicateKeyError, RecordMissingError
from users_common.infra.cosmos.cosmos_base import BaseCosmosClient
from users_common.models.user import User
from users_common.services.user_store import UserStore, check_filter

logger = logging.getLogger(__name__)

PARTITION_KEY_FIELD = "pk"


class CosmosUserStore(BaseCosmosClient[User], UserStore):
    """Cosmos DB implementation of UserStore.

    Every user lives in one logical partition so that the container's
    unique key on ``/email`` holds across the whole collection. Cosmos
    reports unique key and id collisions as 409 Conflict, which surfaces
    here as ``DuplicateKeyError``.
    """

    model_class = User

    def __init__(self, config: StoreConfig) -> None:
        """Open the users container, creating it if needed.

        Args:
            config: Store configuration
        """
        super().__init__(
            container_name=config.users_container,
            partition_key_path=f"/{PARTITION_KEY_FIELD}",
            unique_key_paths=["/email"],
            config=config,
        )
        self.partition_value = config.users_partition_key

    def to_document(self, item: User) -> dict:
        document = super().to_document(item)
        document[PARTITION_KEY_FIELD] = self.partition_value
        return document

    def find_one(self, criteria: Mapping[str, str]) -> User | None:
        check_filter(criteria)
        if set(criteria) == {"id"}:
            document = self.read_document(criteria["id"], self.partition_value)
            return self.from_document(document) if document else None

        # Field names come from the checked filter; values are parameterised
        clauses = [f"c.{field} = @{field}" for field in criteria]
        parameters = [{"name": f"@{field}", "value": value} for field, value in criteria.items()]
        query = "SELECT * FROM c WHERE " + " AND ".join(clauses)
        documents = self.query_documents(query, self.partition_value, parameters=parameters)
        return self.from_document(documents[0]) if documents else None

    def insert(self, user: User) -> User:
        try:
            created = self.create_document(self.to_document(user))
        except CosmosResourceExistsError as e:
            logger.warning("Insert of user %s rejected by unique constraint", user.id)
            raise DuplicateKeyError(str(e)) from e
        return self.from_document(created)

    def update_in_place(self, user: User) -> User:
        try:
            replaced = self.replace_document(user.id, self.to_document(user))
        except CosmosResourceNotFoundError as e:
            raise RecordMissingError(f"user {user.id} does not exist") from e
        except CosmosResourceExistsError as e:
            logger.warning("Update of user %s rejected by unique constraint", user.id)
            raise DuplicateKeyError(str(e)) from e
        return self.from_document(replaced)

    def find_and_delete(self, criteria: Mapping[str, str]) -> User | None:
        user = self.find_one(criteria)
        if user is None:
            return None
        if not self.delete_document(user.id, self.partition_value):
            # Removed by a concurrent request between the read and the delete
            return None
        return user

    def find_all(self) -> list[User]:
        documents = self.query_documents("SELECT * FROM c", self.partition_value)
        return [self.from_document(document) for document in documents]
