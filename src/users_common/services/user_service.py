"""User record service: validation, uniqueness and merge-and-persist."""

import logging
import uuid
from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from users_common.exceptions import (
    ConflictError,
    DuplicateKeyError,
    MalformedIdentifierError,
    NotFoundError,
    RecordMissingError,
    UserValidationError,
)
from users_common.models.user import User
from users_common.services.user_store import UserStore
from users_common.services.validation import ValidationMode, is_valid_user_id, validate_user

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = ("name", "email", "age")


def utc_now() -> datetime:
    return datetime.now(UTC)


class UserService:
    """Service for managing user records in a document store.

    Failures are raised as ``UserServiceError`` subclasses carrying the
    status code and message for the response envelope. Any other exception
    is an unexpected failure and propagates unchanged.
    """

    def __init__(self, store: UserStore, clock: Callable[[], datetime] = utc_now) -> None:
        """Initialize the service.

        Args:
            store: Open document store handle
            clock: Source of the current time, UTC
        """
        self.store = store
        self.clock = clock

    @staticmethod
    def _supplied(fields: Mapping[str, Any]) -> dict[str, Any]:
        return {key: fields[key] for key in MUTABLE_FIELDS if key in fields}

    @staticmethod
    def _normalise_id(user_id: str) -> str:
        if not is_valid_user_id(user_id):
            raise MalformedIdentifierError()
        return user_id.lower()

    def _next_timestamp(self, previous: datetime) -> datetime:
        now = self.clock()
        if now <= previous:
            # Keep updatedAt strictly increasing under a coarse or skewed clock
            return previous + timedelta(microseconds=1)
        return now

    def _require(self, user_id: str) -> User:
        user = self.store.find_one({"id": user_id})
        if user is None:
            raise NotFoundError()
        return user

    def create_user(self, fields: Mapping[str, Any]) -> User:
        """Create a user from ``name``, ``email`` and ``age``.

        Raises:
            UserValidationError: If a field is missing or malformed
            ConflictError: If the email is already used
        """
        supplied = self._supplied(fields)
        error = validate_user(supplied, ValidationMode.CREATE)
        if error:
            raise UserValidationError(error)

        email = supplied["email"].lower()
        if self.store.find_one({"email": email}) is not None:
            logger.warning("Rejected create: email already exists")
            raise ConflictError()

        now = self.clock()
        user = User(
            id=str(uuid.uuid4()),
            name=supplied["name"].strip(),
            email=email,
            age=int(supplied["age"]),
            created_at=now,
            updated_at=now,
        )
        try:
            created = self.store.insert(user)
        except DuplicateKeyError as e:
            logger.warning("Rejected create: store reported duplicate email")
            raise ConflictError() from e

        logger.info("Created user %s", created.id)
        return created

    def list_users(self) -> list[User]:
        """List all users in storage order."""
        users = self.store.find_all()
        logger.debug("Listed %d users", len(users))
        return users

    def get_user(self, user_id: str) -> User:
        """Get a user by ID.

        Raises:
            MalformedIdentifierError: If the ID is not a UUID
            NotFoundError: If no user has the ID
        """
        return self._require(self._normalise_id(user_id))

    def replace_user(self, user_id: str, fields: Mapping[str, Any]) -> User:
        """Update a user with the supplied ``name``, ``email`` and ``age``.

        Validation runs in patch mode, so a replace with some fields left
        out only updates the fields that were sent.
        """
        return self._merge(user_id, fields)

    def patch_user(self, user_id: str, fields: Mapping[str, Any]) -> User:
        """Update any subset of ``name``, ``email`` and ``age``."""
        return self._merge(user_id, fields)

    def _merge(self, user_id: str, fields: Mapping[str, Any]) -> User:
        user = self._require(self._normalise_id(user_id))

        supplied = self._supplied(fields)
        error = validate_user(supplied, ValidationMode.PATCH)
        if error:
            raise UserValidationError(error)

        changes: dict[str, Any] = {}
        if "name" in supplied:
            changes["name"] = supplied["name"].strip()
        if "email" in supplied:
            email = supplied["email"].lower()
            if email != user.email:
                existing = self.store.find_one({"email": email})
                if existing is not None and existing.id != user.id:
                    logger.warning("Rejected update of %s: email already exists", user.id)
                    raise ConflictError()
            changes["email"] = email
        if "age" in supplied:
            changes["age"] = int(supplied["age"])
        changes["updated_at"] = self._next_timestamp(user.updated_at)

        try:
            updated = self.store.update_in_place(user.model_copy(update=changes))
        except DuplicateKeyError as e:
            logger.warning("Rejected update of %s: store reported duplicate email", user.id)
            raise ConflictError() from e
        except RecordMissingError as e:
            raise NotFoundError() from e

        logger.info("Updated user %s (%s)", updated.id, ", ".join(sorted(changes)))
        return updated

    def delete_user(self, user_id: str) -> None:
        """Delete a user by ID.

        Raises:
            MalformedIdentifierError: If the ID is not a UUID
            NotFoundError: If no user has the ID
        """
        deleted = self.store.find_and_delete({"id": self._normalise_id(user_id)})
        if deleted is None:
            raise NotFoundError()
        logger.info("Deleted user %s", deleted.id)
