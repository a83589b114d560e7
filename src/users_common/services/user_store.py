"""Document store interface for user records, with an in-memory implementation."""

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Mapping

from users_common.exceptions import DuplicateKeyError, RecordMissingError
from users_common.models.user import User

logger = logging.getLogger(__name__)

FILTER_FIELDS = frozenset({"id", "email"})


def check_filter(criteria: Mapping[str, str]) -> None:
    """Reject empty filters and fields that cannot be queried."""
    if not criteria:
        raise ValueError("filter must name at least one field")
    unknown = set(criteria) - FILTER_FIELDS
    if unknown:
        raise ValueError(f"unsupported filter fields: {sorted(unknown)}")


class UserStore(ABC):
    """Abstract interface for the user document store.

    Implementations must reject a second record with the same ``id`` or
    ``email`` by raising ``DuplicateKeyError``, whatever the caller checked
    beforehand.
    """

    @abstractmethod
    def find_one(self, criteria: Mapping[str, str]) -> User | None:
        """Return the first record whose fields equal all criteria."""
        pass

    @abstractmethod
    def insert(self, user: User) -> User:
        """Persist a new record."""
        pass

    @abstractmethod
    def update_in_place(self, user: User) -> User:
        """Replace the stored record that has the same ``id``.

        Raises:
            RecordMissingError: If no record with that ``id`` exists
            DuplicateKeyError: If the new email belongs to another record
        """
        pass

    @abstractmethod
    def find_and_delete(self, criteria: Mapping[str, str]) -> User | None:
        """Remove and return the matching record, or None if absent."""
        pass

    @abstractmethod
    def find_all(self) -> list[User]:
        """List all records."""
        pass

    def close(self) -> None:
        """Release any connection held by the store."""


class InMemoryUserStore(UserStore):
    """Store keeping users in a process-local dict, in insertion order."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._lock = threading.Lock()

    def _matches(self, user: User, criteria: Mapping[str, str]) -> bool:
        return all(getattr(user, field) == value for field, value in criteria.items())

    def _email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        return any(u.email == email and u.id != exclude_id for u in self._users.values())

    def find_one(self, criteria: Mapping[str, str]) -> User | None:
        check_filter(criteria)
        with self._lock:
            for user in self._users.values():
                if self._matches(user, criteria):
                    return user.model_copy()
        return None

    def insert(self, user: User) -> User:
        with self._lock:
            if user.id in self._users:
                raise DuplicateKeyError(f"id {user.id} already exists")
            if self._email_taken(user.email):
                raise DuplicateKeyError(f"email {user.email} already exists")
            self._users[user.id] = user.model_copy()
        logger.debug("Inserted user %s into memory store", user.id)
        return user.model_copy()

    def update_in_place(self, user: User) -> User:
        with self._lock:
            if user.id not in self._users:
                raise RecordMissingError(f"user {user.id} does not exist")
            if self._email_taken(user.email, exclude_id=user.id):
                raise DuplicateKeyError(f"email {user.email} already exists")
            self._users[user.id] = user.model_copy()
        return user.model_copy()

    def find_and_delete(self, criteria: Mapping[str, str]) -> User | None:
        check_filter(criteria)
        with self._lock:
            for user_id, user in self._users.items():
                if self._matches(user, criteria):
                    return self._users.pop(user_id)
        return None

    def find_all(self) -> list[User]:
        with self._lock:
            return [user.model_copy() for user in self._users.values()]

    def close(self) -> None:
        with self._lock:
            self._users.clear()
