"""Common services package."""

from users_common.services.user_service import UserService
from users_common.services.user_store import InMemoryUserStore, UserStore
from users_common.services.validation import ValidationMode, validate_user

__all__ = [
    "InMemoryUserStore",
    "UserService",
    "UserStore",
    "ValidationMode",
    "validate_user",
]
