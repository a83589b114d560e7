"""Custom exceptions for the user record service."""


class UserServiceError(Exception):
    """Base exception for failures reported back to the caller."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class UserValidationError(UserServiceError):
    """Raised when a submitted field is missing or malformed."""

    status_code = 400
    default_message = "Invalid user data"


class ConflictError(UserServiceError):
    """Raised when another record already uses the email."""

    status_code = 400
    default_message = "Email already exists"


class MalformedIdentifierError(UserServiceError):
    """Raised when a user ID does not have the UUID shape."""

    status_code = 400
    default_message = "Invalid user ID format"


class NotFoundError(UserServiceError):
    """Raised when no record matches the user ID."""

    status_code = 404
    default_message = "User not found"


class StoreError(Exception):
    """Base exception for document store failures."""


class DuplicateKeyError(StoreError):
    """Raised by a store when a write would break a uniqueness constraint."""


class RecordMissingError(StoreError):
    """Raised by a store when the record to update no longer exists."""
