"""Field validation for user records.

These checks are pure functions with no storage access, so the same rules
serve the create path and the update/patch path. ``validate_user`` reports
only the first violation it finds: required fields first (create mode
only), then name, email and age formats in that order.
"""

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

MAX_NAME_LENGTH = 100
MIN_AGE = 1
MAX_AGE = 149

# Liberal local@domain.tld shape, not full RFC 5321.
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
USER_ID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)

NAME_REQUIRED = "Name is required"
EMAIL_REQUIRED = "Email is required"
AGE_REQUIRED = "Age is required"
INVALID_NAME = f"Name must be a non-empty string (max {MAX_NAME_LENGTH} chars)"
INVALID_EMAIL = "Invalid email format"
INVALID_AGE = f"Age must be a number between {MIN_AGE} and {MAX_AGE}"


class ValidationMode(str, Enum):
    """Whether every field must be present or only supplied ones are checked."""

    CREATE = "create"
    PATCH = "patch"


def is_valid_name(name: Any) -> bool:
    return isinstance(name, str) and len(name.strip()) > 0 and len(name) <= MAX_NAME_LENGTH


def is_valid_email(email: Any) -> bool:
    return isinstance(email, str) and EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_age(age: Any) -> bool:
    # bool is an int subclass but never a valid age; JSON 25.0 counts as 25
    if isinstance(age, bool):
        return False
    if isinstance(age, float):
        if not age.is_integer():
            return False
    elif not isinstance(age, int):
        return False
    return MIN_AGE <= age <= MAX_AGE


def is_valid_user_id(user_id: Any) -> bool:
    """Check a user ID has the 8-4-4-4-12 hex grouping, in any case."""
    return isinstance(user_id, str) and USER_ID_PATTERN.fullmatch(user_id) is not None


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def validate_user(fields: Mapping[str, Any], mode: ValidationMode = ValidationMode.CREATE) -> str | None:
    """Validate candidate user fields.

    Args:
        fields: Supplied fields; only ``name``, ``email`` and ``age`` are
            inspected, and a key that is absent counts as not supplied.
        mode: ``CREATE`` requires all three fields, ``PATCH`` checks only
            the supplied ones.

    Returns:
        The first violation message, or None when the fields are valid
    """
    if mode is ValidationMode.CREATE:
        if _is_missing(fields.get("name")):
            return NAME_REQUIRED
        if _is_missing(fields.get("email")):
            return EMAIL_REQUIRED
        # Zero age counts as not given
        if _is_missing(fields.get("age")) or fields.get("age") == 0:
            return AGE_REQUIRED

    if "name" in fields and not is_valid_name(fields["name"]):
        return INVALID_NAME
    if "email" in fields and not is_valid_email(fields["email"]):
        return INVALID_EMAIL
    if "age" in fields and not is_valid_age(fields["age"]):
        return INVALID_AGE

    return None
