"""Common models package."""

from users_common.models.user import User

__all__ = ["User"]
