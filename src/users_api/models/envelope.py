"""Response envelope and request body models."""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict
from users_common.models.user import User


class Envelope(BaseModel):
    """Uniform wrapper for every API response."""

    success: bool
    message: str | None = None
    error: str | None = None
    data: User | list[User] | None = None
    count: int | None = None
    status: int

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {
            "example": {
                "success": True,
                "message": "User retrieved successfully",
                "data": {
                    "id": "3f2b8c1e-7d4a-4e8b-9c1f-2a6d5e4b3c21",
                    "name": "John Doe",
                    "email": "john@example.com",
                    "age": 25,
                    "createdAt": "2024-01-01T12:00:00Z",
                    "updatedAt": "2024-01-01T12:00:00Z",
                },
                "status": 200,
            }
        }


def error_envelope(status_code: int, error: str) -> dict[str, Any]:
    """Build the JSON body of an error response."""
    return Envelope(success=False, error=error, status=status_code).model_dump(exclude_none=True)


class UserFields(BaseModel):
    """Request body for create, replace and patch.

    Values are kept exactly as sent so the validator sees the client's
    types; fields the client leaves out are not in ``model_fields_set``.
    """

    model_config = ConfigDict(extra="ignore")

    name: Any = None
    email: Any = None
    age: Any = None

    def supplied(self) -> dict[str, Any]:
        """Return only the fields present in the request body."""
        return self.model_dump(exclude_unset=True)
