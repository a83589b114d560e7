"""User model for the Users API."""

from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, Field


class User(BaseModel):
    """User entity model."""

    id: str = Field(..., description="Unique identifier for the user (UUID4)")
    name: str = Field(..., description="Full name of the user, trimmed")
    email: str = Field(..., description="Email address of the user, lowercase")
    age: int = Field(..., description="Age of the user in years")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp (UTC)")
    updated_at: datetime = Field(..., alias="updatedAt", description="Last mutation timestamp (UTC)")

    class Config:
        """Pydantic config."""

        populate_by_name = True
        json_schema_extra: ClassVar[dict] = {
            "example": {
                "id": "3f2b8c1e-7d4a-4e8b-9c1f-2a6d5e4b3c21",
                "name": "John Doe",
                "email": "john@example.com",
                "age": 25,
                "createdAt": "2024-01-01T12:00:00Z",
                "updatedAt": "2024-01-01T12:00:00Z",
            }
        }
