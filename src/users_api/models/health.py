"""Health check response models."""

from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel


class HealthCheckResponse(BaseModel):
    """Health check response model."""

    success: bool = True
    message: str = "API is running"
    status: int = 200
    timestamp: datetime
    version: str
    environment: str | None = None

    class Config:
        """Pydantic config."""

        json_schema_extra: ClassVar[dict] = {
            "example": {
                "success": True,
                "message": "API is running",
                "status": 200,
                "timestamp": "2024-01-01T12:00:00Z",
                "version": "1.0.0",
                "environment": "development",
            }
        }
