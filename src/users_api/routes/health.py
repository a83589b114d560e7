"""Health check routes."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from users_api.config import Settings, get_settings
from users_api.models.health import HealthCheckResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(
    settings: Settings = Depends(get_settings),
) -> HealthCheckResponse:
    """Health check endpoint.

    Returns:
        HealthCheckResponse with status and version information
    """
    return HealthCheckResponse(
        timestamp=datetime.now(UTC),
        version=settings.app_version,
        environment=settings.environment,
    )
