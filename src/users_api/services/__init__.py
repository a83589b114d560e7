"""Service initialization and dependency injection."""

from fastapi import Request
from users_common.services.user_service import UserService


def get_user_service(request: Request) -> UserService:
    """Get the UserService opened by the application lifespan.

    Args:
        request: Incoming request

    Returns:
        UserService instance bound to the open store
    """
    return request.app.state.user_service
