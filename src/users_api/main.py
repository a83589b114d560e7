"""Main FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from users_common.config.store_config import StoreConfig, get_store_config
from users_common.exceptions import UserServiceError
from users_common.services.user_service import UserService

from users_api.config import Settings, get_settings
from users_api.middleware import get_cors_headers, setup_middleware
from users_api.models.envelope import error_envelope
from users_api.routes import api_router
from users_api.services.store_init import open_user_store

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_envelope(status_code, error), headers=headers)


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Render every failure as an error envelope."""

    @app.exception_handler(UserServiceError)
    async def user_service_error_handler(request: Request, exc: UserServiceError) -> JSONResponse:
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
        return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return _error_response(exc.status_code, "Endpoint not found")
        return _error_response(exc.status_code, str(exc.detail), headers=exc.headers)

    # Runs outside the CORS middleware, so CORS headers are added here
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
        origin = request.headers.get("origin")
        cors_headers = get_cors_headers(origin, ui_url=settings.ui_url, environment=settings.environment)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", headers=cors_headers)


def create_app(settings: Settings | None = None, store_config: StoreConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The user store is opened when the application starts and closed when
    it stops; the UserService bound to it lives on ``app.state``.

    Args:
        settings: Application settings. If None, will load from environment.
        store_config: Store configuration. If None, will load from environment.

    Returns:
        A configured FastAPI application instance
    """
    settings = settings or get_settings()
    store_config = store_config or get_store_config()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Handle application lifespan events."""
        # Startup
        logger.info("%s v%s starting", settings.app_name, settings.app_version)
        logger.info("Environment: %s", settings.environment)
        store = open_user_store(store_config)
        app.state.user_service = UserService(store)
        logger.info("%s ready on %s:%s", settings.app_name, settings.api_host, settings.api_port)

        try:
            yield
        finally:
            # Shutdown
            store.close()
            logger.info("%s shutting down", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        description="Users CRUD API - FastAPI service over a document store",
        version=settings.app_version,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.dependency_overrides[get_settings] = lambda: settings

    # Setup middleware (must be before exception handlers)
    setup_middleware(app, ui_url=settings.ui_url, environment=settings.environment)
    register_exception_handlers(app, settings)

    app.include_router(api_router)
    return app


# Create the application instance at import time for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "users_api.main:app",
        host=_settings.api_host,
        port=_settings.api_port,
        reload=True,
        log_level=_settings.log_level.lower(),
    )
