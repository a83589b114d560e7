"""Pytest configuration and fixtures."""

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from users_api.config import Settings
from users_api.main import create_app
from users_common.config.store_config import StoreConfig
from users_common.services.user_service import UserService
from users_common.services.user_store import InMemoryUserStore


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests that need no external services")
    config.addinivalue_line("markers", "integration: marks tests that need a real Cosmos DB account")


class FakeClock:
    """Clock that advances one second every time it is read."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


@pytest.fixture
def store() -> InMemoryUserStore:
    """Create an empty in-memory user store."""
    return InMemoryUserStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def service(store: InMemoryUserStore, clock: FakeClock) -> UserService:
    """Create a UserService over the in-memory store."""
    return UserService(store, clock=clock)


@pytest.fixture
def settings() -> Settings:
    return Settings(environment="test", log_level="warning")


@pytest.fixture
def app(settings: Settings):
    """Create an application backed by the in-memory store."""
    return create_app(settings, StoreConfig(user_store_backend="memory"))


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    """Create a FastAPI test client with the lifespan running."""
    with TestClient(app) as test_client:
        yield test_client
