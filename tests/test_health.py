"""Tests for the health check endpoint."""

import pytest
from fastapi.testclient import TestClient


@pytest.mark.unit
def test_health_check(client: TestClient) -> None:
    """Test the health check endpoint returns 200."""
    response = client.get("/health")
    assert response.status_code == 200


@pytest.mark.unit
def test_health_check_response_schema(client: TestClient) -> None:
    """Test the health check endpoint response has correct schema."""
    data = client.get("/health").json()

    assert data["success"] is True
    assert data["message"] == "API is running"
    assert data["status"] == 200
    assert data["environment"] == "test"
    assert isinstance(data["version"], str)
    assert isinstance(data["timestamp"], str)
