"""Tests for the /users endpoints and their response envelopes."""

import uuid

import pytest
from fastapi.testclient import TestClient
from users_common.services.user_service import UserService

JOHN = {"name": "John Doe", "email": "John@Example.com", "age": 25}


def _create(client: TestClient, body: dict = JOHN) -> dict:
    response = client.post("/users", json=body)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


@pytest.mark.unit
def test_create_user_envelope(client: TestClient) -> None:
    response = client.post("/users", json=JOHN)
    assert response.status_code == 201

    body = response.json()
    assert body["success"] is True
    assert body["message"] == "User created successfully"
    assert body["status"] == 201
    assert "error" not in body
    assert "count" not in body

    data = body["data"]
    assert set(data) == {"id", "name", "email", "age", "createdAt", "updatedAt"}
    assert data["email"] == "john@example.com"
    assert data["createdAt"] == data["updatedAt"]


@pytest.mark.unit
def test_create_validation_error_envelope(client: TestClient) -> None:
    response = client.post("/users", json={"name": "John", "age": 25})
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Email is required", "status": 400}


@pytest.mark.unit
def test_create_without_body_reports_missing_name(client: TestClient) -> None:
    response = client.post("/users")
    assert response.status_code == 400
    assert response.json()["error"] == "Name is required"


@pytest.mark.unit
def test_age_is_not_coerced_from_string(client: TestClient) -> None:
    response = client.post("/users", json={**JOHN, "age": "25"})
    assert response.status_code == 400
    assert response.json()["error"] == "Age must be a number between 1 and 149"


@pytest.mark.unit
def test_non_object_body_is_rejected(client: TestClient) -> None:
    response = client.post("/users", json=["John"])
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid request body", "status": 400}


@pytest.mark.unit
def test_duplicate_email_is_rejected(client: TestClient) -> None:
    _create(client)
    response = client.post("/users", json={"name": "Other", "email": "JOHN@EXAMPLE.COM", "age": 50})
    assert response.status_code == 400
    assert response.json()["error"] == "Email already exists"


@pytest.mark.unit
def test_list_users_reports_count(client: TestClient) -> None:
    empty = client.get("/users").json()
    assert empty["data"] == []
    assert empty["count"] == 0

    _create(client)
    _create(client, {"name": "Jane", "email": "jane@example.com", "age": 31})

    body = client.get("/users").json()
    assert body["message"] == "Users retrieved successfully"
    assert body["count"] == 2
    assert [u["email"] for u in body["data"]] == ["john@example.com", "jane@example.com"]


@pytest.mark.unit
def test_get_user(client: TestClient) -> None:
    created = _create(client)
    response = client.get(f"/users/{created['id']}")
    assert response.status_code == 200
    assert response.json()["message"] == "User retrieved successfully"
    assert response.json()["data"] == created


@pytest.mark.unit
@pytest.mark.parametrize("method", ["get", "put", "patch", "delete"])
def test_malformed_id_is_rejected(client: TestClient, method: str) -> None:
    kwargs = {"json": {}} if method in {"put", "patch"} else {}
    response = client.request(method.upper(), "/users/12345", **kwargs)
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid user ID format", "status": 400}


@pytest.mark.unit
def test_unknown_user_is_not_found(client: TestClient) -> None:
    response = client.get(f"/users/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "User not found", "status": 404}


@pytest.mark.unit
def test_put_replaces_fields(client: TestClient) -> None:
    created = _create(client)
    response = client.put(
        f"/users/{created['id']}",
        json={"name": " Johnny ", "email": "Johnny@Example.org", "age": 26},
    )
    assert response.status_code == 200

    body = response.json()
    assert body["message"] == "User updated successfully"
    data = body["data"]
    assert (data["name"], data["email"], data["age"]) == ("Johnny", "johnny@example.org", 26)
    assert data["createdAt"] == created["createdAt"]


@pytest.mark.unit
def test_patch_with_invalid_email(client: TestClient) -> None:
    created = _create(client)
    response = client.patch(f"/users/{created['id']}", json={"email": "nope"})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid email format"


@pytest.mark.unit
def test_patch_ignores_unknown_keys(client: TestClient) -> None:
    created = _create(client)
    response = client.patch(f"/users/{created['id']}", json={"id": "x", "createdAt": "never", "age": 40})
    data = response.json()["data"]
    assert data["id"] == created["id"]
    assert data["createdAt"] == created["createdAt"]
    assert data["age"] == 40


@pytest.mark.unit
def test_delete_twice(client: TestClient) -> None:
    created = _create(client)

    response = client.delete(f"/users/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "User deleted successfully", "status": 200}

    assert client.get(f"/users/{created['id']}").status_code == 404
    assert client.delete(f"/users/{created['id']}").status_code == 404


@pytest.mark.unit
def test_unknown_endpoint(client: TestClient) -> None:
    response = client.get("/nowhere")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Endpoint not found", "status": 404}


@pytest.mark.unit
def test_unexpected_failure_hides_details(app, monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(self: UserService) -> list:
        raise RuntimeError("database password is hunter2")

    monkeypatch.setattr(UserService, "list_users", boom)

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/users")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error", "status": 500}


@pytest.mark.unit
def test_zero_age_on_create_is_reported_as_missing(client: TestClient) -> None:
    response = client.post("/users", json={**JOHN, "age": 0})
    assert response.status_code == 400
    assert response.json()["error"] == "Age is required"


@pytest.mark.unit
def test_integral_float_age_is_accepted(client: TestClient) -> None:
    response = client.post("/users", json={**JOHN, "age": 25.0})
    assert response.status_code == 201
    assert response.json()["data"]["age"] == 25
