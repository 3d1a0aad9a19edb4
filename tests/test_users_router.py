"""HTTP tests for the /users routes and the error translator."""

from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from user_directory.api.v1.services import get_user_service
from user_directory.main import app


def enroll(client: TestClient, name: str, email: str, roles=("ROLE_USER",)) -> dict:
    response = client.post("/users/enroll", json={"name": name, "email": email, "roles": list(roles)})
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateUser:

    def test_add_user_success(self, client, user_payload):
        response = client.post("/users/enroll", json=user_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["id"] is not None
        assert body["email"] == "john.doe@example.com"
        assert body["roles"] == ["ROLE_USER"]

    def test_missing_email_is_bad_request(self, client, user_payload):
        user_payload["email"] = None

        response = client.post("/users/enroll", json=user_payload)

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid user"

    def test_empty_roles_is_bad_request(self, client, user_payload):
        user_payload["roles"] = []

        response = client.post("/users/enroll", json=user_payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid user", "details": "User must have at least one role."}

    def test_duplicate_email_is_bad_request(self, client, user_payload):
        client.post("/users/enroll", json=user_payload)

        response = client.post("/users/enroll", json={**user_payload, "name": "Someone Else"})

        assert response.status_code == 400
        assert response.json()["details"] == "A user with this email already exists."

    def test_malformed_body_is_illegal_argument(self, client):
        response = client.post(
            "/users/enroll", content="not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Illegal argument"


class TestUpdateUser:

    def test_update_user_success(self, client):
        created = enroll(client, "Jane Doe", "jane.doe@example.com")

        response = client.put(
            f"/users/edit/{created['id']}",
            json={"id": created["id"], "name": "Jane Smith", "email": "jane.smith@example.com",
                  "roles": created["roles"]},
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Jane Smith"
        assert response.json()["email"] == "jane.smith@example.com"

    def test_update_keeping_own_email(self, client):
        created = enroll(client, "Jane Doe", "jane.doe@example.com")

        response = client.put(
            f"/users/edit/{created['id']}",
            json={"name": "Jane D.", "email": "jane.doe@example.com", "roles": ["ROLE_ADMIN"]},
        )

        assert response.status_code == 200
        assert response.json()["roles"] == ["ROLE_ADMIN"]

    def test_update_to_taken_email_is_bad_request(self, client):
        enroll(client, "A", "a@example.com")
        b = enroll(client, "B", "b@example.com")

        response = client.put(
            f"/users/edit/{b['id']}", json={"name": "B", "email": "a@example.com", "roles": ["ROLE_USER"]}
        )

        assert response.status_code == 400

    def test_update_unknown_user_is_not_found(self, client):
        response = client.put(
            "/users/edit/999",
            json={"id": 999, "name": "Non Existent", "email": "non.existent@example.com", "roles": ["ROLE_USER"]},
        )

        assert response.status_code == 404
        assert "User with ID 999 not found." in response.text
        assert response.json()["error"] == "User not found"

    def test_non_integer_id_is_illegal_argument(self, client, user_payload):
        response = client.put("/users/edit/abc", json=user_payload)

        assert response.status_code == 400
        assert response.json()["error"] == "Illegal argument"


class TestDeleteUser:

    def test_delete_user_success(self, client):
        created = enroll(client, "Delete Me", "delete.me@example.com")

        response = client.delete(f"/users/{created['id']}")

        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"/users/{created['id']}").status_code == 404

    def test_delete_unknown_user_is_not_found(self, client):
        response = client.delete("/users/999")

        assert response.status_code == 404
        assert response.json()["details"] == "User with ID 999 not found."


class TestReadUsers:

    def test_list_empty(self, client):
        response = client.get("/users")

        assert response.status_code == 200
        assert response.json() == []

    def test_list_users(self, client):
        enroll(client, "User One", "user.one@example.com")
        enroll(client, "User Two", "user.two@example.com", roles=("ROLE_ADMIN",))

        response = client.get("/users")

        assert response.status_code == 200
        assert [user["email"] for user in response.json()] == ["user.one@example.com", "user.two@example.com"]

    def test_get_user_by_id(self, client):
        created = enroll(client, "By Id", "by.id@example.com")

        response = client.get(f"/users/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_get_unknown_user_by_id(self, client):
        response = client.get("/users/999")

        assert response.status_code == 404
        assert response.json()["details"] == "User with ID 999 not found."

    def test_find_user_by_name(self, client):
        enroll(client, "Search Me", "search.me@example.com")

        response = client.get("/users/search", params={"name": "Search Me"})

        assert response.status_code == 200
        assert response.json()["name"] == "Search Me"

    def test_find_unknown_name_is_not_found(self, client):
        response = client.get("/users/search", params={"name": "Non Existent"})

        assert response.status_code == 404
        assert response.json()["details"] == "User with name 'Non Existent' not found."

    def test_search_without_name_is_illegal_argument(self, client):
        response = client.get("/users/search")

        assert response.status_code == 400


class TestIdRange:
    """Ids beyond the 64-bit id column are bad input, not server errors."""

    TOO_LARGE = 9223372036854775808

    def test_get_out_of_range_id(self, client):
        response = client.get(f"/users/{self.TOO_LARGE}")

        assert response.status_code == 400
        assert response.json()["error"] == "Illegal argument"

    def test_delete_out_of_range_id(self, client):
        response = client.delete(f"/users/{self.TOO_LARGE}")

        assert response.status_code == 400
        assert response.json()["error"] == "Illegal argument"

    def test_update_out_of_range_id(self, client, user_payload):
        response = client.put(f"/users/edit/{self.TOO_LARGE}", json=user_payload)

        assert response.status_code == 400
        assert response.json()["error"] == "Illegal argument"

    def test_largest_id_is_not_found(self, client):
        response = client.get(f"/users/{self.TOO_LARGE - 1}")

        assert response.status_code == 404
        assert response.json()["details"] == f"User with ID {self.TOO_LARGE - 1} not found."


class TestErrorTranslation:

    def test_unexpected_error_is_internal_server_error(self, client):
        failing_service = AsyncMock()
        failing_service.get_all_users.side_effect = RuntimeError("database exploded")
        app.dependency_overrides[get_user_service] = lambda: failing_service

        response = TestClient(app, raise_server_exceptions=False).get("/users")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "details": "An unexpected error occurred."}

    def test_value_error_is_illegal_argument(self, client):
        failing_service = AsyncMock()
        failing_service.get_all_users.side_effect = ValueError("bad input")
        app.dependency_overrides[get_user_service] = lambda: failing_service

        response = client.get("/users")

        assert response.status_code == 400
        assert response.json() == {"error": "Illegal argument", "details": "bad input"}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
