"""API tests for the current user's profile and password."""

import pytest

from tests.conftest import TEST_PASSWORD


class TestProfile:
    def test_get_profile(self, test_client, register_user):
        headers, user = register_user("me@example.com", name="Me")

        response = test_client.get("/api/users/me", headers=headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == user["id"]
        assert data["email"] == "me@example.com"
        assert data["name"] == "Me"
        assert data["created_at"] is not None
        assert "password_hash" not in data

    def test_update_profile(self, test_client, register_user):
        headers, _ = register_user("update@example.com", name="Before")

        response = test_client.put(
            "/api/users/me",
            headers=headers,
            json={"name": "After", "avatar": "https://example.com/a.png"},
        )

        assert response.status_code == 200
        assert response.json()["name"] == "After"
        assert response.json()["avatar"] == "https://example.com/a.png"
        assert response.json()["email"] == "update@example.com"

    def test_change_email_then_login_with_it(self, test_client, register_user):
        headers, _ = register_user("first@example.com")

        response = test_client.put("/api/users/me", headers=headers, json={"email": "Second@Example.com"})

        assert response.status_code == 200
        assert response.json()["email"] == "second@example.com"
        login = test_client.post("/api/auth/login", json={"email": "second@example.com", "password": TEST_PASSWORD})
        assert login.status_code == 200

    def test_email_taken_by_someone_else(self, test_client, register_user):
        register_user("taken@example.com")
        headers, _ = register_user("mine@example.com")

        response = test_client.put("/api/users/me", headers=headers, json={"email": "taken@example.com"})

        assert response.status_code == 400
        assert response.json()["error"] == "duplicate_email"

    @pytest.mark.parametrize("body", [{"name": ""}, {"email": "broken"}, {"password_hash": "x"}])
    def test_invalid_body(self, test_client, register_user, body):
        headers, _ = register_user("invalid@example.com")

        response = test_client.put("/api/users/me", headers=headers, json=body)

        assert response.status_code == 400

    def test_requires_authentication(self, test_client):
        assert test_client.get("/api/users/me").status_code == 401


class TestChangePassword:
    def test_change_password(self, test_client, register_user):
        headers, _ = register_user("pw@example.com")

        response = test_client.put(
            "/api/users/password",
            headers=headers,
            json={"current_password": TEST_PASSWORD, "new_password": "FreshPassword9"},
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Password updated successfully"}
        old = test_client.post("/api/auth/login", json={"email": "pw@example.com", "password": TEST_PASSWORD})
        new = test_client.post("/api/auth/login", json={"email": "pw@example.com", "password": "FreshPassword9"})
        assert old.status_code == 401
        assert new.status_code == 200

    def test_wrong_current_password(self, test_client, register_user):
        headers, _ = register_user("pw2@example.com")

        response = test_client.put(
            "/api/users/password",
            headers=headers,
            json={"current_password": "NotMyPassword", "new_password": "FreshPassword9"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Current password is incorrect"

    def test_new_password_too_short(self, test_client, register_user):
        headers, _ = register_user("pw3@example.com")

        response = test_client.put(
            "/api/users/password",
            headers=headers,
            json={"current_password": TEST_PASSWORD, "new_password": "short"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_failed"
