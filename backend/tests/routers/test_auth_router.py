"""Tests for the authentication API."""

from tomanfolio.config import settings


class TestRegister:
    def test_register_returns_token(self, client):
        response = client.post(
            "/api/auth/register",
            json={"username": "Carol_1", "password": "secret123", "display_name": "Carol"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["user"]["username"] == "carol_1"
        assert body["user"]["is_admin"] is False

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
        assert me.json()["display_name"] == "Carol"

    def test_duplicate_username(self, client, user):
        response = client.post("/api/auth/register", json={"username": "ALICE", "password": "secret123"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Username already taken"

    def test_invalid_payload(self, client):
        assert client.post("/api/auth/register", json={"username": "a b", "password": "secret123"}).status_code == 422
        assert client.post("/api/auth/register", json={"username": "carol", "password": "123"}).status_code == 422


class TestLogin:
    def test_login(self, client, user):
        response = client.post("/api/auth/login", json={"username": "alice", "password": "secret123"})

        assert response.status_code == 200
        assert response.json()["user"]["id"] == user.id

    def test_login_is_case_insensitive(self, client, user):
        response = client.post("/api/auth/login", json={"username": "Alice", "password": "secret123"})
        assert response.status_code == 200

    def test_wrong_password(self, client, user):
        response = client.post("/api/auth/login", json={"username": "alice", "password": "wrong-pass"})
        assert response.status_code == 401

    def test_unknown_user(self, client):
        response = client.post("/api/auth/login", json={"username": "nobody", "password": "secret123"})
        assert response.status_code == 401

    def test_seeded_admin_can_log_in(self, client):
        response = client.post(
            "/api/auth/login",
            json={"username": settings.admin_username, "password": settings.admin_password},
        )

        assert response.status_code == 200
        assert response.json()["user"]["is_admin"] is True

    def test_rate_limited(self, client, user):
        statuses = [
            client.post("/api/auth/login", json={"username": "alice", "password": "wrong-pass"}).status_code
            for _ in range(6)
        ]
        assert statuses == [401] * 5 + [429]


class TestMe:
    def test_me(self, client, user, user_headers):
        response = client.get("/api/auth/me", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["username"] == "alice"

    def test_missing_token(self, client):
        assert client.get("/api/auth/me").status_code == 401

    def test_invalid_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401
