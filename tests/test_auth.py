# ==============================================================================
# AUTH ENDPOINT TESTS
# ==============================================================================
# Tests for register, login, current user and Bearer token handling
# ==============================================================================

from datetime import timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.conftest import bearer, register_user


def _registration() -> dict:
    suffix = uuid4().hex[:8]
    return {
        "email": f"user_{suffix}@shoppy.io",
        "username": f"user_{suffix}",
        "password": "secret123",
    }


class TestAuthRegister:
    """Tests for user registration endpoint."""

    @pytest.mark.asyncio
    async def test_register_success(self, client: AsyncClient):
        payload = _registration()
        response = await client.post("/api/auth/register", json=payload)

        assert response.status_code == 201
        data = response.json()

        assert data["success"] is True
        user = data["data"]["user"]
        assert user["email"] == payload["email"]
        assert user["username"] == payload["username"]
        assert user["sensayUserId"] is None
        assert "createdAt" in user
        assert "passwordHash" not in user
        assert data["data"]["token"]

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client: AsyncClient):
        payload = _registration()
        first = await client.post("/api/auth/register", json=payload)
        assert first.status_code == 201

        duplicate = {**payload, "username": "someone_else"}
        response = await client.post("/api/auth/register", json=duplicate)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "User already exists with this email or username"
        )

    @pytest.mark.asyncio
    async def test_register_duplicate_username(self, client: AsyncClient):
        payload = _registration()
        await client.post("/api/auth/register", json=payload)

        duplicate = {**payload, "email": f"other_{uuid4().hex[:6]}@shoppy.io"}
        response = await client.post("/api/auth/register", json=duplicate)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_register_missing_fields(self, client: AsyncClient):
        response = await client.post("/api/auth/register", json={"email": "a@shoppy.io"})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "Email, username, and password are required"
        )

    @pytest.mark.asyncio
    async def test_register_short_password(self, client: AsyncClient):
        payload = {**_registration(), "password": "12345"}
        response = await client.post("/api/auth/register", json=payload)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Password must be at least 6 characters"

    @pytest.mark.asyncio
    async def test_register_invalid_email(self, client: AsyncClient):
        payload = {**_registration(), "email": "invalid-email"}
        response = await client.post("/api/auth/register", json=payload)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BAD_REQUEST"


class TestAuthLogin:
    """Tests for user login endpoint."""

    @pytest.mark.asyncio
    async def test_login_with_email(self, client: AsyncClient):
        registered = await register_user(client)

        response = await client.post(
            "/api/auth/login",
            json={
                "emailOrUsername": registered["user"]["email"],
                "password": registered["password"],
            },
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["id"] == registered["user"]["id"]
        assert data["token"]

    @pytest.mark.asyncio
    async def test_login_with_username(self, client: AsyncClient):
        registered = await register_user(client)

        response = await client.post(
            "/api/auth/login",
            json={
                "emailOrUsername": registered["user"]["username"],
                "password": registered["password"],
            },
        )

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient):
        registered = await register_user(client)

        response = await client.post(
            "/api/auth/login",
            json={"emailOrUsername": registered["user"]["email"], "password": "wrong-one"},
        )

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid password"

    @pytest.mark.asyncio
    async def test_login_unknown_user(self, client: AsyncClient):
        response = await client.post(
            "/api/auth/login",
            json={"emailOrUsername": "nobody@shoppy.io", "password": "secret123"},
        )

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "User not found"

    @pytest.mark.asyncio
    async def test_login_missing_fields(self, client: AsyncClient):
        response = await client.post("/api/auth/login", json={"emailOrUsername": "x"})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == (
            "Email/username and password are required"
        )


class TestCurrentUser:
    """Tests for the Bearer-protected profile endpoint."""

    @pytest.mark.asyncio
    async def test_me(self, auth_client):
        client, user = auth_client

        response = await client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json()["data"]["user"]["id"] == user["id"]

    @pytest.mark.asyncio
    async def test_missing_token(self, client: AsyncClient):
        response = await client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["error"]["message"] == "Access token required"

    @pytest.mark.asyncio
    async def test_invalid_token(self, client: AsyncClient):
        response = await client.get("/api/auth/me", headers=bearer("not-a-jwt"))

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid token"

    @pytest.mark.asyncio
    async def test_expired_token(self, client: AsyncClient):
        from shoppy.core.security import create_access_token

        registered = await register_user(client)
        token = create_access_token(
            subject=registered["user"]["id"],
            expires_delta=timedelta(seconds=-10),
        )

        response = await client.get("/api/auth/me", headers=bearer(token))

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid token"

    @pytest.mark.asyncio
    async def test_token_for_deleted_user(self, client: AsyncClient):
        from shoppy.core.security import create_access_token

        token = create_access_token(subject=str(uuid4()))
        response = await client.get("/api/auth/me", headers=bearer(token))

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "User not found"
