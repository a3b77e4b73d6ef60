"""
Integration Tests for /auth and /users
"""
import pytest
from httpx import AsyncClient

from plotdesk.core.constants import Messages
from plotdesk.schemas import User

from conftest import OWNER_EMAIL, OWNER_PASSWORD, USER_PASSWORD


@pytest.mark.asyncio
async def test_health(client: AsyncClient, store):
    response = await client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["storage"] == store.backend
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, owner):
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": OWNER_EMAIL, "password": OWNER_PASSWORD}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["tokenType"] == "bearer"
    assert data["user"] == {"id": owner.id, "email": OWNER_EMAIL, "role": "Owner"}

    me = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == owner.id


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(client: AsyncClient, owner):
    unknown = await client.post(
        "/api/v1/auth/login",
        json={"email": "nobody@example.com", "password": OWNER_PASSWORD}
    )
    wrong = await client.post(
        "/api/v1/auth/login",
        json={"email": OWNER_EMAIL, "password": "wrongpassword"}
    )

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()
    assert unknown.json()["message"] == Messages.INVALID_CREDENTIALS


@pytest.mark.asyncio
async def test_register(client: AsyncClient, store):
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "newbie@example.com", "password": USER_PASSWORD}
    )

    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["token"]
    assert (await store.get(User, data["id"])).email == "newbie@example.com"


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, regular_user):
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": regular_user.email, "password": USER_PASSWORD}
    )

    assert response.status_code == 409
    assert response.json()["message"] == Messages.USER_EXISTS


@pytest.mark.asyncio
async def test_register_invalid(client: AsyncClient):
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "not-an-email", "password": "short"}
    )

    assert response.status_code == 422
    data = response.json()
    assert data["success"] is False
    assert set(data["errors"]) == {"email", "password"}


@pytest.mark.asyncio
async def test_unauthorized_access(client: AsyncClient):
    response = await client.get("/api/v1/auth/me")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_invalid_token(client: AsyncClient):
    response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_token_of_deleted_user_stops_working(client: AsyncClient, owner_headers, regular_user, user_headers):
    deleted = await client.delete(f"/api/v1/users/{regular_user.id}", headers=owner_headers)
    assert deleted.status_code == 200

    response = await client.get("/api/v1/auth/me", headers=user_headers)
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_change_password(client: AsyncClient, owner_headers):
    response = await client.post(
        "/api/v1/auth/change-password",
        json={"currentPassword": OWNER_PASSWORD, "newPassword": "ownerpassword456"},
        headers=owner_headers
    )
    assert response.status_code == 200

    login = await client.post(
        "/api/v1/auth/login",
        json={"email": OWNER_EMAIL, "password": "ownerpassword456"}
    )
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_reset_password_disabled_by_default(client: AsyncClient, regular_user):
    response = await client.post(
        "/api/v1/auth/reset-password",
        json={"email": regular_user.email, "securityAnswer": "x", "newPassword": "brandnewpassword"}
    )
    assert response.status_code == 403


class TestUsersEndpoints:

    @pytest.mark.asyncio
    async def test_owner_lists_users(self, client: AsyncClient, owner_headers, regular_user):
        response = await client.get("/api/v1/users", headers=owner_headers)

        assert response.status_code == 200
        assert {u["email"] for u in response.json()} == {OWNER_EMAIL, regular_user.email}

    @pytest.mark.asyncio
    async def test_plain_user_is_forbidden(self, client: AsyncClient, user_headers):
        response = await client.get("/api/v1/users", headers=user_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == Messages.UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_owner_creates_user(self, client: AsyncClient, owner_headers):
        response = await client.post(
            "/api/v1/users",
            json={"email": "staff@example.com", "password": USER_PASSWORD},
            headers=owner_headers
        )

        assert response.status_code == 201
        assert "token" not in response.json()

    @pytest.mark.asyncio
    async def test_owner_delete_is_a_no_op(self, client: AsyncClient, owner, owner_headers, store):
        response = await client.delete(f"/api/v1/users/{owner.id}", headers=owner_headers)

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["message"] == Messages.OWNER_PROTECTED
        assert await store.get(User, owner.id) == owner

    @pytest.mark.asyncio
    async def test_owner_sets_user_password(self, client: AsyncClient, owner_headers, regular_user):
        response = await client.post(
            f"/api/v1/users/{regular_user.id}/password",
            json={"newPassword": "brandnewpassword"},
            headers=owner_headers
        )
        assert response.status_code == 200

        login = await client.post(
            "/api/v1/auth/login",
            json={"email": regular_user.email, "password": "brandnewpassword"}
        )
        assert login.status_code == 200
