from sqlalchemy import func, select

from app.core.config import settings
from app.core.security import decode_access_token
from app.models import User


async def test_register_returns_token_for_new_user(client):
    response = await client.post(
        "/auth/register",
        json={"email": "Anna@Example.se", "password": "secret1", "full_name": "Anna A"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert "timestamp" in body
    assert "error" not in body

    data = body["data"]
    assert data["token_type"] == "Bearer"
    assert data["expires_in"] == 86400
    assert data["user"]["email"] == "anna@example.se"
    assert data["user"]["full_name"] == "Anna A"
    assert "password_hash" not in data["user"]

    claims = decode_access_token(data["access_token"])
    assert claims.user_id == data["user"]["id"]
    assert claims.email == "anna@example.se"


async def test_register_then_login_yields_same_identity(client, register_user):
    _, user = await register_user("a@b.se", "secret1")

    response = await client.post(
        "/auth/login", json={"email": "A@B.se", "password": "secret1"}
    )

    assert response.status_code == 200
    claims = decode_access_token(response.json()["data"]["access_token"])
    assert claims.user_id == user["id"]
    assert claims.email == "a@b.se"


async def test_register_duplicate_email_is_conflict(client, register_user):
    await register_user("a@b.se")

    response = await client.post(
        "/auth/register", json={"email": "A@B.SE", "password": "another1"}
    )

    assert response.status_code == 409
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "User with this email already exists"


async def test_register_requires_email_and_password(client):
    response = await client.post("/auth/register", json={"email": "a@b.se"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "password" in body["error"]


async def test_register_rejects_malformed_email(client):
    response = await client.post(
        "/auth/register", json={"email": "not-an-email", "password": "secret1"}
    )

    assert response.status_code == 400


async def test_wrong_password_and_unknown_email_fail_identically(client, register_user):
    await register_user("a@b.se", "secret1")

    wrong_password = await client.post(
        "/auth/login", json={"email": "a@b.se", "password": "wrong!!"}
    )
    unknown_email = await client.post(
        "/auth/login", json={"email": "nobody@b.se", "password": "secret1"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json()["error"] == unknown_email.json()["error"]
    assert wrong_password.json()["error"] == "Invalid email or password"


async def test_login_requires_password(client):
    response = await client.post("/auth/login", json={"email": "a@b.se"})

    assert response.status_code == 400


async def test_me_returns_profile(client, register_user):
    headers, user = await register_user("a@b.se")

    response = await client.get("/auth/me", headers=headers)

    assert response.status_code == 200
    assert response.json()["data"] == {"id": user["id"], "email": "a@b.se", "full_name": None}


async def test_protected_route_without_token_is_unauthenticated(client):
    response = await client.get("/admin/facilities")

    assert response.status_code == 401
    assert response.json()["error"] == "Access token required"


async def test_protected_route_with_invalid_token_is_rejected(client):
    response = await client.get(
        "/admin/facilities", headers={"Authorization": "Bearer not.a.token"}
    )

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid or expired token"


async def test_missing_secret_fails_registration_without_storing_user(
    client, database, monkeypatch
):
    monkeypatch.setattr(settings, "SECRET_KEY", "")

    response = await client.post(
        "/auth/register", json={"email": "a@b.se", "password": "secret1"}
    )

    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"

    async with database.session() as s:
        count = await s.scalar(select(func.count()).select_from(User))
    assert count == 0


async def test_register_rejects_password_longer_than_bcrypt_reads(client):
    # 40 characters but 80 UTF-8 bytes
    response = await client.post(
        "/auth/register", json={"email": "a@b.se", "password": "å" * 40}
    )

    assert response.status_code == 400
    assert "password" in response.json()["error"]


async def test_login_with_overlong_password_sharing_prefix_fails(client, register_user):
    await register_user("a@b.se", "a" * 72)

    response = await client.post(
        "/auth/login", json={"email": "a@b.se", "password": "a" * 72 + "WRONG"}
    )

    assert response.status_code == 401


async def test_unknown_email_still_pays_for_a_hash_check(client, monkeypatch):
    calls = []
    monkeypatch.setattr(
        "app.services.user_service.dummy_verify_password",
        lambda: calls.append("dummy") or False,
    )

    response = await client.post(
        "/auth/login", json={"email": "nobody@b.se", "password": "secret1"}
    )

    assert response.status_code == 401
    assert calls == ["dummy"]
