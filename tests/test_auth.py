import uuid
from datetime import timedelta

from app.core.security import create_access_token, decode_access_token


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.text == "OK"


async def test_register_returns_token_for_new_user(client):
    response = await client.post(
        "/api/auth/register",
        json={"email": "alice@example.com", "password": "TestPassword123!"},
    )
    assert response.status_code == 200
    body = response.json()
    assert decode_access_token(body["token"]) == uuid.UUID(body["user_id"])


async def test_register_duplicate_email_conflicts(client):
    payload = {"email": "bob@example.com", "password": "TestPassword123!"}
    assert (await client.post("/api/auth/register", json=payload)).status_code == 200

    response = await client.post("/api/auth/register", json=payload)
    assert response.status_code == 409
    assert response.json() == {"error": "Email already registered"}


async def test_register_rejects_invalid_payload(client):
    response = await client.post("/api/auth/register", json={"email": "not-an-email", "password": "x"})
    assert response.status_code == 400
    assert "error" in response.json()


async def test_login_success(client):
    payload = {"email": "carol@example.com", "password": "TestPassword123!"}
    registered = (await client.post("/api/auth/register", json=payload)).json()

    response = await client.post("/api/auth/login", json=payload)
    assert response.status_code == 200
    assert response.json()["user_id"] == registered["user_id"]


async def test_login_failures_are_indistinguishable(client):
    await client.post("/api/auth/register", json={"email": "dave@example.com", "password": "TestPassword123!"})

    wrong_password = await client.post(
        "/api/auth/login", json={"email": "dave@example.com", "password": "WrongPassword!"}
    )
    unknown_email = await client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "TestPassword123!"}
    )
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


async def test_protected_route_requires_token(client):
    response = await client.get("/api/accounts")
    assert response.status_code == 401
    assert response.json() == {"error": "Not authenticated"}
    assert response.headers["www-authenticate"] == "Bearer"


async def test_malformed_token_rejected(client):
    response = await client.get("/api/accounts", headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


async def test_expired_token_rejected(client, auth_headers):
    me = await client.get("/api/accounts", headers=auth_headers)
    assert me.status_code == 200

    token = create_access_token(uuid.uuid4(), expires_delta=timedelta(minutes=-5))
    response = await client.get("/api/accounts", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json() == {"error": "Token has expired"}


async def test_token_for_unknown_user_rejected(client):
    token = create_access_token(uuid.uuid4())
    response = await client.get("/api/accounts", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
