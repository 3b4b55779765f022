import os

# Configure the app for an isolated in-memory database before anything imports settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["RUN_MIGRATIONS"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["PLAID_CLIENT_ID"] = ""
os.environ["PLAID_SECRET"] = ""

import uuid

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select

from app.core.database import AsyncSessionLocal, engine
from app.core.migrations import create_db_and_tables
from app.crud.category import seed_default_categories
from app.main import app
from app.models.category import Category


@pytest.fixture(autouse=True)
async def database():
    await create_db_and_tables()
    async with AsyncSessionLocal() as session:
        await seed_default_categories(session)
    yield
    # Closing the only connection drops the in-memory database
    await engine.dispose()


@pytest.fixture
async def db():
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    async def _register(email=None, password="TestPassword123!"):
        email = email or f"test_{uuid.uuid4().hex[:12]}@example.com"
        response = await client.post("/api/auth/register", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        body = response.json()
        return {"Authorization": f"Bearer {body['token']}"}
    return _register


@pytest.fixture
async def auth_headers(register):
    return await register()


@pytest.fixture
async def other_headers(register):
    return await register()


@pytest.fixture
def create_account(client):
    async def _create(headers, name="Checking", balance=1000.0, account_type="checking"):
        response = await client.post(
            "/api/accounts",
            json={"account_name": name, "account_type": account_type, "balance": balance},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def create_transaction(client):
    async def _create(headers, account_id, amount, tx_date="2024-01-15", description="Purchase", category_id=None):
        payload = {
            "account_id": account_id,
            "date": tx_date,
            "amount": amount,
            "description": description,
        }
        if category_id is not None:
            payload["category_id"] = category_id
        response = await client.post("/api/transactions", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def default_category(db):
    async def _lookup(name):
        result = await db.execute(
            select(Category).where(Category.name == name, Category.is_default.is_(True))
        )
        return str(result.scalar_one().id)
    return _lookup
