import uuid
from datetime import date, timedelta

import pytest
from sqlalchemy import select

from app.models.budget import Budget
from app.utils.analytics import calculate_budget_performance


@pytest.fixture
def create_budget(client):
    async def _create(headers, category_id, amount=100.0, start_date="2024-01-01", end_date="2024-01-31"):
        payload = {"category_id": category_id, "amount": amount, "start_date": start_date}
        if end_date is not None:
            payload["end_date"] = end_date
        response = await client.post("/api/budgets", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _create


async def test_budget_crud(client, auth_headers, default_category, create_budget):
    groceries = await default_category("Groceries")
    budget = await create_budget(auth_headers, groceries, amount=400.0)
    assert budget["period"] == "monthly"

    listing = await client.get("/api/budgets", headers=auth_headers)
    assert [b["id"] for b in listing.json()] == [budget["id"]]

    updated = await client.put(
        f"/api/budgets/{budget['id']}", json={"amount": 450.0}, headers=auth_headers
    )
    assert updated.status_code == 200
    assert updated.json()["amount"] == 450.0
    assert updated.json()["end_date"] == "2024-01-31"

    assert (await client.delete(f"/api/budgets/{budget['id']}", headers=auth_headers)).status_code == 204
    assert (await client.get(f"/api/budgets/{budget['id']}", headers=auth_headers)).status_code == 404


async def test_budget_requires_visible_category(client, auth_headers, other_headers):
    private = (await client.post("/api/categories", json={"name": "Hobby"}, headers=other_headers)).json()

    response = await client.post(
        "/api/budgets",
        json={"category_id": private["id"], "amount": 50, "start_date": "2024-01-01"},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid category"}


async def test_budget_end_before_start_is_rejected(client, auth_headers, default_category):
    groceries = await default_category("Groceries")
    response = await client.post(
        "/api/budgets",
        json={"category_id": groceries, "amount": 50, "start_date": "2024-02-01", "end_date": "2024-01-01"},
        headers=auth_headers,
    )
    assert response.status_code == 400


async def test_update_cannot_move_end_before_start(client, auth_headers, default_category, create_budget):
    budget = await create_budget(
        auth_headers, await default_category("Groceries"), start_date="2024-02-01", end_date="2024-02-28"
    )

    response = await client.put(
        f"/api/budgets/{budget['id']}", json={"end_date": "2024-01-01"}, headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json() == {"error": "end_date must not be before start_date"}

    unchanged = await client.get(f"/api/budgets/{budget['id']}", headers=auth_headers)
    assert unchanged.json()["end_date"] == "2024-02-28"


async def test_open_ended_budget_counts_spending_up_to_today(
    client, auth_headers, create_account, create_transaction, default_category, create_budget
):
    account = await create_account(auth_headers)
    groceries = await default_category("Groceries")
    today = date.today()
    budget = await create_budget(
        auth_headers, groceries, amount=100.0,
        start_date=(today - timedelta(days=20)).isoformat(), end_date=None,
    )
    assert budget["end_date"] is None

    await create_transaction(
        auth_headers, account["id"], -25, tx_date=(today - timedelta(days=10)).isoformat(), category_id=groceries
    )
    await create_transaction(auth_headers, account["id"], -15, tx_date=today.isoformat(), category_id=groceries)
    # Dated after today, so not yet part of the budget
    await create_transaction(
        auth_headers, account["id"], -60, tx_date=(today + timedelta(days=3)).isoformat(), category_id=groceries
    )

    body = (await client.get(f"/api/budgets/{budget['id']}/performance", headers=auth_headers)).json()
    assert body["spent"] == pytest.approx(40.0)
    assert body["remaining"] == pytest.approx(60.0)


async def test_open_ended_budget_uses_given_today(
    db, auth_headers, create_account, create_transaction, default_category, create_budget
):
    account = await create_account(auth_headers)
    groceries = await default_category("Groceries")
    created = await create_budget(auth_headers, groceries, amount=50.0, start_date="2024-03-01", end_date=None)
    await create_transaction(auth_headers, account["id"], -20, tx_date="2024-03-05", category_id=groceries)
    await create_transaction(auth_headers, account["id"], -30, tx_date="2024-03-20", category_id=groceries)

    budget = (await db.execute(select(Budget).where(Budget.id == uuid.UUID(created["id"])))).scalar_one()
    performance = await calculate_budget_performance(budget, db, today=date(2024, 3, 10))
    assert performance["spent"] == pytest.approx(20.0)
    assert performance["percentage"] == pytest.approx(40.0)


async def test_foreign_budget_is_hidden(client, auth_headers, other_headers, default_category, create_budget):
    budget = await create_budget(auth_headers, await default_category("Groceries"))

    assert (await client.get(f"/api/budgets/{budget['id']}", headers=other_headers)).status_code == 404
    assert (await client.get(f"/api/budgets/{budget['id']}/performance", headers=other_headers)).status_code == 404
    assert (await client.delete(f"/api/budgets/{budget['id']}", headers=other_headers)).status_code == 204
    assert (await client.get(f"/api/budgets/{budget['id']}", headers=auth_headers)).status_code == 200


async def test_performance_counts_outflows_in_window(
    client, auth_headers, create_account, create_transaction, default_category, create_budget
):
    account = await create_account(auth_headers)
    groceries = await default_category("Groceries")
    dining = await default_category("Dining Out")
    budget = await create_budget(auth_headers, groceries, amount=200.0)

    await create_transaction(auth_headers, account["id"], -50, tx_date="2024-01-05", category_id=groceries)
    await create_transaction(auth_headers, account["id"], -30, tx_date="2024-01-31", category_id=groceries)
    # Outside the window, another category, or an inflow: none count
    await create_transaction(auth_headers, account["id"], -70, tx_date="2024-02-01", category_id=groceries)
    await create_transaction(auth_headers, account["id"], -90, tx_date="2024-01-10", category_id=dining)
    await create_transaction(auth_headers, account["id"], 25, tx_date="2024-01-12", category_id=groceries)

    response = await client.get(f"/api/budgets/{budget['id']}/performance", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["budget"]["id"] == budget["id"]
    assert body["spent"] == pytest.approx(80.0)
    assert body["remaining"] == pytest.approx(120.0)
    assert body["percentage"] == pytest.approx(40.0)


async def test_overspent_budget_has_negative_remaining(
    client, auth_headers, create_account, create_transaction, default_category, create_budget
):
    account = await create_account(auth_headers)
    groceries = await default_category("Groceries")
    budget = await create_budget(auth_headers, groceries, amount=100.0)
    await create_transaction(auth_headers, account["id"], -80, tx_date="2024-01-02", category_id=groceries)
    await create_transaction(auth_headers, account["id"], -50, tx_date="2024-01-03", category_id=groceries)

    body = (await client.get(f"/api/budgets/{budget['id']}/performance", headers=auth_headers)).json()
    assert body["spent"] == pytest.approx(130.0)
    assert body["remaining"] == pytest.approx(-30.0)
    assert body["percentage"] == pytest.approx(130.0)


async def test_zero_amount_budget_reports_zero_percentage(
    client, auth_headers, create_account, create_transaction, default_category, create_budget
):
    account = await create_account(auth_headers)
    groceries = await default_category("Groceries")
    budget = await create_budget(auth_headers, groceries, amount=0.0)
    await create_transaction(auth_headers, account["id"], -10, tx_date="2024-01-02", category_id=groceries)

    body = (await client.get(f"/api/budgets/{budget['id']}/performance", headers=auth_headers)).json()
    assert body["spent"] == pytest.approx(10.0)
    assert body["percentage"] == 0.0
