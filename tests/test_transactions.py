import uuid


async def test_create_transaction_round_trip(client, auth_headers, create_account, default_category):
    account = await create_account(auth_headers)
    groceries = await default_category("Groceries")

    created = await client.post(
        "/api/transactions",
        json={
            "account_id": account["id"],
            "date": "2024-01-15",
            "amount": -45.99,
            "description": "Grocery Store",
            "category_id": groceries,
        },
        headers=auth_headers,
    )
    assert created.status_code == 201
    body = created.json()
    assert body["pending"] is False
    assert body["plaid_transaction_id"] is None

    fetched = await client.get(f"/api/transactions/{body['id']}", headers=auth_headers)
    assert fetched.status_code == 200
    assert fetched.json()["amount"] == -45.99
    assert fetched.json()["date"] == "2024-01-15"
    assert fetched.json()["category_id"] == groceries


async def test_create_on_foreign_account_is_rejected(client, auth_headers, other_headers, create_account):
    account = await create_account(auth_headers)

    response = await client.post(
        "/api/transactions",
        json={"account_id": account["id"], "date": "2024-01-15", "amount": -10, "description": "Sneaky"},
        headers=other_headers,
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid account"}


async def test_create_with_foreign_category_is_rejected(client, auth_headers, other_headers, create_account):
    account = await create_account(auth_headers)
    category = await client.post("/api/categories", json={"name": "Private"}, headers=other_headers)

    response = await client.post(
        "/api/transactions",
        json={
            "account_id": account["id"],
            "date": "2024-01-15",
            "amount": -10,
            "description": "Coffee",
            "category_id": category.json()["id"],
        },
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid category"}


async def test_list_is_newest_first(client, auth_headers, create_account, create_transaction):
    account = await create_account(auth_headers)
    await create_transaction(auth_headers, account["id"], -1, tx_date="2024-01-01")
    await create_transaction(auth_headers, account["id"], -2, tx_date="2024-03-01")
    await create_transaction(auth_headers, account["id"], -3, tx_date="2024-02-01")

    response = await client.get("/api/transactions", headers=auth_headers)
    assert [t["date"] for t in response.json()] == ["2024-03-01", "2024-02-01", "2024-01-01"]


async def test_filters_combine(client, auth_headers, create_account, create_transaction, default_category):
    checking = await create_account(auth_headers, name="Checking")
    savings = await create_account(auth_headers, name="Savings")
    dining = await default_category("Dining Out")

    jan = await create_transaction(auth_headers, checking["id"], -20, tx_date="2024-01-10", category_id=dining)
    feb = await create_transaction(auth_headers, checking["id"], -30, tx_date="2024-02-10", category_id=dining)
    feb_other = await create_transaction(auth_headers, savings["id"], -40, tx_date="2024-02-11", category_id=dining)
    feb_uncat = await create_transaction(auth_headers, checking["id"], -50, tx_date="2024-02-12")

    feb_only = await client.get(
        "/api/transactions",
        params={"start_date": "2024-02-01", "end_date": "2024-02-29"},
        headers=auth_headers,
    )
    assert {t["id"] for t in feb_only.json()} == {feb["id"], feb_other["id"], feb_uncat["id"]}

    by_account_and_category = await client.get(
        "/api/transactions",
        params={"account_id": checking["id"], "category_id": dining},
        headers=auth_headers,
    )
    assert {t["id"] for t in by_account_and_category.json()} == {jan["id"], feb["id"]}

    uncategorized = await client.get("/api/transactions", params={"uncategorized": "true"}, headers=auth_headers)
    assert [t["id"] for t in uncategorized.json()] == [feb_uncat["id"]]


async def test_filter_on_foreign_account_returns_nothing(client, auth_headers, other_headers, create_account, create_transaction):
    account = await create_account(auth_headers)
    await create_transaction(auth_headers, account["id"], -5)

    response = await client.get("/api/transactions", params={"account_id": account["id"]}, headers=other_headers)
    assert response.status_code == 200
    assert response.json() == []


async def test_update_transaction_fields(client, auth_headers, create_account, create_transaction, default_category):
    account = await create_account(auth_headers)
    tx = await create_transaction(auth_headers, account["id"], -12.5, description="Cafe")
    dining = await default_category("Dining Out")

    response = await client.put(
        f"/api/transactions/{tx['id']}",
        json={"category_id": dining, "description": "Corner Cafe"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["category_id"] == dining
    assert body["description"] == "Corner Cafe"
    assert body["amount"] == -12.5


async def test_update_with_invalid_category_changes_nothing(client, auth_headers, create_account, create_transaction):
    account = await create_account(auth_headers)
    tx = await create_transaction(auth_headers, account["id"], -12.5, description="Cafe")

    response = await client.put(
        f"/api/transactions/{tx['id']}",
        json={"category_id": str(uuid.uuid4()), "description": "Changed"},
        headers=auth_headers,
    )
    assert response.status_code == 400

    unchanged = await client.get(f"/api/transactions/{tx['id']}", headers=auth_headers)
    assert unchanged.json()["description"] == "Cafe"


async def test_foreign_transaction_is_hidden(client, auth_headers, other_headers, create_account, create_transaction):
    account = await create_account(auth_headers)
    tx = await create_transaction(auth_headers, account["id"], -5)

    assert (await client.get(f"/api/transactions/{tx['id']}", headers=other_headers)).status_code == 404
    assert (await client.put(
        f"/api/transactions/{tx['id']}", json={"amount": 0}, headers=other_headers
    )).status_code == 404

    deleted = await client.delete(f"/api/transactions/{tx['id']}", headers=other_headers)
    assert deleted.status_code == 204
    assert (await client.get(f"/api/transactions/{tx['id']}", headers=auth_headers)).status_code == 200


async def test_delete_transaction(client, auth_headers, create_account, create_transaction):
    account = await create_account(auth_headers)
    tx = await create_transaction(auth_headers, account["id"], -5)

    assert (await client.delete(f"/api/transactions/{tx['id']}", headers=auth_headers)).status_code == 204
    assert (await client.get(f"/api/transactions/{tx['id']}", headers=auth_headers)).status_code == 404
