from decimal import Decimal

import pytest


@pytest.fixture()
def groceries(client, alice):
    response = client.post("/api/categories", json={"name": "Groceries"}, auth=alice[1])
    return response.json()


def create_transaction(client, auth, **body):
    response = client.post("/api/transactions", json=body, auth=auth)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_get_round_trip(client, alice, groceries):
    user, auth = alice
    created = create_transaction(
        client, auth,
        venue="Corner Market", amount="54.20", comments="weekly shop",
        category_id=groceries["id"], date="2026-01-15",
    )
    assert created["venue"] == "Corner Market"
    assert Decimal(created["amount"]) == Decimal("54.20")
    assert created["comments"] == "weekly shop"
    assert created["category_id"] == groceries["id"]
    assert created["user_id"] == user["id"]
    assert created["date"] == "2026-01-15"

    fetched = client.get(f"/api/transactions/{created['id']}", auth=auth).json()
    for field in ("id", "venue", "comments", "category_id", "user_id", "date"):
        assert fetched[field] == created[field]
    assert Decimal(fetched["amount"]) == Decimal(created["amount"])


def test_numeric_amount_accepted(client, alice):
    created = create_transaction(client, alice[1], venue="Cafe", amount=3.5)
    assert Decimal(created["amount"]) == Decimal("3.50")
    assert created["category_id"] is None
    assert created["comments"] is None
    assert created["date"]


def test_create_requires_venue(client, alice):
    response = client.post("/api/transactions", json={"amount": "1.00"}, auth=alice[1])
    assert response.status_code == 400
    assert response.json()["detail"] == "Missing 'venue' in request body"


def test_create_requires_amount(client, alice):
    response = client.post("/api/transactions", json={"venue": "Cafe"}, auth=alice[1])
    assert response.status_code == 400
    assert response.json()["detail"] == "Missing 'amount' in request body"


@pytest.mark.parametrize("amount", ["ten dollars", "1.234", "123456789.00", [1]])
def test_create_rejects_bad_amount(client, alice, amount):
    response = client.post("/api/transactions", json={"venue": "Cafe", "amount": amount}, auth=alice[1])
    assert response.status_code == 400
    assert response.json()["detail"].startswith("amount")


def test_create_rejects_long_venue(client, alice):
    response = client.post("/api/transactions", json={"venue": "v" * 51, "amount": "1"}, auth=alice[1])
    assert response.status_code == 400


def test_create_rejects_someone_elses_category(client, alice, bob):
    bobs = client.post("/api/categories", json={"name": "Bob's"}, auth=bob[1]).json()
    response = client.post(
        "/api/transactions", json={"venue": "Cafe", "amount": "1", "category_id": bobs["id"]}, auth=alice[1]
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Unknown category_id"


def test_list_returns_only_own_transactions(client, alice, bob):
    create_transaction(client, alice[1], venue="A1", amount="1")
    create_transaction(client, bob[1], venue="B1", amount="2")
    create_transaction(client, alice[1], venue="A2", amount="3")

    venues = [t["venue"] for t in client.get("/api/transactions", auth=alice[1]).json()]
    assert venues == ["A1", "A2"]


def test_partial_update_changes_only_given_fields(client, alice, groceries):
    created = create_transaction(
        client, alice[1], venue="Market", amount="10.00", comments="first", category_id=groceries["id"]
    )
    response = client.patch(
        f"/api/transactions/{created['id']}", json={"amount": "12.25"}, auth=alice[1]
    )
    assert response.status_code == 204

    fetched = client.get(f"/api/transactions/{created['id']}", auth=alice[1]).json()
    assert Decimal(fetched["amount"]) == Decimal("12.25")
    assert fetched["venue"] == "Market"
    assert fetched["comments"] == "first"
    assert fetched["category_id"] == groceries["id"]


def test_update_can_clear_comments_and_category(client, alice, groceries):
    created = create_transaction(
        client, alice[1], venue="Market", amount="10", comments="note", category_id=groceries["id"]
    )
    client.patch(
        f"/api/transactions/{created['id']}", json={"comments": None, "category_id": None}, auth=alice[1]
    )
    fetched = client.get(f"/api/transactions/{created['id']}", auth=alice[1]).json()
    assert fetched["comments"] is None
    assert fetched["category_id"] is None
    assert fetched["venue"] == "Market"


def test_update_without_recognized_fields(client, alice):
    created = create_transaction(client, alice[1], venue="Market", amount="10")
    for body in ({}, {"date": "2026-01-01"}, {"user_id": 42}):
        response = client.patch(f"/api/transactions/{created['id']}", json=body, auth=alice[1])
        assert response.status_code == 400


def test_update_rejects_null_amount(client, alice):
    created = create_transaction(client, alice[1], venue="Market", amount="10")
    response = client.patch(f"/api/transactions/{created['id']}", json={"amount": None}, auth=alice[1])
    assert response.status_code == 400


def test_update_rejects_someone_elses_category(client, alice, bob):
    created = create_transaction(client, alice[1], venue="Market", amount="10")
    bobs = client.post("/api/categories", json={"name": "Bob's"}, auth=bob[1]).json()
    response = client.patch(
        f"/api/transactions/{created['id']}", json={"category_id": bobs["id"]}, auth=alice[1]
    )
    assert response.status_code == 400


def test_delete_then_get_is_not_found(client, alice):
    created = create_transaction(client, alice[1], venue="Market", amount="10")
    assert client.delete(f"/api/transactions/{created['id']}", auth=alice[1]).status_code == 202
    assert client.get(f"/api/transactions/{created['id']}", auth=alice[1]).status_code == 404


def test_requires_authentication(client):
    assert client.get("/api/transactions").status_code == 401
    assert client.post("/api/transactions", json={"venue": "x", "amount": "1"}).status_code == 401
