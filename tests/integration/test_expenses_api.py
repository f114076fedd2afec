import uuid
from decimal import Decimal

import pytest

from spending_tracker.db import models
from spending_tracker.db.database import SessionLocal
from spending_tracker.db.repositories import budgets as budget_repo


@pytest.fixture
def owner(user_factory, user_email):
    return user_factory(email=user_email)


@pytest.fixture
def headers(auth_headers, user_email):
    return auth_headers(user_email)


@pytest.fixture
def groceries(category_factory):
    return category_factory(name="Groceries")


def _create(client, headers, category, **overrides):
    payload = {
        "description": "Weekly shop",
        "amount": 42.5,
        "date": "2024-01-10",
        "categoryId": str(category.id),
    }
    payload.update(overrides)
    resp = client.post("/expenses", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def _spent(db_session, budget_id) -> Decimal:
    db_session.expire_all()
    return Decimal(db_session.get(models.Budget, budget_id).spent_amount)


def test_create_expense(client, headers, owner, groceries):
    body = _create(client, headers, groceries, notes="milk, eggs")
    assert body["amount"] == 42.5
    assert body["description"] == "Weekly shop"
    assert body["date"] == "2024-01-10"
    assert body["userId"] == str(owner.id)
    assert body["category"]["name"] == "Groceries"
    assert body["budget"] is None
    assert body["notes"] == "milk, eggs"


@pytest.mark.parametrize(
    "overrides",
    [
        {"amount": 0},
        {"amount": -1},
        {"amount": 1.234},
        {"description": ""},
        {"date": "not-a-date"},
        {"categoryId": "nope"},
    ],
)
def test_create_expense_validation(client, headers, groceries, overrides):
    payload = {
        "description": "Lunch",
        "amount": 10,
        "date": "2024-01-10",
        "categoryId": str(groceries.id),
    }
    payload.update(overrides)
    resp = client.post("/expenses", json=payload, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Validation Error"


def test_create_expense_with_unknown_references(client, headers, owner, groceries, user_factory, budget_factory):
    resp = client.post(
        "/expenses",
        json={"description": "x", "amount": 1, "date": "2024-01-01", "categoryId": str(uuid.uuid4())},
        headers=headers,
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid category or budget ID provided"

    foreign_budget = budget_factory(user_factory())
    resp = client.post(
        "/expenses",
        json={
            "description": "x",
            "amount": 1,
            "date": "2024-01-01",
            "categoryId": str(groceries.id),
            "budgetId": str(foreign_budget.id),
        },
        headers=headers,
    )
    assert resp.status_code == 400


def test_budget_spent_amount_tracks_expenses(client, db_session, headers, owner, groceries, budget_factory):
    budget = budget_factory(owner)
    other_budget = budget_factory(owner, name="Other")

    first = _create(client, headers, groceries, amount=100, budgetId=str(budget.id))
    _create(client, headers, groceries, amount=25.25, budgetId=str(budget.id))
    assert _spent(db_session, budget.id) == Decimal("125.25")
    assert first["budget"]["name"] == "Monthly groceries"

    resp = client.patch(f"/expenses/{first['id']}", json={"amount": 80}, headers=headers)
    assert resp.status_code == 200, resp.text
    assert _spent(db_session, budget.id) == Decimal("105.25")

    resp = client.patch(f"/expenses/{first['id']}", json={"budgetId": str(other_budget.id)}, headers=headers)
    assert resp.status_code == 200
    assert _spent(db_session, budget.id) == Decimal("25.25")
    assert _spent(db_session, other_budget.id) == Decimal("80.00")

    resp = client.delete(f"/expenses/{first['id']}", headers=headers)
    assert resp.status_code == 204
    assert _spent(db_session, other_budget.id) == Decimal("0.00")

    resp = client.delete(f"/expenses/{first['id']}/permanent", headers=headers)
    assert resp.status_code == 204
    assert _spent(db_session, other_budget.id) == Decimal("0.00")


def test_spent_amount_adjustments_from_stale_sessions_accumulate(db_session, owner, budget_factory):
    budget = budget_factory(owner)
    other = SessionLocal()
    try:
        # Both sessions hold the budget with spent_amount 0 before either writes.
        assert Decimal(other.get(models.Budget, budget.id).spent_amount) == Decimal("0")

        budget_repo.adjust_spent_amount(db_session, budget.id, Decimal("10.00"))
        db_session.commit()

        budget_repo.adjust_spent_amount(other, budget.id, Decimal("5.00"))
        other.commit()
    finally:
        other.close()

    assert _spent(db_session, budget.id) == Decimal("15.00")


def test_get_and_delete(client, headers, owner, groceries, auth_headers):
    created = _create(client, headers, groceries)

    resp = client.get(f"/expenses/{created['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["id"] == created["id"]

    resp = client.get(f"/expenses/{created['id']}", headers=auth_headers("intruder@example.com"))
    assert resp.status_code == 404

    client.delete(f"/expenses/{created['id']}", headers=headers)
    resp = client.get(f"/expenses/{created['id']}", headers=headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == f"Expense with ID {created['id']} not found"

    listing = client.get("/expenses", params={"includeDeleted": "true"}, headers=headers).json()
    assert listing["total"] == 1
    assert listing["data"][0]["deletedAt"] is not None


def test_update_expense(client, headers, owner, groceries, category_factory):
    created = _create(client, headers, groceries)
    transport = category_factory(name="Transport")

    resp = client.patch(
        f"/expenses/{created['id']}",
        json={"description": "Bus pass", "categoryId": str(transport.id), "notes": None, "amount": None},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["description"] == "Bus pass"
    assert body["category"]["name"] == "Transport"
    assert body["amount"] == 42.5

    resp = client.patch(f"/expenses/{created['id']}", json={"categoryId": str(uuid.uuid4())}, headers=headers)
    assert resp.status_code == 400


def test_list_filters_sorting_and_pagination(client, headers, owner, groceries, category_factory):
    fuel = category_factory(name="Fuel")
    _create(client, headers, groceries, description="Bread", amount=3, date="2024-01-05")
    _create(client, headers, groceries, description="Cheese", amount=12, date="2024-02-05", notes="brie")
    _create(client, headers, fuel, description="Diesel", amount=60, date="2024-02-20")

    body = client.get("/expenses", headers=headers).json()
    assert body["total"] == 3
    assert [e["description"] for e in body["data"]] == ["Diesel", "Cheese", "Bread"]
    assert body["hasNext"] is False
    assert body["hasPrevious"] is False

    body = client.get("/expenses", params={"sortBy": "amount", "sortOrder": "ASC"}, headers=headers).json()
    assert [e["amount"] for e in body["data"]] == [3, 12, 60]

    body = client.get("/expenses", params={"categoryId": str(fuel.id)}, headers=headers).json()
    assert [e["description"] for e in body["data"]] == ["Diesel"]

    body = client.get(
        "/expenses", params={"startDate": "2024-02-01", "endDate": "2024-02-10"}, headers=headers
    ).json()
    assert [e["description"] for e in body["data"]] == ["Cheese"]

    body = client.get("/expenses", params={"minAmount": 10, "maxAmount": 50}, headers=headers).json()
    assert body["total"] == 1

    body = client.get("/expenses", params={"search": "BRIE"}, headers=headers).json()
    assert [e["description"] for e in body["data"]] == ["Cheese"]

    body = client.get("/expenses", params={"limit": 2, "page": 2}, headers=headers).json()
    assert len(body["data"]) == 1
    assert body["totalPages"] == 2
    assert body["hasNext"] is False
    assert body["hasPrevious"] is True

    resp = client.get("/expenses", params={"sortBy": "color"}, headers=headers)
    assert resp.status_code == 400


def test_search_treats_wildcards_literally(client, headers, owner, groceries):
    _create(client, headers, groceries, description="Bread")
    _create(client, headers, groceries, description="50% off shoes")

    body = client.get("/expenses", params={"search": "_"}, headers=headers).json()
    assert body["total"] == 0

    body = client.get("/expenses", params={"search": "50%"}, headers=headers).json()
    assert [e["description"] for e in body["data"]] == ["50% off shoes"]

    body = client.get("/expenses", params={"search": "0% o"}, headers=headers).json()
    assert [e["description"] for e in body["data"]] == ["50% off shoes"]

    body = client.get("/expenses", params={"search": "%"}, headers=headers).json()
    assert body["total"] == 1


def test_summary(client, headers, owner, groceries, category_factory):
    fuel = category_factory(name="Fuel")
    _create(client, headers, groceries, amount=10, date="2024-03-01")
    _create(client, headers, groceries, amount=20, date="2024-03-02")
    _create(client, headers, fuel, amount=60, date="2024-03-03")

    body = client.get("/expenses/summary", headers=headers).json()
    assert body["totalAmount"] == 90
    assert body["count"] == 3
    assert body["averageAmount"] == 30
    assert body["minAmount"] == 10
    assert body["maxAmount"] == 60
    assert [(c["categoryName"], c["totalAmount"], c["count"]) for c in body["byCategory"]] == [
        ("Fuel", 60, 1),
        ("Groceries", 30, 2),
    ]
    assert body.get("dateRange") is None

    body = client.get("/expenses/summary", params={"startDate": "2024-03-02"}, headers=headers).json()
    assert body["count"] == 2
    assert body["dateRange"]["startDate"] == "2024-03-02"


def test_summary_without_expenses(client, headers, owner):
    body = client.get("/expenses/summary", headers=headers).json()
    assert body["totalAmount"] == 0
    assert body["count"] == 0
    assert body["byCategory"] == []


def test_expenses_are_private(client, auth_headers, user_factory, category_factory):
    category = category_factory(name="Shared")
    alice = auth_headers("alice@example.com")
    bob = auth_headers("bob@example.com")
    _create(client, alice, category)
    assert client.get("/expenses", headers=bob).json()["total"] == 0
    assert client.get("/expenses", headers=alice).json()["total"] == 1
