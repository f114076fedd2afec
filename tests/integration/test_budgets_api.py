import uuid

import pytest

from spending_tracker.db import models


def _payload(**overrides):
    payload = {
        "name": "Groceries",
        "amount": 400,
        "period": "monthly",
        "startDate": "2024-01-01",
        "endDate": "2024-01-31",
    }
    payload.update(overrides)
    return payload


def test_create_budget(client, auth_headers, user_email, budget_category_factory):
    category = budget_category_factory(name="Food")
    resp = client.post("/budgets", json=_payload(categoryId=str(category.id)), headers=auth_headers(user_email))
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["name"] == "Groceries"
    assert body["amount"] == 400
    assert body["spentAmount"] == 0
    assert body["isActive"] is True
    assert body["alertEnabled"] is True
    assert body["alertThreshold"] == 80
    assert body["category"]["name"] == "Food"


@pytest.mark.parametrize(
    "overrides",
    [
        {"amount": 0},
        {"amount": -5},
        {"period": "fortnightly"},
        {"alertThreshold": 101},
        {"name": ""},
    ],
)
def test_create_budget_validation(client, auth_headers, user_email, overrides):
    resp = client.post("/budgets", json=_payload(**overrides), headers=auth_headers(user_email))
    assert resp.status_code == 400
    assert resp.json()["error"] == "Validation Error"


def test_create_budget_rejects_inverted_dates(client, auth_headers, user_email):
    resp = client.post(
        "/budgets",
        json=_payload(startDate="2024-02-01", endDate="2024-01-01"),
        headers=auth_headers(user_email),
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Start date must be before end date"

    resp = client.post(
        "/budgets",
        json=_payload(startDate="2024-01-01", endDate="2024-01-01"),
        headers=auth_headers(user_email),
    )
    assert resp.status_code == 400


def test_create_budget_unknown_budget_category(client, auth_headers, user_email):
    missing = uuid.uuid4()
    resp = client.post("/budgets", json=_payload(categoryId=str(missing)), headers=auth_headers(user_email))
    assert resp.status_code == 400
    assert resp.json()["message"] == f"Budget category with ID {missing} not found"


def test_list_budgets_paginates_and_filters(client, auth_headers, user_email, user_factory, budget_factory):
    headers = auth_headers(user_email)
    owner = user_factory(email=user_email)
    for i in range(3):
        budget_factory(owner, name=f"Monthly {i}")
    budget_factory(owner, name="Weekly", period=models.BudgetPeriod.WEEKLY, is_active=False)
    budget_factory(user_factory(), name="Someone else's")

    resp = client.get("/budgets", params={"limit": 2}, headers=headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 4
    assert body["totalPages"] == 2
    assert body["page"] == 1
    assert len(body["data"]) == 2

    resp = client.get("/budgets", params={"period": "weekly"}, headers=headers)
    assert [b["name"] for b in resp.json()["data"]] == ["Weekly"]

    resp = client.get("/budgets", params={"isActive": "false"}, headers=headers)
    assert resp.json()["total"] == 1

    resp = client.get("/budgets/active/list", headers=headers)
    assert resp.status_code == 200
    assert len(resp.json()) == 3


def test_get_budget_ownership(client, auth_headers, user_email, user_factory, budget_factory):
    other = user_factory()
    foreign = budget_factory(other)

    resp = client.get(f"/budgets/{foreign.id}", headers=auth_headers(user_email))
    assert resp.status_code == 403
    assert resp.json()["message"] == "You do not have permission to access this budget"

    missing = uuid.uuid4()
    resp = client.get(f"/budgets/{missing}", headers=auth_headers(user_email))
    assert resp.status_code == 404
    assert resp.json()["message"] == f"Budget with ID {missing} not found"

    resp = client.get(f"/budgets/{foreign.id}", headers=auth_headers(other.email))
    assert resp.status_code == 200
    assert resp.json()["id"] == str(foreign.id)


def test_update_budget(client, auth_headers, user_email):
    headers = auth_headers(user_email)
    created = client.post("/budgets", json=_payload(), headers=headers).json()

    resp = client.put(
        f"/budgets/{created['id']}",
        json={"amount": 550.5, "alertThreshold": 90, "name": None},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["amount"] == 550.5
    assert body["alertThreshold"] == 90
    assert body["name"] == "Groceries"

    resp = client.put(f"/budgets/{created['id']}", json={"endDate": "2023-12-01"}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Start date must be before end date"


def test_delete_budget(client, auth_headers, user_email):
    headers = auth_headers(user_email)
    created = client.post("/budgets", json=_payload(), headers=headers).json()

    resp = client.delete(f"/budgets/{created['id']}", headers=headers)
    assert resp.status_code == 204
    assert client.get(f"/budgets/{created['id']}", headers=headers).status_code == 404
    assert client.get("/budgets", headers=headers).json()["total"] == 0


def test_budget_categories_listing(client, budget_category_factory):
    budget_category_factory(name="Transport")
    budget_category_factory(name="Entertainment")
    resp = client.get("/budget-categories")
    assert resp.status_code == 200
    assert [c["name"] for c in resp.json()] == ["Entertainment", "Transport"]


def test_budgets_require_authentication(client):
    assert client.get("/budgets").status_code == 401
