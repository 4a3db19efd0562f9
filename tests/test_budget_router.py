import pytest


def budget_payload(**overrides):
    payload = {
        "category_id": None,
        "amount": 250,
        "period": "monthly",
        "start_date": "2025-01-01T00:00:00",
    }
    payload.update(overrides)
    return payload


def test_create_and_list_budgets(client, auth_headers, categories):
    response = client.post(
        "/api/budgets",
        json=budget_payload(category_id=categories["Transport"].category_id),
        headers=auth_headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["amount"] == 250
    assert body["end_date"] is None

    listed = client.get("/api/budgets", headers=auth_headers).json()
    assert [b["budget_id"] for b in listed] == [body["budget_id"]]


def test_budget_amount_must_be_positive(client, auth_headers):
    response = client.post("/api/budgets", json=budget_payload(amount=0), headers=auth_headers)
    assert response.status_code == 422


def test_budget_period_is_validated(client, auth_headers):
    response = client.post("/api/budgets", json=budget_payload(period="daily"), headers=auth_headers)
    assert response.status_code == 422


def test_budget_end_before_start_is_rejected(client, auth_headers):
    response = client.post(
        "/api/budgets",
        json=budget_payload(end_date="2024-12-31T00:00:00"),
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_update_and_delete_budget(client, auth_headers):
    created = client.post("/api/budgets", json=budget_payload(), headers=auth_headers).json()
    path = f"/api/budgets/{created['budget_id']}"

    updated = client.put(path, json={"amount": 400, "period": "yearly"}, headers=auth_headers)
    assert updated.status_code == 200
    assert updated.json()["amount"] == 400
    assert updated.json()["period"] == "yearly"

    assert client.delete(path, headers=auth_headers).status_code == 204
    assert client.get("/api/budgets", headers=auth_headers).json() == []
    assert client.put(path, json={"amount": 1}, headers=auth_headers).status_code == 404


def test_budgets_are_private(client, login):
    alice = login("alice")
    mallory = login("mallory")
    created = client.post("/api/budgets", json=budget_payload(), headers=alice).json()
    path = f"/api/budgets/{created['budget_id']}"

    assert client.get("/api/budgets", headers=mallory).json() == []
    assert client.put(path, json={"amount": 1}, headers=mallory).status_code == 403
    assert client.delete(path, headers=mallory).status_code == 403


@pytest.mark.parametrize("amount", ["inf", "nan", 1e20])
def test_budget_amount_must_be_finite_and_storable(client, auth_headers, amount):
    response = client.post("/api/budgets", json=budget_payload(amount=amount), headers=auth_headers)
    assert response.status_code == 422

    created = client.post("/api/budgets", json=budget_payload(), headers=auth_headers).json()
    path = f"/api/budgets/{created['budget_id']}"
    assert client.put(path, json={"amount": amount}, headers=auth_headers).status_code == 422


def test_budget_dates_with_and_without_offset_are_compared_in_utc(client, auth_headers):
    response = client.post(
        "/api/budgets",
        json=budget_payload(start_date="2025-03-01T00:00:00Z", end_date="2025-03-31T00:00:00"),
        headers=auth_headers,
    )
    assert response.status_code == 201
    assert response.json()["start_date"] == "2025-03-01T00:00:00"

    reversed_range = client.post(
        "/api/budgets",
        json=budget_payload(start_date="2025-03-01T00:00:00", end_date="2025-03-01T01:00:00+02:00"),
        headers=auth_headers,
    )
    assert reversed_range.status_code == 400


def test_update_cannot_move_end_before_start(client, auth_headers):
    created = client.post(
        "/api/budgets", json=budget_payload(start_date="2025-03-01T00:00:00"), headers=auth_headers
    ).json()
    path = f"/api/budgets/{created['budget_id']}"

    assert client.put(path, json={"end_date": "2025-01-01T00:00:00"}, headers=auth_headers).status_code == 400

    with_end = client.put(path, json={"end_date": "2025-03-31T00:00:00"}, headers=auth_headers)
    assert with_end.status_code == 200
    assert client.put(path, json={"start_date": "2025-04-01T00:00:00"}, headers=auth_headers).status_code == 400

    cleared = client.put(path, json={"end_date": None, "start_date": "2025-04-01T00:00:00"}, headers=auth_headers)
    assert cleared.status_code == 200
    assert cleared.json()["end_date"] is None
