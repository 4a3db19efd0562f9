from datetime import datetime
from unittest import mock

import pytest
from fastapi import HTTPException

from smartspend.repositories.settings import settings
from smartspend.routers.transaction_router import read_upload


def create_transaction(client, headers, **overrides):
    payload = {
        "amount": 42.5,
        "description": "Weekly shop",
        "date": "2025-03-10T09:00:00",
        "is_income": False,
    }
    payload.update(overrides)
    return client.post("/api/transactions", json=payload, headers=headers)


def test_create_and_list_transactions_newest_first(client, auth_headers, categories):
    groceries = categories["Groceries"].category_id
    first = create_transaction(client, auth_headers, category_id=groceries, date="2025-03-01T10:00:00")
    second = create_transaction(client, auth_headers, description="Salary", amount=2000, is_income=True, date="2025-03-05T10:00:00")
    assert first.status_code == 201
    assert second.status_code == 201
    assert first.json()["category_id"] == groceries

    response = client.get("/api/transactions", headers=auth_headers)
    assert response.status_code == 200
    assert [t["description"] for t in response.json()] == ["Salary", "Weekly shop"]


def test_list_transactions_by_inclusive_date_range(client, auth_headers):
    create_transaction(client, auth_headers, description="Feb", date="2025-02-28T23:59:59")
    create_transaction(client, auth_headers, description="Start", date="2025-03-01T00:00:00")
    create_transaction(client, auth_headers, description="End", date="2025-03-31T00:00:00")
    create_transaction(client, auth_headers, description="Apr", date="2025-04-01T00:00:00")

    response = client.get(
        "/api/transactions",
        params={"start_date": "2025-03-01T00:00:00", "end_date": "2025-03-31T00:00:00"},
        headers=auth_headers,
    )
    assert [t["description"] for t in response.json()] == ["End", "Start"]

    only_start = client.get(
        "/api/transactions", params={"start_date": "2025-03-01T00:00:00"}, headers=auth_headers
    )
    assert len(only_start.json()) == 4


def test_negative_amount_is_rejected(client, auth_headers):
    response = create_transaction(client, auth_headers, amount=-10)
    assert response.status_code == 422


def test_unknown_category_is_rejected(client, auth_headers):
    response = create_transaction(client, auth_headers, category_id=12345)
    assert response.status_code == 400


def test_missing_date_defaults_to_now(client, auth_headers):
    before = datetime.now().replace(microsecond=0)
    response = client.post(
        "/api/transactions",
        json={"amount": 5, "description": "Coffee"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    assert datetime.fromisoformat(response.json()["date"]) >= before


def test_update_transaction(client, auth_headers, categories):
    created = create_transaction(client, auth_headers, category_id=categories["Groceries"].category_id).json()

    response = client.put(
        f"/api/transactions/{created['transaction_id']}",
        json={"amount": 99.99, "category_id": None},
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["amount"] == 99.99
    assert body["category_id"] is None
    assert body["description"] == "Weekly shop"


def test_delete_transaction(client, auth_headers):
    created = create_transaction(client, auth_headers).json()

    response = client.delete(f"/api/transactions/{created['transaction_id']}", headers=auth_headers)
    assert response.status_code == 204
    assert client.get("/api/transactions", headers=auth_headers).json() == []

    missing = client.delete(f"/api/transactions/{created['transaction_id']}", headers=auth_headers)
    assert missing.status_code == 404


def test_other_users_transactions_are_forbidden(client, login):
    alice = login("alice")
    mallory = login("mallory")
    created = create_transaction(client, alice).json()
    path = f"/api/transactions/{created['transaction_id']}"

    assert client.put(path, json={"amount": 1}, headers=mallory).status_code == 403
    assert client.delete(path, headers=mallory).status_code == 403
    assert client.get("/api/transactions", headers=mallory).json() == []


def test_upload_csv_imports_transactions(client, auth_headers, categories):
    groceries = categories["Groceries"].category_id
    content = (
        "amount,description,date,categoryId,isIncome\n"
        f"12.50,Bakery,2025-03-02T08:00:00,{groceries},false\n"
        "\n"
        "1500,Paycheck,2025-03-01,,true\n"
    ).encode()

    response = client.post(
        "/api/transactions/upload",
        files={"file": ("march.csv", content, "text/csv")},
        headers=auth_headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Successfully imported 2 transactions"
    assert body["file_url"].startswith("local://")
    assert [t["is_income"] for t in body["transactions"]] == [False, True]
    assert body["transactions"][0]["category_id"] == groceries

    stored = body["file_url"][len("local://"):]
    with open(stored, "rb") as f:
        assert f.read() == content

    assert len(client.get("/api/transactions", headers=auth_headers).json()) == 2


def test_upload_rejects_non_csv(client, auth_headers):
    response = client.post(
        "/api/transactions/upload",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Only CSV files are allowed"


def test_upload_with_bad_row_imports_nothing(client, auth_headers):
    content = b"amount,description\n10,ok\nabc,broken\n"

    response = client.post(
        "/api/transactions/upload",
        files={"file": ("bad.csv", content, "text/csv")},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert "Line 3" in response.json()["detail"]
    assert client.get("/api/transactions", headers=auth_headers).json() == []


@pytest.mark.parametrize("amount", ["inf", "-inf", "nan", 1e20])
def test_non_finite_and_oversized_amounts_are_rejected(client, auth_headers, amount):
    response = create_transaction(client, auth_headers, amount=amount)
    assert response.status_code == 422

    created = create_transaction(client, auth_headers).json()
    path = f"/api/transactions/{created['transaction_id']}"
    assert client.put(path, json={"amount": amount}, headers=auth_headers).status_code == 422

    assert client.get("/api/dashboard", headers=auth_headers).status_code == 200


def test_largest_storable_amount_is_accepted(client, auth_headers):
    response = create_transaction(client, auth_headers, amount=9_999_999_999_999.99)
    assert response.status_code == 201


def test_offset_dates_are_stored_as_utc(client, auth_headers):
    response = create_transaction(client, auth_headers, date="2025-03-10T09:00:00+02:00")
    assert response.status_code == 201
    assert response.json()["date"] == "2025-03-10T07:00:00"


def test_upload_with_infinite_amount_imports_nothing(client, auth_headers):
    response = client.post(
        "/api/transactions/upload",
        files={"file": ("bad.csv", b"amount,description\n10,ok\ninf,broken\n", "text/csv")},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert "Line 3" in response.json()["detail"]
    assert client.get("/api/transactions", headers=auth_headers).json() == []


def test_upload_over_size_limit_is_rejected(client, auth_headers, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 16)

    response = client.post(
        "/api/transactions/upload",
        files={"file": ("big.csv", b"amount,description\n" + b"1,x\n" * 10, "text/csv")},
        headers=auth_headers,
    )
    assert response.status_code == 413
    assert client.get("/api/transactions", headers=auth_headers).json() == []


def test_read_upload_stops_past_the_limit():
    file = mock.Mock()
    file.file.read.side_effect = [b"x" * 10, b"x" * 10, b"never read"]

    with pytest.raises(HTTPException) as excinfo:
        read_upload(file, limit=15)

    assert excinfo.value.status_code == 413
    assert file.file.read.call_count == 2
