from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from wealthmanager.storage.repository import TransactionRepository


def test_create_transaction_echoes_fields(test_ctx) -> None:
    client = test_ctx["client"]

    response = client.post("/api/transactions", json={"title": "Buy", "amount": 100})

    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Buy"
    assert body["amount"] == 100
    assert isinstance(body["id"], int)
    assert body["createdAt"].endswith(("Z", "+00:00"))
    assert body["updatedAt"].endswith(("Z", "+00:00"))


@pytest.mark.parametrize(
    "payload",
    [
        {"amount": 100},
        {"title": "", "amount": 100},
        {"title": "   ", "amount": 100},
        {"title": "Buy"},
        {"title": "Buy", "amount": "lots"},
        {"title": "Buy", "amount": None},
        {"title": "Buy", "amount": True},
    ],
)
def test_create_transaction_rejects_invalid_payload(test_ctx, payload) -> None:
    client = test_ctx["client"]

    response = client.post("/api/transactions", json=payload)

    assert response.status_code == 400
    assert response.json()["message"]
    assert client.get("/api/transactions").json() == []


def test_list_transactions_returns_all_in_creation_order(test_ctx) -> None:
    client = test_ctx["client"]

    assert client.get("/api/transactions").json() == []

    client.post("/api/transactions", json={"title": "Salary", "amount": 50000})
    client.post("/api/transactions", json={"title": "Rent", "amount": -15000.5})

    response = client.get("/api/transactions")
    assert response.status_code == 200
    rows = response.json()
    assert [(row["title"], row["amount"]) for row in rows] == [("Salary", 50000), ("Rent", -15000.5)]


def test_collection_path_accepts_trailing_slash(test_ctx) -> None:
    client = test_ctx["client"]

    created = client.post("/api/transactions/", json={"title": "Buy", "amount": 100}, follow_redirects=False)
    listed = client.get("/api/transactions/", follow_redirects=False)

    assert created.status_code == 201
    assert listed.status_code == 200
    assert [row["title"] for row in listed.json()] == ["Buy"]


def test_malformed_json_body_is_rejected(test_ctx) -> None:
    client = test_ctx["client"]

    response = client.post(
        "/api/transactions",
        content=b'{"title": "Buy", "amount":',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request body"


def _locked(self, *args, **kwargs):
    raise OperationalError("INSERT", {}, Exception("database is locked"))


def test_list_store_error_maps_to_500(test_ctx, monkeypatch) -> None:
    client = test_ctx["client"]
    monkeypatch.setattr(TransactionRepository, "list_all", _locked)

    response = client.get("/api/transactions")

    assert response.status_code == 500
    assert response.json() == {"message": "Server error fetching transactions."}


def test_create_store_error_rolls_back_and_maps_to_500(test_ctx, monkeypatch) -> None:
    client = test_ctx["client"]
    with monkeypatch.context() as patch:
        patch.setattr(TransactionRepository, "add", _locked)
        response = client.post("/api/transactions", json={"title": "Buy", "amount": 100})

    assert response.status_code == 500
    assert response.json() == {"message": "Server error creating transaction."}
    assert client.get("/api/transactions").json() == []
