"""Mini README: Tests for the FastAPI interface.

The interface is exercised through ``TestClient`` against a store backed by
``MemoryBlobStore`` so every request can be checked for the save it triggers.
"""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from categorybook.interface import create_application
from categorybook.storage import MemoryBlobStore
from categorybook.store import DataStore


@pytest.fixture()
def store() -> DataStore:
    return DataStore.open(MemoryBlobStore())


@pytest.fixture()
def client(store: DataStore) -> TestClient:
    return TestClient(create_application(store))


def _stored_names(store: DataStore) -> list[str]:
    return [category["name"] for category in json.loads(store.blob_store.read(store.key))]


def test_add_category_saves_immediately(client: TestClient, store: DataStore) -> None:
    response = client.post("/categories", data={"name": "Groceries"})

    assert response.status_code == 201
    body = response.json()
    assert body["saved"] is True
    assert body["category"]["name"] == "Groceries"
    assert body["category"]["total_profit"] == 0.0
    assert _stored_names(store) == ["Groceries"]


def test_list_categories_includes_totals(client: TestClient) -> None:
    category_id = client.post("/categories", data={"name": "Food"}).json()["category"]["id"]
    client.post(
        f"/categories/{category_id}/entries",
        data={"name": "Milk", "income": "0", "expense": "3.5", "date": "2024-01-01"},
    )

    (summary,) = client.get("/categories").json()["categories"]

    assert summary["entry_count"] == 1
    assert summary["total_expense"] == pytest.approx(3.5)
    assert summary["total_profit"] == pytest.approx(-3.5)


def test_invalid_amounts_add_nothing(client: TestClient, store: DataStore) -> None:
    category_id = client.post("/categories", data={"name": "Food"}).json()["category"]["id"]

    response = client.post(
        f"/categories/{category_id}/entries",
        data={"name": "Milk", "income": "lots", "expense": "3.5"},
    )

    assert response.status_code == 200
    assert response.json()["added"] is False
    assert store.get_category(category_id).entries == []


def test_detail_sorts_without_touching_storage(client: TestClient, store: DataStore) -> None:
    category_id = client.post("/categories", data={"name": "Food"}).json()["category"]["id"]
    for name, income, day in (("b", "5", "2024-01-02"), ("a", "9", "2024-01-01"), ("a", "1", "2024-01-03")):
        client.post(
            f"/categories/{category_id}/entries",
            data={"name": name, "income": income, "expense": "0", "date": day},
        )

    by_income = client.get(f"/categories/{category_id}", params={"sort": "Income"}).json()
    by_date = client.get(f"/categories/{category_id}", params={"sort": "date"}).json()

    assert [entry["income"] for entry in by_income["entries"]] == [9.0, 5.0, 1.0]
    assert [entry["date"] for entry in by_date["entries"]] == ["2024-01-03", "2024-01-02", "2024-01-01"]
    assert len({entry["id"] for entry in by_income["entries"]}) == 3
    assert [entry.name for entry in store.get_category(category_id).entries] == ["b", "a", "a"]


def test_delete_entries_by_id_keeps_same_named_entries(client: TestClient, store: DataStore) -> None:
    category_id = client.post("/categories", data={"name": "Food"}).json()["category"]["id"]
    first = client.post(
        f"/categories/{category_id}/entries",
        data={"name": "Coffee", "income": "0", "expense": "3"},
    ).json()["entry"]
    client.post(
        f"/categories/{category_id}/entries",
        data={"name": "Coffee", "income": "0", "expense": "4"},
    )

    response = client.post(f"/categories/{category_id}/entries/delete", data={"entry_ids": [first["id"]]})

    assert response.json()["removed"] == [first["id"]]
    (remaining,) = store.get_category(category_id).entries
    assert remaining.expense == pytest.approx(4.0)


def test_move_and_delete_categories(client: TestClient, store: DataStore) -> None:
    for name in ("A", "B", "C", "D"):
        client.post("/categories", data={"name": name})

    moved = client.post("/categories/move", data={"sources": [0], "destination": 2}).json()
    assert [category["name"] for category in moved["categories"]] == ["B", "C", "A", "D"]

    client.post("/categories/delete", data={"positions": [0, 3]})
    assert _stored_names(store) == ["C", "A"]


def test_out_of_range_positions_are_rejected(client: TestClient) -> None:
    client.post("/categories", data={"name": "Only"})

    assert client.post("/categories/delete", data={"positions": [4]}).status_code == 400
    assert client.post("/categories/move", data={"sources": [0], "destination": -1}).status_code == 400


def test_unknown_category_returns_404(client: TestClient) -> None:
    assert client.get("/categories/missing").status_code == 404
    response = client.post("/categories/missing/entries", data={"income": "1", "expense": "1"})
    assert response.status_code == 404


def test_shutdown_flushes_store(store: DataStore) -> None:
    """Leaving the application lifespan saves state mutated outside a request."""

    with TestClient(create_application(store)):
        store.add_category("Unsaved")
        assert store.blob_store.read(store.key) is None

    assert _stored_names(store) == ["Unsaved"]


def test_unknown_sort_option_is_rejected(client: TestClient) -> None:
    category_id = client.post("/categories", data={"name": "Food"}).json()["category"]["id"]

    response = client.get(f"/categories/{category_id}", params={"sort": "amount"})

    assert response.status_code == 400
    assert client.get(f"/categories/{category_id}").json()["sort"] == "name"
