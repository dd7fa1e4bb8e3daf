"""Shared fixtures for the inventory API tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from inventory_api.app.core.store import InMemoryStore, get_store
from inventory_api.app.main import app


def make_product(product_id: int, name: str = "Widget", price=10, in_stock: bool = True) -> dict:
    return {"id": product_id, "name": name, "price": price, "inStock": in_stock}


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore(
        [
            make_product(1, "Widget", 9.99, True),
            make_product(2, "Gadget", 24.5, False),
            make_product(3, "Gizmo", 3, True),
        ]
    )


@pytest.fixture
def empty_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def use_store():
    """Route the API to the given store for the duration of a test."""

    def _use(selected_store):
        app.dependency_overrides[get_store] = lambda: selected_store
        return TestClient(app)

    yield _use
    app.dependency_overrides.clear()


@pytest.fixture
def client(use_store, store) -> TestClient:
    return use_store(store)
