"""Test fixtures for the storefront service tests."""

import pytest
from fastapi.testclient import TestClient

from storefront_service.server import app, state
from tests.fakes import FakeDocumentStore


@pytest.fixture
def fake_store():
    """Create an empty in-memory document store.

    Returns:
        FakeDocumentStore: Store with no documents.
    """
    return FakeDocumentStore()


@pytest.fixture
def products(fake_store):
    """Seed the product catalog.

    Returns:
        FakeCollection: The Products collection with five clubs, one of
        which has no availability field.
    """
    collection = fake_store.collection("Products")
    collection.seed({"name": "Chess Club", "location": "Hendon", "price": 100, "availability": 5})
    collection.seed({"name": "Art Club", "location": "Colindale", "price": 80, "availability": 1})
    collection.seed({"name": "Drama", "location": "Room 7B", "price": 7, "availability": 3})
    collection.seed({"name": "Robotics", "location": "Lab", "price": 120})
    collection.seed({"name": "Pottery", "location": "Block 7", "price": 50, "availability": 2})
    return collection


@pytest.fixture
def product_ids(products):
    """Map product names to their ObjectIds."""
    return {doc["name"]: doc["_id"] for doc in products.all()}


@pytest.fixture
def orders(fake_store):
    return fake_store.collection("Orders")


@pytest.fixture
def test_client(fake_store, products, orders):
    """Create a test client with the app wired to the fake store."""
    state.configure(fake_store)
    yield TestClient(app)
    state.reset()
