"""Pytest configuration and fixtures"""
import os

# Keep the host's credentials out of the tests
for _name in ("SUPABASE_URL", "SUPABASE_KEY", "UPSTASH_REDIS_REST_URL", "UPSTASH_REDIS_REST_TOKEN", "POS_TAX_RATE_BPS"):
    os.environ.pop(_name, None)

import pytest
from unittest.mock import Mock, AsyncMock

from cafepos.cart import CartStore, CartPersistence, MemorySessionStorage


class RecordingStorage(MemorySessionStorage):
    """Memory storage that counts writes."""

    def __init__(self):
        super().__init__()
        self.writes = 0

    def set(self, key, value):
        self.writes += 1
        super().set(key, value)


class BrokenStorage:
    """Storage whose every call fails, like a disabled or full slot."""

    def get(self, key):
        raise ConnectionError("storage unavailable")

    def set(self, key, value):
        raise ConnectionError("quota exceeded")

    def delete(self, key):
        raise ConnectionError("storage unavailable")


@pytest.fixture
def storage():
    return RecordingStorage()


@pytest.fixture
def broken_storage():
    return BrokenStorage()


@pytest.fixture
def store(storage):
    """Empty cart backed by recording storage"""
    return CartStore(persistence=CartPersistence(storage, "session-1"))


@pytest.fixture
def latte():
    return {"id": "b", "name": "Latte", "unit_price_cents": 500, "quantity": 2}


@pytest.fixture
def croissant():
    return {"id": "a", "name": "Croissant", "unit_price_cents": 450, "quantity": 1}


@pytest.fixture
def mock_supabase_client():
    """Mock async Supabase client; execute() is awaitable"""
    client = Mock()

    table_mock = Mock()
    table_mock.select.return_value = table_mock
    table_mock.insert.return_value = table_mock
    table_mock.update.return_value = table_mock
    table_mock.delete.return_value = table_mock
    table_mock.eq.return_value = table_mock
    table_mock.order.return_value = table_mock
    table_mock.limit.return_value = table_mock
    table_mock.gte.return_value = table_mock
    table_mock.lt.return_value = table_mock
    table_mock.or_.return_value = table_mock
    table_mock.execute = AsyncMock(return_value=Mock(data=[]))

    client.table.return_value = table_mock

    return client


@pytest.fixture
def sample_menu_item():
    """Sample menu_items row"""
    return {
        "id": "menu-1",
        "name": "Latte",
        "price_cents": 500,
        "category": "Coffee",
        "active": True,
    }


@pytest.fixture
def sample_order():
    """Sample orders row"""
    return {
        "id": "order-123",
        "created_at": "2025-01-01T09:30:00+00:00",
        "subtotal_cents": 450,
        "tax_cents": 40,
        "total_cents": 490,
        "tender_type": "cash",
    }
