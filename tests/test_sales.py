"""Tests for the sales summary"""
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest

from cafepos.services.models import Order
from cafepos.services.sales import SalesService, day_bounds, summarize_orders


def _order(order_id, subtotal, tax, total):
    return Order(id=order_id, subtotal_cents=subtotal, tax_cents=tax, total_cents=total, tender_type="cash")


def test_summarize_orders():
    orders = [_order("1", 450, 40, 490), _order("2", 1450, 129, 1579), _order("3", 100, 9, 109)]

    summary = summarize_orders(orders, date(2025, 1, 1), date(2025, 1, 1))

    assert summary.orders_count == 3
    assert summary.subtotal_cents == 2000
    assert summary.tax_cents == 178
    assert summary.total_cents == 2178
    assert summary.average_order_cents == 726


def test_summarize_no_orders():
    summary = summarize_orders([], date(2025, 1, 1), date(2025, 1, 2))

    assert summary.orders_count == 0
    assert summary.total_cents == 0
    assert summary.average_order_cents == 0
    assert summary.to_dict()["end_date"] == "2025-01-02"


def test_day_bounds_are_inclusive():
    start, end = day_bounds(date(2025, 1, 1), date(2025, 1, 3))

    assert start == datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert end == datetime(2025, 1, 4, tzinfo=timezone.utc)


def test_day_bounds_rejects_reversed_range():
    with pytest.raises(ValueError):
        day_bounds(date(2025, 1, 3), date(2025, 1, 1))


@pytest.mark.asyncio
async def test_sales_service_queries_range(sample_order):
    repo = Mock()
    repo.get_in_range = AsyncMock(return_value=[Order(**sample_order)])
    service = SalesService(repo)

    summary = await service.get_summary(date(2025, 1, 1))

    start, end = repo.get_in_range.await_args.args
    assert start == datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert end == datetime(2025, 1, 2, tzinfo=timezone.utc)
    assert summary.total_cents == 490
    assert summary.end_date == date(2025, 1, 1)


@pytest.mark.asyncio
async def test_get_order_with_items(sample_order):
    repo = Mock()
    repo.get_by_id = AsyncMock(return_value=Order(**sample_order))
    repo.get_items = AsyncMock(return_value=[])

    order = await SalesService(repo).get_order("order-123")

    assert order["id"] == "order-123"
    assert order["created_at"].startswith("2025-01-01T09:30:00")
    assert order["items"] == []


@pytest.mark.asyncio
async def test_get_unknown_order():
    repo = Mock()
    repo.get_by_id = AsyncMock(return_value=None)
    repo.get_items = AsyncMock()

    assert await SalesService(repo).get_order("missing") is None
    repo.get_items.assert_not_awaited()
