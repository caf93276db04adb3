"""
Sales Summary

KPIs over the orders placed in an inclusive date range: order count,
gross sales, tax collected and average order value, all in cents.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Optional

from cafepos.errors import ERROR_INVALID_DATE_RANGE
from cafepos.logging import get_logger
from cafepos.services.models import Order
from cafepos.services.money import divide_cents
from cafepos.services.repositories import OrderRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class SalesSummary:
    start_date: date
    end_date: date
    orders_count: int
    subtotal_cents: int
    tax_cents: int
    total_cents: int
    average_order_cents: int

    def to_dict(self) -> dict:
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "orders_count": self.orders_count,
            "subtotal_cents": self.subtotal_cents,
            "tax_cents": self.tax_cents,
            "total_cents": self.total_cents,
            "average_order_cents": self.average_order_cents,
        }


def day_bounds(start_date: date, end_date: date) -> tuple[datetime, datetime]:
    """UTC [start of start_date, start of the day after end_date)."""
    if end_date < start_date:
        raise ValueError(ERROR_INVALID_DATE_RANGE)
    start = datetime.combine(start_date, time.min, tzinfo=timezone.utc)
    end = datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=timezone.utc)
    return start, end


def summarize_orders(orders: Iterable[Order], start_date: date, end_date: date) -> SalesSummary:
    """Aggregate order rows; missing amounts count as zero."""
    orders = list(orders)
    subtotal = sum(o.subtotal_cents or 0 for o in orders)
    tax = sum(o.tax_cents or 0 for o in orders)
    total = sum(o.total_cents or 0 for o in orders)
    return SalesSummary(
        start_date=start_date,
        end_date=end_date,
        orders_count=len(orders),
        subtotal_cents=subtotal,
        tax_cents=tax,
        total_cents=total,
        average_order_cents=divide_cents(total, len(orders)),
    )


class SalesService:
    """Reads orders for the sales dashboard."""

    def __init__(self, orders: OrderRepository):
        self.orders = orders

    async def list_orders(self, start_date: date, end_date: date) -> List[Order]:
        start, end = day_bounds(start_date, end_date)
        return await self.orders.get_in_range(start, end)

    async def get_summary(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> SalesSummary:
        """Summary for the range; both ends default to today (UTC)."""
        today = datetime.now(timezone.utc).date()
        start_date = start_date or today
        end_date = end_date or start_date
        orders = await self.list_orders(start_date, end_date)
        logger.debug(f"Summarizing {len(orders)} orders from {start_date} to {end_date}")
        return summarize_orders(orders, start_date, end_date)

    async def get_order(self, order_id: str) -> Optional[dict]:
        """One order with its lines, or None if there is no such order."""
        order = await self.orders.get_by_id(order_id)
        if order is None:
            return None
        items = await self.orders.get_items(order_id)
        return {
            **order.model_dump(mode="json"),
            "items": [item.model_dump(mode="json") for item in items],
        }
