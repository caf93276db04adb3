"""Order Repository - orders and order_items operations."""
from datetime import datetime
from typing import List, Optional

from cafepos.db import Tables
from cafepos.services.models import Order, OrderItem

from .base import TableRepository


class OrderRepository(TableRepository):
    """orders / order_items database operations."""

    table = Tables.ORDERS

    async def create_order(
        self,
        subtotal_cents: int,
        tax_cents: int,
        total_cents: int,
        tender_type: str,
    ) -> Optional[str]:
        """Insert an orders row and return its id (None if none came back)."""
        data = {
            "subtotal_cents": subtotal_cents,
            "tax_cents": tax_cents,
            "total_cents": total_cents,
            "tender_type": tender_type,
        }
        result = await self.client.table(self.table).insert(data).execute()
        if not result.data:
            return None
        return result.data[0].get("id")

    async def add_items(self, rows: List[dict]) -> None:
        """Insert order_items rows in one request."""
        if not rows:
            return
        await self.client.table(Tables.ORDER_ITEMS).insert(rows).execute()

    async def get_by_id(self, order_id: str) -> Optional[Order]:
        result = await self.client.table(self.table).select("*").eq("id", order_id).limit(1).execute()
        return Order(**result.data[0]) if result.data else None

    async def get_items(self, order_id: str) -> List[OrderItem]:
        """Lines of one order, as written at checkout."""
        result = await self.client.table(Tables.ORDER_ITEMS).select("*").eq("order_id", order_id).execute()
        return [OrderItem(**row) for row in result.data or []]

    async def get_in_range(self, start: datetime, end: datetime) -> List[Order]:
        """Orders with start <= created_at < end, newest first."""
        result = await self.client.table(self.table).select(
            "id, created_at, subtotal_cents, tax_cents, total_cents, tender_type"
        ).gte("created_at", start.isoformat()).lt(
            "created_at", end.isoformat()
        ).order("created_at", desc=True).execute()
        return [Order(**row) for row in result.data or []]
