"""
Checkout Service

Turns the current cart into an order:
- Tender types: cash, card, other
- Cash: amount received must cover the total; change due is reported
- Writes one orders row and one order_items row per cart line
- Takes the submitted lines out of the cart only after both writes succeed
"""
import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from cafepos.cart import CartStore
from cafepos.cart.models import CartSnapshot
from cafepos.errors import (
    BackendNotConfiguredError,
    CheckoutError,
    ERROR_CANNOT_SUBMIT,
    ERROR_CART_EMPTY,
    ERROR_ORDER_ID_MISSING,
    ERROR_ORDER_INSERT_FAILED,
    ERROR_ORDER_ITEMS_INSERT_FAILED,
)
from cafepos.logging import get_logger, sanitize_id_for_logging
from cafepos.services.money import format_cents
from cafepos.services.repositories import OrderRepository

logger = get_logger(__name__)


class TenderType(str, Enum):
    """How the customer pays."""
    CASH = "cash"
    CARD = "card"
    OTHER = "other"


def change_due_cents(tender: TenderType, cash_received_cents: int, total_cents: int) -> int:
    """Change to hand back; only cash produces change and it is never negative."""
    if tender != TenderType.CASH:
        return 0
    return max(cash_received_cents - total_cents, 0)


def can_submit(
    items: CartSnapshot,
    total_cents: int,
    tender: TenderType,
    cash_received_cents: int = 0,
    backend_configured: bool = True,
) -> bool:
    """Whether the order may be submitted with this tender."""
    if not items or not backend_configured:
        return False
    if total_cents <= 0:
        return False
    if tender == TenderType.CASH:
        return cash_received_cents >= total_cents
    return True


def build_order_item_rows(order_id, items: CartSnapshot) -> List[dict]:
    """One order_items row per cart line."""
    return [
        {
            "order_id": order_id,
            "item_id": item.id,
            "name": item.name,
            "unit_price_cents": item.unit_price_cents,
            "quantity": item.quantity,
            "notes": item.notes or None,
        }
        for item in items
    ]


@dataclass(frozen=True)
class CheckoutReceipt:
    order_id: str
    tender_type: TenderType
    items_count: int
    subtotal_cents: int
    tax_cents: int
    total_cents: int
    cash_received_cents: int
    change_due_cents: int

    def to_dict(self) -> dict:
        return {
            "order_id": self.order_id,
            "tender_type": self.tender_type.value,
            "items_count": self.items_count,
            "subtotal_cents": self.subtotal_cents,
            "tax_cents": self.tax_cents,
            "total_cents": self.total_cents,
            "cash_received_cents": self.cash_received_cents,
            "change_due_cents": self.change_due_cents,
            "display": {
                "subtotal": format_cents(self.subtotal_cents),
                "tax": format_cents(self.tax_cents),
                "total": format_cents(self.total_cents),
                "cash_received": format_cents(self.cash_received_cents),
                "change_due": format_cents(self.change_due_cents),
            },
        }


class CheckoutService:
    """
    Submits one session's cart.

    Usage:
        service = CheckoutService(store, OrderRepository(client))
        receipt = await service.submit(TenderType.CASH, cash_received_cents=2000)
    """

    def __init__(self, store: CartStore, orders: Optional[OrderRepository]):
        self.store = store
        self.orders = orders

    def quote(self, tender: TenderType, cash_received_cents: int = 0) -> dict:
        """Totals, change due and submit readiness without writing anything."""
        totals = self.store.totals
        return {
            "tender_type": tender.value,
            "items_count": self.store.items_count,
            **totals.to_dict(),
            "cash_received_cents": cash_received_cents,
            "change_due_cents": change_due_cents(tender, cash_received_cents, totals.total_cents),
            "can_submit": can_submit(
                self.store.items,
                totals.total_cents,
                tender,
                cash_received_cents,
                backend_configured=self.orders is not None,
            ),
        }

    async def submit(self, tender: TenderType, cash_received_cents: int = 0) -> CheckoutReceipt:
        """
        Write the order and its items, then take the submitted lines out of the cart.

        Raises:
            BackendNotConfiguredError: If no order repository is available
            CheckoutError: If the cart cannot be submitted or a backend write fails.
                The cart is left as it was.
        """
        items = self.store.items
        totals = self.store.totals

        if self.orders is None:
            raise BackendNotConfiguredError()
        if not items:
            raise CheckoutError(ERROR_CART_EMPTY)
        if not can_submit(items, totals.total_cents, tender, cash_received_cents):
            raise CheckoutError(ERROR_CANNOT_SUBMIT)

        try:
            order_id = await self.orders.create_order(
                subtotal_cents=totals.subtotal_cents,
                tax_cents=totals.tax_cents,
                total_cents=totals.total_cents,
                tender_type=tender.value,
            )
        except Exception as e:
            logger.error(f"Order insert failed: {e}", exc_info=True)
            raise CheckoutError(f"{ERROR_ORDER_INSERT_FAILED}: {e}", backend_failure=True) from e

        if not order_id:
            raise CheckoutError(ERROR_ORDER_ID_MISSING, backend_failure=True)

        try:
            await self.orders.add_items(build_order_item_rows(order_id, items))
        except Exception as e:
            logger.error(
                f"order_items insert failed for order {sanitize_id_for_logging(order_id)}: {e}",
                exc_info=True,
            )
            raise CheckoutError(
                f"{ERROR_ORDER_ITEMS_INSERT_FAILED}: {e}", order_id=str(order_id), backend_failure=True
            ) from e

        # Lines added while the order was being written stay in the cart
        await asyncio.to_thread(self.store.remove_submitted, items)
        logger.info(
            f"Order {sanitize_id_for_logging(order_id)} submitted: "
            f"{len(items)} lines, total {totals.total_cents} cents, tender {tender.value}"
        )

        return CheckoutReceipt(
            order_id=str(order_id),
            tender_type=tender,
            items_count=sum(item.quantity for item in items),
            subtotal_cents=totals.subtotal_cents,
            tax_cents=totals.tax_cents,
            total_cents=totals.total_cents,
            cash_received_cents=cash_received_cents,
            change_due_cents=change_due_cents(tender, cash_received_cents, totals.total_cents),
        )
