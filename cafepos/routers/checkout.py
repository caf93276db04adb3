"""
Checkout API Router

Quote and submit the session's cart. Cash received may be sent as typed
text ("20", "12,50") or as integer cents.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from cafepos.cart import CartRegistry, CartStore
from cafepos.checkout import CheckoutService, TenderType
from cafepos.errors import BackendNotConfiguredError, CheckoutError
from cafepos.services.money import parse_amount_to_cents
from cafepos.services.repositories import OrderRepository

from .deps import get_cart_registry, get_cart_store, get_order_repository, get_session_id

router = APIRouter(tags=["checkout"])


# ==================== PYDANTIC MODELS ====================

class CheckoutRequest(BaseModel):
    tender_type: TenderType = TenderType.CASH
    cash_received: Optional[str] = None
    cash_received_cents: Optional[int] = None

    def received_cents(self) -> int:
        if self.cash_received_cents is not None:
            return max(self.cash_received_cents, 0)
        return parse_amount_to_cents(self.cash_received)


# ==================== CHECKOUT API ====================

@router.post("/api/checkout/quote")
async def quote_checkout(
    request: CheckoutRequest,
    store: CartStore = Depends(get_cart_store),
    orders: Optional[OrderRepository] = Depends(get_order_repository),
):
    """Totals, change due and whether the order can be submitted"""
    service = CheckoutService(store, orders)
    return service.quote(request.tender_type, request.received_cents())


@router.post("/api/checkout/submit")
async def submit_checkout(
    request: CheckoutRequest,
    session_id: str = Depends(get_session_id),
    store: CartStore = Depends(get_cart_store),
    registry: CartRegistry = Depends(get_cart_registry),
    orders: Optional[OrderRepository] = Depends(get_order_repository),
):
    """Write the order, take its lines out of the cart and return the receipt"""
    service = CheckoutService(store, orders)
    try:
        receipt = await service.submit(request.tender_type, request.received_cents())
    except BackendNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except CheckoutError as e:
        if not e.backend_failure:
            raise HTTPException(status_code=400, detail=e.message)
        # order_id is set when the order row exists but its items do not
        raise HTTPException(status_code=502, detail={"message": e.message, "order_id": e.order_id})
    if store.is_empty:
        registry.discard(session_id)
    return receipt.to_dict()
