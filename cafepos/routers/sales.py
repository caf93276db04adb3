"""
Sales API Router

Sales KPIs for the dashboard. Dates are inclusive; both default to today.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from cafepos.errors import ERROR_ORDER_NOT_FOUND
from cafepos.services.repositories import OrderRepository
from cafepos.services.sales import SalesService

from .deps import require_order_repository

router = APIRouter(tags=["sales"])


def get_sales_service(orders: OrderRepository = Depends(require_order_repository)) -> SalesService:
    return SalesService(orders)


@router.get("/api/sales/summary")
async def sales_summary(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    service: SalesService = Depends(get_sales_service),
):
    try:
        summary = await service.get_summary(start_date, end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return summary.to_dict()


@router.get("/api/sales/orders")
async def sales_orders(
    start_date: date,
    end_date: Optional[date] = None,
    service: SalesService = Depends(get_sales_service),
):
    try:
        orders = await service.list_orders(start_date, end_date or start_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [order.model_dump(mode="json") for order in orders]


@router.get("/api/sales/orders/{order_id}")
async def sales_order_detail(order_id: str, service: SalesService = Depends(get_sales_service)):
    """One order with its lines, e.g. to look up an order left without items"""
    order = await service.get_order(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail=ERROR_ORDER_NOT_FOUND)
    return order
