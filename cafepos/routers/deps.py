"""
Shared Dependencies for Routers

Lazy-loaded singletons handed to endpoints through FastAPI Depends, so
tests can swap them with app.dependency_overrides.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase._async.client import AsyncClient

from cafepos import config
from cafepos.cart import CartRegistry, CartStore, MemorySessionStorage, RedisSessionStorage, SessionStorage
from cafepos.db import get_supabase
from cafepos.errors import ERROR_BACKEND_NOT_CONFIGURED, ERROR_SESSION_REQUIRED
from cafepos.logging import get_logger
from cafepos.services.repositories import MenuRepository, OrderRepository

logger = get_logger(__name__)


# ==================== LAZY SINGLETONS ====================

_session_storage: Optional[SessionStorage] = None
_cart_registry: Optional[CartRegistry] = None


def get_session_storage() -> SessionStorage:
    """Redis when configured, otherwise in-process memory."""
    global _session_storage
    if _session_storage is None:
        if config.is_redis_configured():
            _session_storage = RedisSessionStorage()
        else:
            logger.warning("Upstash Redis not configured; carts are kept in process memory")
            _session_storage = MemorySessionStorage()
    return _session_storage


def get_cart_registry() -> CartRegistry:
    """Get or create the CartRegistry singleton"""
    global _cart_registry
    if _cart_registry is None:
        _cart_registry = CartRegistry(storage=get_session_storage(), tax_rate_bps=config.TAX_RATE_BPS)
    return _cart_registry


# ==================== REQUEST-SCOPED ====================

def get_session_id(x_session_id: Optional[str] = Header(None)) -> str:
    """Each register tab sends its own session id."""
    if not x_session_id or not x_session_id.strip():
        raise HTTPException(status_code=400, detail=ERROR_SESSION_REQUIRED)
    return x_session_id.strip()


def get_cart_store(
    session_id: str = Depends(get_session_id),
    registry: CartRegistry = Depends(get_cart_registry),
) -> CartStore:
    return registry.get(session_id)


async def get_supabase_client() -> Optional[AsyncClient]:
    """Supabase client, or None when the backend is not configured."""
    if not config.is_supabase_configured():
        return None
    return await get_supabase()


async def get_menu_repository(client: Optional[AsyncClient] = Depends(get_supabase_client)) -> MenuRepository:
    if client is None:
        raise HTTPException(status_code=503, detail=ERROR_BACKEND_NOT_CONFIGURED)
    return MenuRepository(client)


async def get_order_repository(client: Optional[AsyncClient] = Depends(get_supabase_client)) -> Optional[OrderRepository]:
    """Order repository, or None so checkout can report it cannot submit."""
    if client is None:
        return None
    return OrderRepository(client)


async def require_order_repository(
    orders: Optional[OrderRepository] = Depends(get_order_repository),
) -> OrderRepository:
    if orders is None:
        raise HTTPException(status_code=503, detail=ERROR_BACKEND_NOT_CONFIGURED)
    return orders
