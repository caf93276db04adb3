"""
Database Module - Supabase and Redis Clients

Provides singleton instances of:
- Async Supabase client for menu, orders and order_items
- Sync Upstash Redis client for per-session cart slots

Cart operations are synchronous, so the cart uses the sync Redis client.
"""

from typing import Optional

from supabase._async.client import AsyncClient, create_client as acreate_client
from upstash_redis import Redis

from cafepos import config
from cafepos.errors import BackendNotConfiguredError, ERROR_STORAGE_NOT_CONFIGURED


_async_supabase_client: Optional[AsyncClient] = None
_sync_redis_client: Optional[Redis] = None


async def get_supabase() -> AsyncClient:
    """
    Get async Supabase client (singleton).

    Raises:
        BackendNotConfiguredError: If SUPABASE_URL or SUPABASE_KEY is missing
    """
    global _async_supabase_client

    if _async_supabase_client is None:
        if not config.is_supabase_configured():
            raise BackendNotConfiguredError()
        _async_supabase_client = await acreate_client(config.SUPABASE_URL, config.SUPABASE_KEY)

    return _async_supabase_client


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _sync_redis_client

    if _sync_redis_client is None:
        if not config.is_redis_configured():
            raise BackendNotConfiguredError(ERROR_STORAGE_NOT_CONFIGURED)
        _sync_redis_client = Redis(
            url=config.UPSTASH_REDIS_REST_URL,
            token=config.UPSTASH_REDIS_REST_TOKEN,
        )

    return _sync_redis_client


class RedisKeys:
    """Redis key prefixes for different data types."""

    # Cart storage, one slot per session
    CART = "fc_pos_cart_v1:"  # fc_pos_cart_v1:{session_id}

    @staticmethod
    def cart_key(session_id: str) -> str:
        return f"{RedisKeys.CART}{session_id}"


class TTL:
    """Time-to-live constants for Redis keys (seconds)."""

    CART = config.CART_TTL_SECONDS


class Tables:
    """Backend table names."""

    MENU_ITEMS = "menu_items"
    ORDERS = "orders"
    ORDER_ITEMS = "order_items"
