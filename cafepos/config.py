"""
Configuration - Environment-backed settings

All settings are read from environment variables once at import time.
Backend and storage helpers report whether they are usable so callers can
degrade gracefully instead of failing at import.
"""

import os
from decimal import Decimal, InvalidOperation


def _env_decimal(name: str, default: str) -> Decimal:
    raw = os.environ.get(name, default)
    try:
        return Decimal(raw)
    except (InvalidOperation, ValueError):
        return Decimal(default)


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


# Supabase (hosted Postgres)
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_KEY = os.environ.get("SUPABASE_KEY", "")

# Upstash Redis - per-session cart slots
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Sales tax in basis points with one decimal digit (887.5 -> 8.875%)
TAX_RATE_BPS = _env_decimal("POS_TAX_RATE_BPS", "887.5")

# Lifetime of a session's cart slot
CART_TTL_SECONDS = _env_int("POS_CART_TTL_SECONDS", 86400)

# Currency of the formatted amounts on receipts
CURRENCY = os.environ.get("POS_CURRENCY", "USD")


def is_supabase_configured() -> bool:
    """True when both backend URL and key are present."""
    return bool(SUPABASE_URL and SUPABASE_KEY)


def is_redis_configured() -> bool:
    """True when both Upstash REST URL and token are present."""
    return bool(UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN)
