"""Cart package: models, session storage, and the cart store."""
from .models import CartSnapshot, CartTotals, LineItem
from .service import CartRegistry, CartStore
from .storage import (
    CartPersistence,
    MemorySessionStorage,
    RedisSessionStorage,
    Saved,
    SaveFailed,
    SessionStorage,
)

__all__ = [
    "CartSnapshot",
    "CartTotals",
    "LineItem",
    "CartRegistry",
    "CartStore",
    "CartPersistence",
    "MemorySessionStorage",
    "RedisSessionStorage",
    "Saved",
    "SaveFailed",
    "SessionStorage",
]
