"""
Session storage for carts.

A cart snapshot lives in one key-value slot per session. Saving and loading
are best-effort: the slot is a cache for a single session, so failures are
logged and reported as values, never raised.
"""
import json
import threading
from dataclasses import dataclass
from typing import Dict, Optional, Protocol, Union

from cafepos.db import RedisKeys, TTL, get_redis_sync
from cafepos.logging import get_logger, sanitize_id_for_logging

from .models import CartSnapshot, snapshot_from_dict, snapshot_to_dict

logger = get_logger(__name__)


class SessionStorage(Protocol):
    """Key-value slot store scoped to sessions."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemorySessionStorage:
    """In-process storage for local runs and tests."""

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)


class RedisSessionStorage:
    """Upstash Redis storage; slots expire after the session lifetime."""

    def __init__(self, redis=None, ttl_seconds: int = TTL.CART):
        self._redis = redis  # Lazy initialization
        self.ttl_seconds = ttl_seconds

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            self._redis = get_redis_sync()
        return self._redis

    def get(self, key: str) -> Optional[str]:
        return self.redis.get(key)

    def set(self, key: str, value: str) -> None:
        self.redis.set(key, value, ex=self.ttl_seconds)

    def delete(self, key: str) -> None:
        self.redis.delete(key)


@dataclass(frozen=True)
class Saved:
    """The snapshot reached storage."""
    key: str


@dataclass(frozen=True)
class SaveFailed:
    """The snapshot could not be stored; the cart keeps working in memory."""
    key: str
    reason: str


SaveResult = Union[Saved, SaveFailed]


class CartPersistence:
    """
    Saves and restores one session's cart snapshot.

    Usage:
        persistence = CartPersistence(RedisSessionStorage(), session_id)
        items = persistence.load()  # None when nothing usable is stored
        persistence.save(items)
    """

    def __init__(self, storage: SessionStorage, session_id: str):
        self.storage = storage
        self.session_id = session_id
        self.key = RedisKeys.cart_key(session_id)

    def save(self, snapshot: CartSnapshot) -> SaveResult:
        """Write the snapshot; failures are logged and returned, not raised."""
        try:
            payload = json.dumps(snapshot_to_dict(snapshot))
            self.storage.set(self.key, payload)
        except Exception as e:
            logger.warning(
                f"Cart save failed for session {sanitize_id_for_logging(self.session_id)}: {e}"
            )
            return SaveFailed(key=self.key, reason=str(e) or type(e).__name__)
        return Saved(key=self.key)

    def load(self) -> Optional[CartSnapshot]:
        """Read the stored snapshot, or None if absent, unreadable or malformed."""
        try:
            raw = self.storage.get(self.key)
        except Exception as e:
            logger.warning(
                f"Cart load failed for session {sanitize_id_for_logging(self.session_id)}: {e}"
            )
            return None

        if not raw:
            return None

        try:
            return snapshot_from_dict(json.loads(raw))
        except (json.JSONDecodeError, TypeError, ValueError) as e:
            logger.warning(
                f"Corrupted cart data for session {sanitize_id_for_logging(self.session_id)}: {e}"
            )
            return None
