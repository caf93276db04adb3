"""Cart store: the authoritative line-item collection for one session."""
import threading
from collections import OrderedDict
from decimal import Decimal
from typing import Any, Optional

from cafepos.logging import get_logger, sanitize_id_for_logging

from .models import (
    EMPTY_SNAPSHOT,
    CartSnapshot,
    CartTotals,
    LineItem,
    normalize_id,
)
from .storage import CartPersistence, MemorySessionStorage, SaveFailed, SessionStorage

logger = get_logger(__name__)

# Sessions whose store (and lock) stay cached per process
MAX_CACHED_SESSIONS = 1024


class CartStore:
    """
    Holds one session's cart and applies mutations to it.

    Every operation is synchronous, never raises and returns the current
    snapshot. Invalid input and unknown ids leave the snapshot untouched, and
    an untouched snapshot is not written back to storage.

    Session storage is the source of truth: each mutation re-reads the slot
    under the lock before applying itself, so a write made by another worker
    is never overwritten by an older in-memory snapshot.

    Usage:
        store = CartStore(persistence=CartPersistence(storage, session_id))
        store.add_item({"id": "b", "name": "Latte", "unit_price_cents": 500, "quantity": 2})
        store.totals.total_cents
    """

    def __init__(
        self,
        persistence: Optional[CartPersistence] = None,
        tax_rate_bps: Optional[Decimal] = None,
    ):
        self._lock = threading.Lock()
        self._persistence = persistence
        self._tax_rate_bps = tax_rate_bps
        self._items: CartSnapshot = EMPTY_SNAPSHOT
        if persistence is not None:
            self._items = persistence.load() or EMPTY_SNAPSHOT
        self._totals = CartTotals.from_items(self._items, self._tax_rate_bps)

    # ==================== READ SIDE ====================

    @property
    def items(self) -> CartSnapshot:
        return self._items

    @property
    def snapshot(self) -> CartSnapshot:
        return self._items

    @property
    def totals(self) -> CartTotals:
        return self._totals

    @property
    def subtotal_cents(self) -> int:
        return self._totals.subtotal_cents

    @property
    def tax_cents(self) -> int:
        return self._totals.tax_cents

    @property
    def total_cents(self) -> int:
        return self._totals.total_cents

    @property
    def items_count(self) -> int:
        """Total quantity across all lines."""
        return sum(item.quantity for item in self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def get_item(self, item_id: Any) -> Optional[LineItem]:
        key = normalize_id(item_id)
        return next((item for item in self._items if item.key == key), None)

    def to_dict(self) -> dict:
        """Snapshot plus derived totals, for API responses."""
        return {
            "items": [item.to_dict() for item in self._items],
            "items_count": self.items_count,
            **self._totals.to_dict(),
        }

    def refresh(self) -> CartSnapshot:
        """Pick up whatever another worker last saved for this session."""
        with self._lock:
            self._reload()
            return self._items

    # ==================== MUTATIONS ====================

    def add_item(self, candidate: Any) -> CartSnapshot:
        """
        Add a candidate line or merge it into the line with the same id.

        On merge the quantities add up, the existing unit price is kept, and
        non-empty candidate notes replace the existing notes.
        """
        incoming = LineItem.from_candidate(candidate)
        if incoming is None:
            logger.debug("Rejected malformed cart candidate")
            return self._items

        with self._lock:
            self._reload()
            index = self._index_of(incoming.id)
            if index is None:
                next_items = self._items + (incoming,)
            else:
                existing = self._items[index]
                merged = LineItem(
                    id=existing.id,
                    name=existing.name,
                    unit_price_cents=existing.unit_price_cents,
                    quantity=existing.quantity + incoming.quantity,
                    notes=incoming.notes if incoming.notes else existing.notes,
                )
                next_items = self._replace_at(index, merged)
            return self._commit(next_items)

    def remove_item(self, item_id: Any) -> CartSnapshot:
        """Remove the line with this id."""
        with self._lock:
            self._reload()
            index = self._index_of(item_id)
            if index is None:
                return self._items
            return self._commit(self._items[:index] + self._items[index + 1:])

    def increment(self, item_id: Any) -> CartSnapshot:
        """Add one unit to the line with this id."""
        with self._lock:
            self._reload()
            index = self._index_of(item_id)
            if index is None:
                return self._items
            item = self._items[index]
            return self._commit(self._replace_at(index, item.with_quantity(item.quantity + 1)))

    def decrement(self, item_id: Any) -> CartSnapshot:
        """Take one unit off the line with this id; the last unit removes the line."""
        with self._lock:
            self._reload()
            index = self._index_of(item_id)
            if index is None:
                return self._items
            item = self._items[index]
            if item.quantity <= 1:
                return self._commit(self._items[:index] + self._items[index + 1:])
            return self._commit(self._replace_at(index, item.with_quantity(item.quantity - 1)))

    def clear(self) -> CartSnapshot:
        """Empty the cart."""
        with self._lock:
            self._reload()
            if not self._items:
                return self._items
            return self._commit(EMPTY_SNAPSHOT)

    def set_item_note(self, item_id: Any, note: Optional[str]) -> CartSnapshot:
        """Set the notes of the line with this id ("" for a falsy note)."""
        with self._lock:
            self._reload()
            index = self._index_of(item_id)
            if index is None:
                return self._items
            item = self._items[index]
            return self._commit(self._replace_at(index, item.with_notes(str(note) if note else "")))

    def remove_submitted(self, submitted: CartSnapshot) -> CartSnapshot:
        """
        Take the quantities of a submitted order out of the cart.

        An unchanged cart ends up empty. Lines added while the order was being
        written stay, and a line whose quantity grew keeps the extra units.
        """
        sold = {}
        for item in submitted:
            sold[item.key] = sold.get(item.key, 0) + item.quantity

        with self._lock:
            self._reload()
            remaining = []
            for item in self._items:
                left = item.quantity - sold.get(item.key, 0)
                if left == item.quantity:
                    remaining.append(item)
                elif left > 0:
                    remaining.append(item.with_quantity(left))
            next_items = tuple(remaining)
            if next_items == self._items:
                return self._items
            return self._commit(next_items)

    # ==================== INTERNALS ====================

    def _reload(self) -> None:
        # Caller holds the lock. Nothing usable in storage keeps the memory copy.
        if self._persistence is None:
            return
        stored = self._persistence.load()
        if stored is None or stored == self._items:
            return
        self._items = stored
        self._totals = CartTotals.from_items(stored, self._tax_rate_bps)

    def _index_of(self, item_id: Any) -> Optional[int]:
        key = normalize_id(item_id)
        for index, item in enumerate(self._items):
            if item.key == key:
                return index
        return None

    def _replace_at(self, index: int, item: LineItem) -> CartSnapshot:
        return self._items[:index] + (item,) + self._items[index + 1:]

    def _commit(self, next_items: CartSnapshot) -> CartSnapshot:
        # Caller holds the lock, so saves land in mutation order
        self._items = next_items
        self._totals = CartTotals.from_items(next_items, self._tax_rate_bps)
        if self._persistence is not None:
            result = self._persistence.save(next_items)
            if isinstance(result, SaveFailed):
                logger.debug(f"Cart kept in memory only: {result.reason}")
        return next_items


class CartRegistry:
    """
    Per-process cache of CartStore objects, one per session.

    The cache only shares a store (and its lock) between concurrent requests
    of one worker; the cart itself always comes from session storage. It holds
    at most max_sessions stores, dropping the least recently used.
    """

    def __init__(
        self,
        storage: Optional[SessionStorage] = None,
        tax_rate_bps: Optional[Decimal] = None,
        max_sessions: int = MAX_CACHED_SESSIONS,
    ):
        self.storage = storage if storage is not None else MemorySessionStorage()
        self.tax_rate_bps = tax_rate_bps
        self.max_sessions = max_sessions
        self._stores: "OrderedDict[str, CartStore]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, session_id: str) -> CartStore:
        """Store for this session, refreshed from session storage."""
        with self._lock:
            store = self._stores.get(session_id)
            if store is not None:
                self._stores.move_to_end(session_id)
            else:
                logger.debug(f"Opening cart for session {sanitize_id_for_logging(session_id)}")
                store = CartStore(
                    persistence=CartPersistence(self.storage, session_id),
                    tax_rate_bps=self.tax_rate_bps,
                )
                self._stores[session_id] = store
                while len(self._stores) > self.max_sessions:
                    self._stores.popitem(last=False)
                return store
        store.refresh()
        return store

    def discard(self, session_id: str) -> None:
        """Forget a session's in-memory store (its storage slot is untouched)."""
        with self._lock:
            self._stores.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._stores)
