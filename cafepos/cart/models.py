"""Cart models with integer-cent pricing."""
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional, Tuple, Union

from cafepos.services.money import line_total_cents, subtotal_cents, tax_cents, total_cents

ItemId = Union[str, int]


def normalize_id(item_id: Any) -> str:
    """Item ids compare by their string form, so 7 and "7" are the same item."""
    return str(item_id)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _field(candidate: Any, name: str, default: Any = None) -> Any:
    if isinstance(candidate, Mapping):
        return candidate.get(name, default)
    return getattr(candidate, name, default)


@dataclass(frozen=True)
class LineItem:
    """One distinct orderable product in the cart."""
    id: ItemId
    name: str
    unit_price_cents: int
    quantity: int
    notes: str = ""

    @property
    def key(self) -> str:
        return normalize_id(self.id)

    @property
    def line_total_cents(self) -> int:
        """Price for all units on this line."""
        return line_total_cents(self.unit_price_cents, self.quantity)

    def with_quantity(self, quantity: int) -> "LineItem":
        return replace(self, quantity=quantity)

    def with_notes(self, notes: str) -> "LineItem":
        return replace(self, notes=notes)

    def to_dict(self) -> dict:
        """Convert to dictionary for session storage."""
        return {
            "id": self.id,
            "name": self.name,
            "unit_price_cents": self.unit_price_cents,
            "quantity": self.quantity,
            "notes": self.notes,
        }

    @classmethod
    def from_candidate(cls, candidate: Any) -> Optional["LineItem"]:
        """
        Build a LineItem from a mapping or object, or None if it is malformed.

        Requires a str/int id, a str name, a non-negative int price and a
        positive int quantity. Notes default to "".
        """
        if candidate is None:
            return None

        item_id = _field(candidate, "id")
        name = _field(candidate, "name")
        price = _field(candidate, "unit_price_cents")
        quantity = _field(candidate, "quantity")
        notes = _field(candidate, "notes", "")

        if not (isinstance(item_id, str) or _is_int(item_id)):
            return None
        if not isinstance(name, str):
            return None
        if not _is_int(price) or price < 0:
            return None
        if not _is_int(quantity) or quantity < 1:
            return None

        return cls(
            id=item_id,
            name=name,
            unit_price_cents=price,
            quantity=quantity,
            notes=notes if isinstance(notes, str) else "",
        )

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        """
        Create from a stored dictionary.

        Raises:
            ValueError: If the stored entry is not a valid line item
        """
        item = cls.from_candidate(data)
        if item is None:
            raise ValueError(f"Invalid stored line item: {data!r}")
        return item


CartSnapshot = Tuple[LineItem, ...]

EMPTY_SNAPSHOT: CartSnapshot = ()


@dataclass(frozen=True)
class CartTotals:
    """Money derived from a snapshot. Never stored."""
    subtotal_cents: int
    tax_cents: int
    total_cents: int

    @classmethod
    def from_items(cls, items: CartSnapshot, rate_bps=None) -> "CartTotals":
        subtotal = subtotal_cents(items)
        tax = tax_cents(subtotal, rate_bps)
        return cls(
            subtotal_cents=subtotal,
            tax_cents=tax,
            total_cents=total_cents(subtotal, tax),
        )

    def to_dict(self) -> dict:
        return {
            "subtotal_cents": self.subtotal_cents,
            "tax_cents": self.tax_cents,
            "total_cents": self.total_cents,
        }


def snapshot_to_dict(items: CartSnapshot) -> dict:
    """Serializable form of a snapshot: the item collection only."""
    return {"items": [item.to_dict() for item in items]}


def snapshot_from_dict(data: Any) -> CartSnapshot:
    """
    Rebuild a snapshot from its serialized form.

    Raises:
        ValueError: If data lacks a valid items list, an entry is malformed,
            or two entries share an id
    """
    if not isinstance(data, dict) or not isinstance(data.get("items"), list):
        raise ValueError("Stored cart has no items list")

    items = tuple(LineItem.from_dict(entry) for entry in data["items"])
    if len({item.key for item in items}) != len(items):
        raise ValueError("Stored cart has duplicate item ids")
    return items
