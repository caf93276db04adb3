"""Database Models - Pydantic models for backend rows."""
from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator


class MenuItem(BaseModel):
    """Row of menu_items."""
    model_config = ConfigDict(extra="ignore")

    id: Union[str, int]
    name: str
    price_cents: int
    category: Optional[str] = None
    active: bool = True

    @field_validator("price_cents")
    @classmethod
    def non_negative_price(cls, v: int) -> int:
        if v < 0:
            raise ValueError("price_cents must be non-negative")
        return v

    def to_cart_candidate(self, quantity: int = 1, notes: str = "") -> dict:
        """Shape this menu row as a cart line candidate."""
        return {
            "id": self.id,
            "name": self.name,
            "unit_price_cents": self.price_cents,
            "quantity": quantity,
            "notes": notes,
        }


class Order(BaseModel):
    """Row of orders."""
    model_config = ConfigDict(extra="ignore")

    id: Union[str, int]
    created_at: Optional[datetime] = None
    subtotal_cents: int = 0
    tax_cents: int = 0
    total_cents: int = 0
    tender_type: Optional[str] = None


class OrderItem(BaseModel):
    """Row of order_items."""
    model_config = ConfigDict(extra="ignore")

    order_id: Union[str, int]
    item_id: Union[str, int]
    name: str
    unit_price_cents: int
    quantity: int
    notes: Optional[str] = None
