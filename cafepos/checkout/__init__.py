"""Checkout: tender handling and order submission."""
from .service import CheckoutReceipt, CheckoutService, TenderType, change_due_cents

__all__ = [
    "CheckoutReceipt",
    "CheckoutService",
    "TenderType",
    "change_due_cents",
]
