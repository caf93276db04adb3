"""
Common Error Constants

Centralized error messages and domain exceptions.
"""

# Cart errors
ERROR_CART_EMPTY = "Cart is empty"
ERROR_SESSION_REQUIRED = "X-Session-Id header is required"

# Checkout errors
ERROR_CANNOT_SUBMIT = "Cannot submit: check tender and totals"
ERROR_ORDER_ID_MISSING = "Order creation succeeded but no order ID returned"
ERROR_ORDER_INSERT_FAILED = "Failed to create order"
ERROR_ORDER_ITEMS_INSERT_FAILED = "Failed to create order items"

# Sales errors
ERROR_ORDER_NOT_FOUND = "Order not found"

# Menu errors
ERROR_MENU_ITEM_NOT_FOUND = "Menu item not found"

# Backend errors
ERROR_BACKEND_NOT_CONFIGURED = "Supabase not configured. Set SUPABASE_URL and SUPABASE_KEY"
ERROR_STORAGE_NOT_CONFIGURED = "Redis not configured. Set UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN"

# Generic errors
ERROR_INVALID_REQUEST = "Invalid request"
ERROR_INVALID_DATE_RANGE = "Please select a valid date range"


class BackendNotConfiguredError(RuntimeError):
    """Raised when a backend-dependent operation runs without credentials."""

    def __init__(self, message: str = ERROR_BACKEND_NOT_CONFIGURED):
        super().__init__(message)


class CheckoutError(Exception):
    """Order submission was rejected or the backend failed while writing it."""

    def __init__(self, message: str, order_id: str | None = None, backend_failure: bool = False):
        super().__init__(message)
        self.message = message
        self.order_id = order_id
        self.backend_failure = backend_failure
