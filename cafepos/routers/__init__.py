"""API routers."""
from .cart import router as cart_router
from .checkout import router as checkout_router
from .menu import router as menu_router
from .sales import router as sales_router
from .settings import router as settings_router

__all__ = [
    "cart_router",
    "checkout_router",
    "menu_router",
    "sales_router",
    "settings_router",
]
