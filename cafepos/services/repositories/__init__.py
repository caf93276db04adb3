"""Repositories over Supabase tables."""
from .base import BaseRepository, TableRepository
from .menu_repo import MenuRepository
from .order_repo import OrderRepository

__all__ = [
    "BaseRepository",
    "TableRepository",
    "MenuRepository",
    "OrderRepository",
]
