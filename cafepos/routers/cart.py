"""
Cart API Router

Per-session cart operations. The session is identified by the
X-Session-Id header. Malformed items and unknown ids leave the cart as it
was; every endpoint answers with the current cart.

The cart store talks to session storage synchronously, so these endpoints
are plain functions that FastAPI runs in its threadpool.
"""

import asyncio
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel

from cafepos.cart import CartRegistry, CartStore
from cafepos.errors import ERROR_MENU_ITEM_NOT_FOUND
from cafepos.services.repositories import MenuRepository

from .deps import get_cart_registry, get_cart_store, get_menu_repository, get_session_id

router = APIRouter(tags=["cart"])


# ==================== PYDANTIC MODELS ====================

class NoteRequest(BaseModel):
    note: Optional[str] = None


class AddMenuItemRequest(BaseModel):
    menu_item_id: str
    quantity: int = 1
    notes: str = ""


# ==================== CART API ====================

@router.get("/api/cart")
def get_cart(store: CartStore = Depends(get_cart_store)):
    """Current items with subtotal, tax and total"""
    return store.to_dict()


@router.post("/api/cart/items")
def add_item(
    candidate: Dict[str, Any] = Body(...),
    store: CartStore = Depends(get_cart_store),
):
    """Add a line; merges into an existing line with the same id"""
    store.add_item(candidate)
    return store.to_dict()


@router.post("/api/cart/menu-items")
async def add_menu_item(
    request: AddMenuItemRequest,
    store: CartStore = Depends(get_cart_store),
    menu: MenuRepository = Depends(get_menu_repository),
):
    """Add an active menu item at its current price"""
    item = await menu.get_by_id(request.menu_item_id)
    if not item or not item.active:
        raise HTTPException(status_code=404, detail=ERROR_MENU_ITEM_NOT_FOUND)
    candidate = item.to_cart_candidate(quantity=request.quantity, notes=request.notes)
    await asyncio.to_thread(store.add_item, candidate)
    return store.to_dict()


@router.delete("/api/cart/items/{item_id}")
def remove_item(item_id: str, store: CartStore = Depends(get_cart_store)):
    store.remove_item(item_id)
    return store.to_dict()


@router.post("/api/cart/items/{item_id}/increment")
def increment_item(item_id: str, store: CartStore = Depends(get_cart_store)):
    store.increment(item_id)
    return store.to_dict()


@router.post("/api/cart/items/{item_id}/decrement")
def decrement_item(item_id: str, store: CartStore = Depends(get_cart_store)):
    """Removes the line when its last unit is taken off"""
    store.decrement(item_id)
    return store.to_dict()


@router.put("/api/cart/items/{item_id}/note")
def set_item_note(
    item_id: str,
    request: NoteRequest,
    store: CartStore = Depends(get_cart_store),
):
    store.set_item_note(item_id, request.note)
    return store.to_dict()


@router.delete("/api/cart")
def clear_cart(
    session_id: str = Depends(get_session_id),
    store: CartStore = Depends(get_cart_store),
    registry: CartRegistry = Depends(get_cart_registry),
):
    store.clear()
    registry.discard(session_id)
    return store.to_dict()
