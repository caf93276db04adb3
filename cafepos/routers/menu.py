"""
Menu API Router

CRUD over menu_items for the menu grid and the menu manager.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from cafepos.errors import ERROR_INVALID_REQUEST, ERROR_MENU_ITEM_NOT_FOUND
from cafepos.services.models import MenuItem
from cafepos.services.repositories import MenuRepository

from .deps import get_menu_repository

router = APIRouter(tags=["menu"])


# ==================== PYDANTIC MODELS ====================

class MenuItemCreate(BaseModel):
    name: str = Field(min_length=1)
    price_cents: int = Field(ge=0)
    category: Optional[str] = None
    active: bool = True


class MenuItemUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    price_cents: Optional[int] = Field(default=None, ge=0)
    category: Optional[str] = None
    active: Optional[bool] = None


# ==================== MENU API ====================

@router.get("/api/menu")
async def list_menu(
    active_only: bool = True,
    category: Optional[str] = None,
    search: Optional[str] = None,
    menu: MenuRepository = Depends(get_menu_repository),
):
    """Menu items ordered by category and name; search matches name or category"""
    items = await menu.get_all(active_only=active_only, category=category, search=search)
    return [item.model_dump() for item in items]


@router.get("/api/menu/categories")
async def list_categories(menu: MenuRepository = Depends(get_menu_repository)):
    return await menu.get_categories()


@router.post("/api/menu", status_code=201)
async def create_menu_item(
    request: MenuItemCreate,
    menu: MenuRepository = Depends(get_menu_repository),
):
    row = await menu.create(request.model_dump())
    if not row:
        raise HTTPException(status_code=502, detail=ERROR_INVALID_REQUEST)
    return MenuItem(**row).model_dump()


@router.patch("/api/menu/{item_id}")
async def update_menu_item(
    item_id: str,
    request: MenuItemUpdate,
    menu: MenuRepository = Depends(get_menu_repository),
):
    patch = request.model_dump(exclude_unset=True)
    if not patch:
        raise HTTPException(status_code=400, detail=ERROR_INVALID_REQUEST)
    row = await menu.update(item_id, patch)
    if not row:
        raise HTTPException(status_code=404, detail=ERROR_MENU_ITEM_NOT_FOUND)
    return MenuItem(**row).model_dump()


@router.delete("/api/menu/{item_id}")
async def delete_menu_item(item_id: str, menu: MenuRepository = Depends(get_menu_repository)):
    deleted = await menu.delete(item_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=ERROR_MENU_ITEM_NOT_FOUND)
    return {"deleted": True, "id": item_id}
