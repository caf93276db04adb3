"""Menu Repository - menu_items operations."""
import re
from typing import Any, List, Optional

from cafepos.db import Tables
from cafepos.services.models import MenuItem

from .base import TableRepository

# Characters with a meaning inside a PostgREST or=(...) filter or a LIKE pattern
_FILTER_SYNTAX = re.compile(r"[,()%*\\]")


def search_pattern(text: Optional[str]) -> Optional[str]:
    """ILIKE pattern for a typed search, or None when nothing is left to match."""
    cleaned = _FILTER_SYNTAX.sub(" ", text or "").strip()
    if not cleaned:
        return None
    return f"%{cleaned}%"


class MenuRepository(TableRepository):
    """menu_items database operations."""

    table = Tables.MENU_ITEMS

    async def get_all(
        self,
        active_only: bool = False,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[MenuItem]:
        """Menu ordered by category then name.

        search matches name or category, case-insensitively.
        """
        query = self.client.table(self.table).select("*")
        if active_only:
            query = query.eq("active", True)
        if category:
            query = query.eq("category", category)
        pattern = search_pattern(search)
        if pattern:
            query = query.or_(f"name.ilike.{pattern},category.ilike.{pattern}")
        result = await query.order("category").order("name").execute()
        return [MenuItem(**row) for row in result.data or []]

    async def get_by_id(self, item_id: Any) -> Optional[MenuItem]:
        result = await self.client.table(self.table).select("*").eq("id", item_id).limit(1).execute()
        return MenuItem(**result.data[0]) if result.data else None

    async def get_categories(self) -> List[str]:
        """Distinct categories of active items, sorted."""
        items = await self.get_all(active_only=True)
        return sorted({item.category for item in items if item.category})
