"""Base repository with shared Supabase client."""
from typing import Any, Optional

from supabase._async.client import AsyncClient


class BaseRepository:
    """Base class for all repositories.

    Holds an AsyncClient; every query is awaited.
    """

    def __init__(self, client: AsyncClient) -> None:
        self.client = client


class TableRepository(BaseRepository):
    """
    Generic CRUD over one table.

    What every screen needs from a table beyond its own queries: insert,
    update by id and delete by id. Backend errors from the client propagate
    to the caller.
    """

    table: str = ""
    id_column: str = "id"

    def __init__(self, client: AsyncClient, table: Optional[str] = None, id_column: Optional[str] = None) -> None:
        super().__init__(client)
        if table:
            self.table = table
        if id_column:
            self.id_column = id_column
        if not self.table:
            raise ValueError("table name is required")

    async def create(self, record: dict) -> Optional[dict]:
        """Insert one row and return it as stored."""
        result = await self.client.table(self.table).insert(record).execute()
        return result.data[0] if result.data else None

    async def update(self, row_id: Any, patch: dict) -> Optional[dict]:
        """Patch the row with this id; None if no row matched."""
        result = await self.client.table(self.table).update(patch).eq(self.id_column, row_id).execute()
        return result.data[0] if result.data else None

    async def delete(self, row_id: Any) -> bool:
        """Delete the row with this id; True if a row was removed."""
        result = await self.client.table(self.table).delete().eq(self.id_column, row_id).execute()
        return bool(result.data)
