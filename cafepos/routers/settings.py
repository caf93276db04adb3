"""
Settings API Router

Configuration and connectivity diagnostics.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from supabase._async.client import AsyncClient

from cafepos.cart import SessionStorage
from cafepos.services.diagnostics import run_diagnostics

from .deps import get_session_storage, get_supabase_client

router = APIRouter(tags=["settings"])


@router.get("/api/settings/diagnostics")
async def diagnostics(
    client: Optional[AsyncClient] = Depends(get_supabase_client),
    storage: SessionStorage = Depends(get_session_storage),
):
    """Masked environment plus backend and session storage checks"""
    report = await run_diagnostics(client, storage)
    return report.to_dict()
