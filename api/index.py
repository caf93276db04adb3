"""
Café POS - Main FastAPI Application

Single entry point for the register screens: menu, cart, checkout,
sales dashboard and settings diagnostics.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cafepos import __version__, config
from cafepos.logging import get_logger
from cafepos.routers import (
    cart_router,
    checkout_router,
    menu_router,
    sales_router,
    settings_router,
)

logger = get_logger(__name__)


# ==================== FASTAPI APP ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    if not config.is_supabase_configured():
        logger.warning("SUPABASE_URL or SUPABASE_KEY missing; menu, checkout and sales are disabled")
    yield


app = FastAPI(
    title="Café POS",
    description="Point-of-sale API: menu, cart, checkout and sales",
    version=__version__,
    lifespan=lifespan
)

# The register UI is served from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(menu_router)
app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(sales_router)
app.include_router(settings_router)


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": "cafepos",
        "supabase_configured": config.is_supabase_configured(),
        "redis_configured": config.is_redis_configured(),
    }
