"""
Dashboard UI routes.

Exports the router serving the dashboard pages.
"""

from fastapi import APIRouter

from backfill_dashboard.api.ui.endpoints import backfill_create, backfill_show

# Create UI router
ui_router = APIRouter()

# Include all page routers
ui_router.include_router(backfill_create.router, tags=["backfills"])

ui_router.include_router(backfill_show.router, tags=["backfills"])
