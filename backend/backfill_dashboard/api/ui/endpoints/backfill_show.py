"""
Backfill show endpoint.

Renders the status page of a backfill run.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request
from fastapi.responses import HTMLResponse

from backfill_dashboard.api.deps import get_backfill_show_service
from backfill_dashboard.api.templating import templates
from backfill_dashboard.core.paths import BACKFILL_SHOW_PATH
from backfill_dashboard.domain.services.backfill_show import BackfillShowService

router = APIRouter()


@router.get(
    BACKFILL_SHOW_PATH,
    response_class=HTMLResponse,
    summary="Backfill status page",
    description="Show configuration, partition progress and events of a backfill run",
)
def show_backfill(
    request: Request,
    id: int = Path(..., description="Backfill run ID"),
    offset: Optional[str] = Query(None, description="Event log page offset"),
    last_offset: Optional[str] = Query(
        None, alias="lastOffset", description="Previous event log page offset"
    ),
    service: BackfillShowService = Depends(get_backfill_show_service),
) -> HTMLResponse:
    """
    Render the status page of a backfill run.

    Args:
        request: Incoming request
        id: Backfill run ID
        offset: Event log page offset
        last_offset: Offset of the previously shown event log page
        service: Backfill show service instance

    Returns:
        Status page
    """
    page = service.build_page(id, offset=offset, last_offset=last_offset)
    return templates.TemplateResponse(
        request,
        "backfill_show.html",
        {
            "title": page.title,
            "app_name": service.app_name,
            "auto_reload_seconds": page.auto_reload_seconds,
            "page": page,
        },
    )
