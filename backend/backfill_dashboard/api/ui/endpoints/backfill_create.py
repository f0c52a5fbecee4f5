"""
Backfill create handler endpoint.

Receives the create/clone form and redirects to the new backfill run.
"""

from typing import Dict, Optional
from urllib.parse import unquote_plus

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse

from backfill_dashboard.api.deps import get_backfill_create_service
from backfill_dashboard.api.templating import render_error_page
from backfill_dashboard.core.logging import get_logger
from backfill_dashboard.core.paths import BACKFILL_CREATE_HANDLER_PATH, backfill_show_path
from backfill_dashboard.domain.services.backfill_create import BackfillCreateService

logger = get_logger(__name__)

router = APIRouter()


def parse_form_fields(query: str) -> Dict[str, Optional[str]]:
    """
    Read the submitted form from a raw query string.

    Repeated fields keep their first value. A key sent without ``=`` has
    no value and reads as ``None``, the same as an absent field.
    """
    form_fields: Dict[str, Optional[str]] = {}
    for pair in query.split("&"):
        if not pair:
            continue
        key, separator, value = pair.partition("=")
        key = unquote_plus(key)
        if key not in form_fields:
            form_fields[key] = unquote_plus(value) if separator else None
    return form_fields


@router.get(
    BACKFILL_CREATE_HANDLER_PATH,
    response_class=HTMLResponse,
    summary="Create or clone backfill",
    description="Create a backfill run from the submitted form and redirect to it",
)
def create_backfill(
    request: Request,
    service: BackfillCreateService = Depends(get_backfill_create_service),
):
    """
    Create or clone a backfill run.

    Any failure is rendered inline with status 200: the only caller is the
    browser form, which should show the problem rather than an error page.

    Args:
        request: Incoming request carrying the form as query parameters
        service: Backfill create service instance

    Returns:
        303 redirect to the new backfill run, or the error page
    """
    form_fields = parse_form_fields(request.url.query)

    try:
        response = service.create(form_fields)
    except Exception as e:
        logger.error(f"Backfill create or clone failed {e}", exc_info=True)
        return render_error_page(
            request,
            message=f"Backfill create or clone failed: {e}",
            status_code=status.HTTP_200_OK,
        )

    location = backfill_show_path(response.backfill_run_id)
    return PlainTextResponse(
        content=f"go to {location}",
        status_code=status.HTTP_303_SEE_OTHER,
        headers={"Location": location},
    )
