"""
Jinja2 templates shared by the dashboard pages.
"""

from pathlib import Path
from typing import Optional

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from backfill_dashboard.core.config import get_settings

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render_error_page(
    request: Request,
    message: str,
    status_code: int = 200,
    label: str = "Try Again",
    title: Optional[str] = None,
) -> HTMLResponse:
    """
    Render an error panel inside the dashboard layout.

    The panel's button sends the browser back to the previous page.
    """
    settings = get_settings()
    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "title": title or f"Error | {settings.app_name}",
            "app_name": settings.app_name,
            "message": message,
            "label": label,
        },
        status_code=status_code,
    )
