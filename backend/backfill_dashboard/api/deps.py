"""
API dependencies for dependency injection.

Provides common dependencies used across dashboard endpoints.
"""

from functools import lru_cache

from fastapi import Depends

from backfill_dashboard.core.config import get_settings
from backfill_dashboard.domain.services.backfill_create import BackfillCreateService
from backfill_dashboard.domain.services.backfill_show import BackfillShowService
from backfill_dashboard.infrastructure.backfila_client import BackfilaClient


@lru_cache()
def get_backfila_client() -> BackfilaClient:
    """
    Get the shared backend client.

    Created once so connections to the backend are pooled across requests.
    """
    settings = get_settings()
    return BackfilaClient(
        base_url=settings.backfila_url,
        logs_url_template=settings.logs_url_template,
        timeout=settings.backfila_timeout_seconds,
    )


def get_backfill_create_service(
    client: BackfilaClient = Depends(get_backfila_client),
) -> BackfillCreateService:
    """
    Get backfill create service dependency.

    Args:
        client: Backend client

    Returns:
        Backfill create service instance
    """
    return BackfillCreateService(client)


def get_backfill_show_service(
    client: BackfilaClient = Depends(get_backfila_client),
) -> BackfillShowService:
    """
    Get backfill show service dependency.

    Args:
        client: Backend client

    Returns:
        Backfill show service instance
    """
    settings = get_settings()
    return BackfillShowService(
        client,
        app_name=settings.app_name,
        auto_reload_seconds=settings.auto_reload_seconds,
    )
