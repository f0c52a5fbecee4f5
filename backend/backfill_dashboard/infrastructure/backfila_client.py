"""
Backfill backend REST API client.

Handles communication with the backfill backend: fetching run status,
creating runs and building links to the external logs viewer.
"""

from typing import Any, Optional
from urllib.parse import quote

import httpx

from backfill_dashboard import __version__
from backfill_dashboard.core.exceptions import (
    BackendServiceError,
    BackendUnavailableError,
    BackfillNotFoundError,
)
from backfill_dashboard.core.logging import get_logger
from backfill_dashboard.domain.schemas.backfill import (
    BackfillStatusResponse,
    CreateBackfillRequest,
    CreateBackfillResponse,
)

logger = get_logger(__name__)


class BackfilaClient:
    """
    REST client for the backfill backend.

    Handles:
    - Backfill run status snapshots, with event log pagination
    - Backfill run creation
    - External logs links
    - Backend health checks
    """

    def __init__(
        self,
        base_url: str,
        logs_url_template: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize backend client.

        Args:
            base_url: Base URL of the backend API
            logs_url_template: Logs link, formatted with ``backfill_run_id``
            timeout: Request timeout in seconds
            transport: Optional transport override (used by tests)
        """
        self._base_url = base_url.rstrip("/")
        self._logs_url_template = logs_url_template
        self._http = httpx.Client(
            base_url=self._base_url,
            timeout=timeout,
            headers={
                "Accept": "application/json",
                "User-Agent": f"backfill-dashboard/{__version__}",
            },
            transport=transport,
        )

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(
                "Backfill backend unreachable",
                method=method,
                path=path,
                error=str(e),
            )
            raise BackendUnavailableError(
                message=f"Backfill backend is unavailable: {e}",
                details={"path": path},
            ) from e

        if not response.is_success:
            logger.warning(
                "Backfill backend call failed",
                method=method,
                path=path,
                status_code=response.status_code,
            )
        return response

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        raise BackendServiceError(
            message=response.text or f"HTTP {response.status_code}",
            backend_status_code=response.status_code,
            details={"path": response.request.url.path},
        )

    def status(
        self, backfill_id: int, offset: Optional[str] = None
    ) -> BackfillStatusResponse:
        """
        Get the status snapshot of a backfill run.

        Args:
            backfill_id: Backfill run ID
            offset: Event log page offset returned by a previous call

        Returns:
            Status snapshot

        Raises:
            BackfillNotFoundError: If the backend has no such run
            BackendServiceError: If the backend rejects the call
            BackendUnavailableError: If the backend cannot be reached
        """
        params = {"offset": offset} if offset else None
        response = self._request("GET", f"/backfills/{backfill_id}/status", params=params)

        if response.status_code == 404:
            raise BackfillNotFoundError(backfill_id)
        self._raise_for_status(response)

        return BackfillStatusResponse.model_validate(response.json())

    def create(
        self, service: str, variant: str, request: CreateBackfillRequest
    ) -> CreateBackfillResponse:
        """
        Create a backfill run.

        Args:
            service: Service that owns the backfill
            variant: Service variant, ``default`` when the service has none
            request: Create request

        Returns:
            Response carrying the new backfill run ID

        Raises:
            BackendServiceError: If the backend rejects the request
            BackendUnavailableError: If the backend cannot be reached
        """
        path = (
            f"/services/{quote(service, safe='')}"
            f"/variants/{quote(variant, safe='')}/create"
        )
        response = self._request("POST", path, json=request.to_payload())
        self._raise_for_status(response)

        return CreateBackfillResponse.model_validate(response.json())

    def logs_url(self, backfill_id: int) -> str:
        """Link to the external logs viewer for a backfill run."""
        return self._logs_url_template.format(backfill_run_id=backfill_id)

    def is_healthy(self) -> bool:
        """Check whether the backend answers its status endpoint."""
        try:
            response = self._http.get("/_status")
        except httpx.HTTPError as e:
            logger.warning(f"Backfill backend health check failed: {e}")
            return False
        return response.status_code == 200
