"""
Backfill Dashboard - FastAPI Application.

Server-rendered pages for creating, cloning and inspecting backfill runs
managed by the backfill backend.
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse

from backfill_dashboard import __version__
from backfill_dashboard.api.deps import get_backfila_client
from backfill_dashboard.api.templating import render_error_page
from backfill_dashboard.api.ui import ui_router
from backfill_dashboard.core.config import get_settings
from backfill_dashboard.core.exceptions import BackfillDashboardException
from backfill_dashboard.core.logging import get_logger, setup_logging
from backfill_dashboard.domain.schemas.common import HealthResponse
from backfill_dashboard.infrastructure.backfila_client import BackfilaClient

# Setup logging
setup_logging()
logger = get_logger(__name__)

# Get settings
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events for the application.
    """
    # Startup
    logger.info(
        "Starting Backfill Dashboard",
        version=__version__,
        environment=settings.app_env,
        backfila_url=settings.backfila_url,
    )

    yield

    # Shutdown
    logger.info("Shutting down Backfill Dashboard")

    try:
        if get_backfila_client.cache_info().currsize:
            get_backfila_client().close()
            get_backfila_client.cache_clear()
            logger.info("Backend client closed")
    except Exception as e:
        logger.error("Error during application shutdown", error=str(e))


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=__version__,
    description="Server-rendered dashboard for backfill runs.",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
    lifespan=lifespan,
)


# Exception handlers
@app.exception_handler(BackfillDashboardException)
async def dashboard_exception_handler(
    request: Request, exc: BackfillDashboardException
) -> HTMLResponse:
    """
    Handle custom dashboard exceptions.

    Renders the error page with the exception's HTTP status code.
    """
    logger.warning(
        f"Application exception: {exc.__class__.__name__}",
        error=exc.to_dict(),
        path=request.url.path,
        status_code=exc.status_code,
    )

    return render_error_page(
        request,
        message=exc.message,
        status_code=exc.status_code,
        label="Go Back",
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> HTMLResponse:
    """
    Handle unexpected exceptions.

    Renders a generic error page and logs exception details.
    """
    logger.error(
        "Unexpected exception",
        error=str(exc),
        type=type(exc).__name__,
        path=request.url.path,
        exc_info=True,
    )

    # Don't expose internal errors in production
    error_message = str(exc) if settings.debug else "Internal server error"

    return render_error_page(
        request,
        message=error_message,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        label="Go Back",
    )


# Include UI routers
app.include_router(ui_router)


# Root endpoint
@app.get("/", tags=["root"], summary="Root endpoint", description="Get app information")
async def root():
    """
    Root endpoint.

    Returns basic application information.
    """
    return {
        "name": settings.app_name,
        "version": __version__,
        "environment": settings.app_env,
        "docs_url": "/docs" if settings.debug else None,
    }


# Health check endpoint
@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Check dashboard and backfill backend health",
)
async def health_check(
    client: BackfilaClient = Depends(get_backfila_client),
) -> HealthResponse:
    """
    Health check endpoint.

    Used by load balancers and monitoring systems. The dashboard is only
    useful while the backfill backend answers.
    """
    backend_healthy = await run_in_threadpool(client.is_healthy)
    if not backend_healthy:
        logger.warning("Backfill backend health check failed")

    return HealthResponse(
        status="healthy" if backend_healthy else "unhealthy",
        version=__version__,
        checks={"backfila": backend_healthy},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backfill_dashboard.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
