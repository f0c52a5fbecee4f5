"""
Common schemas used across the application.

Provides reusable Pydantic models.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    All schemas should inherit from this.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class HealthResponse(BaseSchema):
    """
    Health check response.

    Indicates application and dependency health status.
    """

    status: str = Field(
        ..., description="Overall health status: 'healthy' or 'unhealthy'"
    )
    version: str = Field(..., description="Application version")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Health check timestamp",
    )
    checks: dict[str, bool] = Field(
        default_factory=dict, description="Individual component health checks"
    )
