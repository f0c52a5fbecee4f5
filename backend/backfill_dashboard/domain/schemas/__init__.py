"""
Domain schemas initialization.

Exports all Pydantic validation schemas.
"""

from backfill_dashboard.domain.schemas.backfill import (
    BackfillState,
    BackfillStatusResponse,
    CreateBackfillRequest,
    CreateBackfillResponse,
    EventLog,
    PartitionStatus,
)
from backfill_dashboard.domain.schemas.backfill_view import (
    BackfillShowPage,
    DescriptionListRow,
    EventLogRow,
    Link,
    Pagination,
    PartitionRow,
)
from backfill_dashboard.domain.schemas.common import HealthResponse

__all__ = [
    # Common
    "HealthResponse",
    # Backfill
    "BackfillState",
    "BackfillStatusResponse",
    "CreateBackfillRequest",
    "CreateBackfillResponse",
    "EventLog",
    "PartitionStatus",
    # Status page
    "BackfillShowPage",
    "DescriptionListRow",
    "EventLogRow",
    "Link",
    "Pagination",
    "PartitionRow",
]
