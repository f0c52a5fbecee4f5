"""
Backfill data schemas - Pydantic validation models.

Request/response schemas exchanged with the backfill backend.
"""

import base64
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, field_serializer

from backfill_dashboard.domain.schemas.common import BaseSchema


class BackfillState(str, Enum):
    """Backfill run lifecycle state."""

    PAUSED = "PAUSED"
    RUNNING = "RUNNING"
    CANCELLED = "CANCELLED"
    COMPLETE = "COMPLETE"

    @property
    def is_terminal(self) -> bool:
        """COMPLETE and CANCELLED are final states."""
        return self in (BackfillState.COMPLETE, BackfillState.CANCELLED)


class CreateBackfillRequest(BaseSchema):
    """
    Create backfill request sent to the backend.

    Field names follow the dashboard form; aliases follow the backend API.
    """

    name: Optional[str] = Field(
        default=None, serialization_alias="backfill_name", description="Run name"
    )
    dry_run: bool = Field(default=True, description="Dry run, nothing is written")
    range_start: Optional[bytes] = Field(
        default=None,
        serialization_alias="pkey_range_start",
        description="Inclusive primary key range start",
    )
    range_end: Optional[bytes] = Field(
        default=None,
        serialization_alias="pkey_range_end",
        description="Inclusive primary key range end",
    )
    batch_size: Optional[int] = Field(default=None, description="Records per batch")
    scan_size: Optional[int] = Field(default=None, description="Records per scan")
    num_threads: Optional[int] = Field(
        default=None, description="Threads per partition"
    )
    extra_sleep_ms: Optional[int] = Field(
        default=None, description="Sleep between batches in milliseconds"
    )
    backoff_schedule: Optional[str] = Field(
        default=None, description="Comma separated backoff schedule in milliseconds"
    )
    custom_parameters: Optional[dict[str, bytes]] = Field(
        default=None,
        serialization_alias="parameter_map",
        description="Custom backfill parameters",
    )

    @field_serializer("range_start", "range_end", when_used="json-unless-none")
    def serialize_range(self, value: bytes) -> str:
        return base64.b64encode(value).decode("ascii")

    @field_serializer("custom_parameters", when_used="json-unless-none")
    def serialize_parameters(self, value: dict[str, bytes]) -> dict[str, str]:
        return {
            key: base64.b64encode(parameter).decode("ascii")
            for key, parameter in value.items()
        }

    def to_payload(self) -> dict:
        """Convert to the JSON body expected by the backend."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CreateBackfillResponse(BaseSchema):
    """Create backfill response."""

    backfill_run_id: int


class PartitionStatus(BaseSchema):
    """Progress of one partition of a backfill run."""

    name: str
    state: BackfillState
    pkey_cursor: Optional[str] = None
    pkey_start: Optional[str] = None
    pkey_end: Optional[str] = None
    backfilled_matching_record_count: int = 0
    computed_matching_record_count: int = 0
    matching_records_per_minute: Optional[int] = None
    precomputing_done: bool = False


class EventLog(BaseSchema):
    """Entry of a backfill run's event log."""

    occurred_at: datetime
    user: Optional[str] = None
    partition_name: Optional[str] = None
    message: str
    extra_data: Optional[str] = None


class BackfillStatusResponse(BaseSchema):
    """Status snapshot of a backfill run."""

    id: int
    service_name: str
    variant: str = "default"
    name: Optional[str] = None
    state: BackfillState
    dry_run: bool
    num_threads: int
    scan_size: int
    batch_size: int
    extra_sleep_ms: int
    backoff_schedule: Optional[str] = None
    created_at: datetime
    created_by_user: Optional[str] = None
    deleted_at: Optional[datetime] = None
    parameters: Optional[dict[str, str]] = None
    partitions: list[PartitionStatus] = Field(default_factory=list)
    event_logs: list[EventLog] = Field(default_factory=list)
    next_offset: Optional[str] = None
