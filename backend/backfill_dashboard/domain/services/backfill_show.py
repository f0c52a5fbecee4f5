"""
Backfill show service.

Derives the display rows of the backfill status page from a
status snapshot fetched from the backend.
"""

from datetime import datetime
from typing import Optional, TypeVar

from backfill_dashboard.core.formatting import format_duration, format_timestamp
from backfill_dashboard.core.logging import get_logger
from backfill_dashboard.core.paths import (
    SERVICE_INDEX_PATH,
    backfill_create_path,
    backfill_show_page_path,
    backfill_show_path,
    backfill_update_handler_path,
    edit_partition_cursor_path,
    service_show_path,
)
from backfill_dashboard.domain.schemas.backfill import (
    BackfillState,
    BackfillStatusResponse,
    EventLog,
    PartitionStatus,
)
from backfill_dashboard.domain.schemas.backfill_view import (
    CANCEL_STATE_BUTTON_LABEL,
    DELETE_STATE_BUTTON_LABEL,
    PAUSE_STATE_BUTTON_LABEL,
    START_STATE_BUTTON_LABEL,
    UPDATE_BUTTON_LABEL,
    VIEW_LOGS_BUTTON_LABEL,
    BackfillShowPage,
    DescriptionListRow,
    EventLogRow,
    Link,
    Pagination,
    PartitionRow,
)
from backfill_dashboard.domain.services.backfill_create import BackfillCreateField
from backfill_dashboard.infrastructure.backfila_client import BackfilaClient

logger = get_logger(__name__)

DEFAULT_VARIANT = "default"
SOFT_DELETE_VALUE = "soft_delete"
NOT_RUNNING = "-"
COMPUTING = "Computing..."
CALCULATING = "Calculating..."

T = TypeVar("T")


def backfill_label(service_name: str, variant: str) -> str:
    """Service name, qualified with the variant unless it is the default."""
    if variant == DEFAULT_VARIANT:
        return service_name
    return f"{service_name} ({variant})"


def split_columns(rows: list[T]) -> tuple[list[T], list[T]]:
    """Split rows into two columns, the left one taking the odd row."""
    left_count = len(rows) // 2 + len(rows) % 2
    return rows[:left_count], rows[left_count:]


def get_state_button(state: BackfillState) -> Optional[Link]:
    if state == BackfillState.PAUSED:
        return Link(label=START_STATE_BUTTON_LABEL, href=BackfillState.RUNNING.value)
    if state.is_terminal:
        return None
    return Link(label=PAUSE_STATE_BUTTON_LABEL, href=BackfillState.PAUSED.value)


def get_cancel_button(state: BackfillState) -> Optional[Link]:
    if state == BackfillState.PAUSED:
        return Link(label=CANCEL_STATE_BUTTON_LABEL, href=BackfillState.CANCELLED.value)
    return None


def get_delete_button(
    state: BackfillState, deleted_at: Optional[datetime]
) -> Optional[Link]:
    if deleted_at is not None or not state.is_terminal:
        return None
    return Link(label=DELETE_STATE_BUTTON_LABEL, href=SOFT_DELETE_VALUE)


def partition_rate(partition: PartitionStatus) -> str:
    """Rate cell: matching records per minute while running."""
    if partition.state != BackfillState.RUNNING:
        return NOT_RUNNING
    rate = partition.matching_records_per_minute
    if rate is None or rate <= 0:
        return CALCULATING if partition.precomputing_done else COMPUTING
    return f"{rate} #/m"


def partition_eta(partition: PartitionStatus) -> str:
    """ETA cell: remaining records divided by the current rate."""
    if partition.state != BackfillState.RUNNING:
        return NOT_RUNNING
    if not partition.precomputing_done:
        return COMPUTING
    rate = partition.matching_records_per_minute
    computed = partition.computed_matching_record_count
    if rate is None or rate <= 0 or computed <= 0:
        return CALCULATING
    remaining = computed - partition.backfilled_matching_record_count
    eta_seconds = remaining / (rate / 60.0)
    return format_duration(eta_seconds * 1000)


def partition_progress_percent(partition: PartitionStatus) -> Optional[int]:
    """Completed share of the partition, unknown until precomputing is done."""
    if not partition.precomputing_done:
        return None
    computed = partition.computed_matching_record_count
    if computed <= 0:
        return 0
    percent = partition.backfilled_matching_record_count * 100 // computed
    return max(0, min(100, percent))


class BackfillShowService:
    """
    Service layer for the backfill status page.

    Fetches a status snapshot and shapes it into plain display rows.
    """

    def __init__(
        self,
        client: BackfilaClient,
        app_name: str = "Backfila",
        auto_reload_seconds: int = 0,
    ):
        """Initialize backfill show service."""
        self.client = client
        self.app_name = app_name
        self.auto_reload_seconds = auto_reload_seconds

    def build_page(
        self,
        backfill_id: int,
        offset: Optional[str] = None,
        last_offset: Optional[str] = None,
    ) -> BackfillShowPage:
        """
        Build the status page of a backfill run.

        Args:
            backfill_id: Backfill run ID
            offset: Event log page being shown
            last_offset: Event log page shown before this one

        Returns:
            Status page view model

        Raises:
            BackfillNotFoundError: If the backend has no such run
        """
        logger.debug(f"Building status page for backfill {backfill_id}", offset=offset)

        backfill = self.client.status(backfill_id, offset)
        label = backfill_label(backfill.service_name, backfill.variant)
        is_default_variant = backfill.variant == DEFAULT_VARIANT

        left_rows, right_rows = split_columns(
            self.configuration_rows(backfill_id, backfill)
        )

        return BackfillShowPage(
            id=backfill_id,
            title=f"Backfill {backfill_id} | {self.app_name}",
            heading=f"{backfill.service_name} Backfill Run",
            subheading=f"#{backfill_id}",
            name=backfill.name,
            label=label,
            state=backfill.state,
            breadcrumbs=[
                Link(label="Services", href=SERVICE_INDEX_PATH),
                Link(
                    label=label,
                    href=service_show_path(
                        backfill.service_name,
                        "" if is_default_variant else backfill.variant,
                    ),
                ),
                Link(label=f"Backfill #{backfill_id}", href=backfill_show_path(backfill_id)),
            ],
            clone_href=backfill_create_path(
                backfill.service_name,
                str(backfill_id) if is_default_variant else backfill.variant,
                "" if is_default_variant else str(backfill_id),
            ),
            update_action=backfill_update_handler_path(backfill_id),
            left_configuration_rows=left_rows,
            right_configuration_rows=right_rows,
            show_partition_actions=backfill.state == BackfillState.PAUSED,
            partitions=[
                self.partition_row(backfill_id, backfill.state, partition)
                for partition in backfill.partitions
            ],
            event_logs=[self.event_log_row(log) for log in backfill.event_logs],
            pagination=self.pagination(backfill_id, backfill.next_offset, offset, last_offset),
            auto_reload_seconds=(
                self.auto_reload_seconds if backfill.state == BackfillState.RUNNING else 0
            ),
        )

    def configuration_rows(
        self, backfill_id: int, backfill: BackfillStatusResponse
    ) -> list[DescriptionListRow]:
        """Configuration rows in display order, custom parameters last."""

        def editable(label: str, value: object, field_id: str) -> DescriptionListRow:
            return DescriptionListRow(
                label=label,
                description="" if value is None else str(value),
                button=Link(label=UPDATE_BUTTON_LABEL, href="#"),
                update_field_id=field_id,
            )

        created = format_timestamp(backfill.created_at)
        if backfill.created_by_user:
            created = f"{created} by {backfill.created_by_user}"

        rows = [
            DescriptionListRow(
                label="State",
                description=backfill.state.value,
                button=get_state_button(backfill.state),
                update_field_id="state",
                cancel_button=get_cancel_button(backfill.state),
                delete_button=get_delete_button(backfill.state, backfill.deleted_at),
            ),
            DescriptionListRow(
                label="Dry Run",
                description="dry run" if backfill.dry_run else "wet run",
            ),
            editable("Threads per partition", backfill.num_threads, "num_threads"),
            editable("Scan Size", backfill.scan_size, "scan_size"),
            editable("Batch Size", backfill.batch_size, "batch_size"),
            editable("Sleep between batches (ms)", backfill.extra_sleep_ms, "extra_sleep_ms"),
            editable("Backoff Schedule", backfill.backoff_schedule, "backoff_schedule"),
            DescriptionListRow(label="Created", description=created),
            DescriptionListRow(
                label="Logs",
                button=Link(
                    label=VIEW_LOGS_BUTTON_LABEL,
                    href=self.client.logs_url(backfill_id),
                ),
            ),
        ]

        if backfill.parameters:
            prefix = BackfillCreateField.CUSTOM_PARAMETER_PREFIX.value
            rows.append(DescriptionListRow(label="Custom Parameters"))
            rows.extend(
                DescriptionListRow(label=key.removeprefix(prefix), description=value)
                for key, value in backfill.parameters.items()
            )

        return rows

    def partition_row(
        self, backfill_id: int, backfill_state: BackfillState, partition: PartitionStatus
    ) -> PartitionRow:
        return PartitionRow(
            name=partition.name,
            state=partition.state,
            cursor=partition.pkey_cursor or "",
            range=f"{partition.pkey_start or ''} to {partition.pkey_end or ''}",
            progress=(
                f"{partition.backfilled_matching_record_count} / "
                f"{partition.computed_matching_record_count}"
            ),
            progress_percent=partition_progress_percent(partition),
            rate=partition_rate(partition),
            eta=partition_eta(partition),
            edit_cursor_href=(
                edit_partition_cursor_path(backfill_id, partition.name)
                if backfill_state == BackfillState.PAUSED
                else None
            ),
        )

    def event_log_row(self, log: EventLog) -> EventLogRow:
        return EventLogRow(
            occurred_at=format_timestamp(log.occurred_at),
            user=log.user or "",
            partition_name=log.partition_name or "",
            message=log.message,
            extra_data=log.extra_data or "",
        )

    def pagination(
        self,
        backfill_id: int,
        next_offset: Optional[str],
        offset: Optional[str],
        last_offset: Optional[str],
    ) -> Pagination:
        """
        Event log page links.

        Next carries the current offset along so the following page can link
        back to it; previous returns to the first page when no earlier offset
        is known.
        """
        return Pagination(
            previous_href=(
                backfill_show_page_path(backfill_id, offset=last_offset)
                if offset
                else None
            ),
            next_href=(
                backfill_show_page_path(backfill_id, offset=next_offset, last_offset=offset)
                if next_offset
                else None
            ),
        )
