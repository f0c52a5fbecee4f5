"""
Backfill status page view models.

Plain display rows derived from a status snapshot, rendered by the
templates without any further logic.
"""

from typing import Optional

from pydantic import Field

from backfill_dashboard.domain.schemas.backfill import BackfillState
from backfill_dashboard.domain.schemas.common import BaseSchema

START_STATE_BUTTON_LABEL = "Start"
PAUSE_STATE_BUTTON_LABEL = "Pause"
CANCEL_STATE_BUTTON_LABEL = "Cancel"
DELETE_STATE_BUTTON_LABEL = "Delete"
UPDATE_BUTTON_LABEL = "Update"
VIEW_LOGS_BUTTON_LABEL = "View Logs"


class Link(BaseSchema):
    """
    Labelled link or button.

    For state buttons ``href`` carries the value submitted to the update
    handler rather than a URL.
    """

    label: str
    href: str


class DescriptionListRow(BaseSchema):
    """Row of the configuration description list."""

    label: str
    description: str = ""
    button: Optional[Link] = None
    update_field_id: Optional[str] = None
    cancel_button: Optional[Link] = None
    delete_button: Optional[Link] = None

    @property
    def is_editable(self) -> bool:
        """Row offers an inline form to change its value."""
        return self.button is not None and self.button.label == UPDATE_BUTTON_LABEL

    @property
    def is_external_link(self) -> bool:
        return self.button is not None and self.button.label == VIEW_LOGS_BUTTON_LABEL


class PartitionRow(BaseSchema):
    """Display values of one partition."""

    name: str
    state: BackfillState
    cursor: str = ""
    range: str
    progress: str
    progress_percent: Optional[int] = None
    rate: str
    eta: str
    edit_cursor_href: Optional[str] = None


class EventLogRow(BaseSchema):
    """Display values of one event log entry."""

    occurred_at: str
    user: str = ""
    partition_name: str = ""
    message: str
    extra_data: str = ""


class Pagination(BaseSchema):
    """Event log pagination links."""

    previous_href: Optional[str] = None
    next_href: Optional[str] = None


class BackfillShowPage(BaseSchema):
    """Everything the status page template renders."""

    id: int
    title: str
    heading: str
    subheading: str
    name: Optional[str] = None
    label: str
    state: BackfillState
    breadcrumbs: list[Link] = Field(default_factory=list)
    clone_href: str
    update_action: str
    left_configuration_rows: list[DescriptionListRow] = Field(default_factory=list)
    right_configuration_rows: list[DescriptionListRow] = Field(default_factory=list)
    show_partition_actions: bool = False
    partitions: list[PartitionRow] = Field(default_factory=list)
    event_logs: list[EventLogRow] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)
    auto_reload_seconds: int = 0
