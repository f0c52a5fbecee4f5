"""
Backfill create service containing business logic.

Turns a submitted create/clone form into a create request and
forwards it to the backend.
"""

import re
from enum import Enum
from typing import Mapping, Optional, Tuple

from backfill_dashboard.core.exceptions import BackfillNotFoundError, FormValidationError
from backfill_dashboard.core.logging import get_logger
from backfill_dashboard.domain.schemas.backfill import (
    CreateBackfillRequest,
    CreateBackfillResponse,
    PartitionStatus,
)
from backfill_dashboard.infrastructure.backfila_client import BackfilaClient

logger = get_logger(__name__)


class BackfillCreateField(str, Enum):
    """Field ids of the create/clone form."""

    SERVICE = "service"
    VARIANT = "variant"
    BACKFILL_NAME = "backfill_name"
    DRY_RUN = "dry_run"
    RANGE_OPTION = "range_option"
    BACKFILL_ID_TO_CLONE = "backfill_id_to_clone"
    RANGE_START = "range_start"
    RANGE_END = "range_end"
    BATCH_SIZE = "batch_size"
    SCAN_SIZE = "scan_size"
    THREADS_PER_PARTITION = "threads_per_partition"
    EXTRA_SLEEP_MS = "extra_sleep_ms"
    BACKOFF_SCHEDULE = "backoff_schedule"
    CUSTOM_PARAMETER_PREFIX = "custom_parameter_"


class RangeOption(str, Enum):
    """How a cloned backfill picks its key range."""

    NEW = "new"
    CONTINUE = "continue"
    RESTART = "restart"


def _not_blank(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value


_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def _to_int(value: Optional[str]) -> Optional[int]:
    """Parse an integer form value, treating blank or bad input as absent."""
    if value is None or not _INTEGER_PATTERN.fullmatch(value):
        return None
    return int(value)


def _encode(value: Optional[str]) -> Optional[bytes]:
    return value.encode("utf-8") if value is not None else None


class BackfillCreateService:
    """
    Service layer for creating and cloning backfills.

    Implements form parsing, clone range resolution and submission.
    """

    def __init__(self, client: BackfilaClient):
        """Initialize backfill create service."""
        self.client = client

    def build_request(
        self, form_fields: Mapping[str, Optional[str]]
    ) -> Tuple[str, str, CreateBackfillRequest]:
        """
        Build a create request from submitted form fields.

        Args:
            form_fields: Form field values keyed by field id

        Returns:
            Service, variant and the create request

        Raises:
            FormValidationError: If service or variant is missing
        """
        service = _not_blank(form_fields.get(BackfillCreateField.SERVICE.value))
        if service is None:
            raise FormValidationError(field=BackfillCreateField.SERVICE.value)
        variant = _not_blank(form_fields.get(BackfillCreateField.VARIANT.value))
        if variant is None:
            raise FormValidationError(field=BackfillCreateField.VARIANT.value)

        range_start, range_end = self._resolve_range(form_fields)

        request = CreateBackfillRequest(
            name=_not_blank(form_fields.get(BackfillCreateField.BACKFILL_NAME.value)),
            # Unchecked box in UI will not send a value
            dry_run=form_fields.get(BackfillCreateField.DRY_RUN.value) not in ("off", None),
            range_start=range_start,
            range_end=range_end,
            batch_size=_to_int(form_fields.get(BackfillCreateField.BATCH_SIZE.value)),
            scan_size=_to_int(form_fields.get(BackfillCreateField.SCAN_SIZE.value)),
            num_threads=_to_int(
                form_fields.get(BackfillCreateField.THREADS_PER_PARTITION.value)
            ),
            extra_sleep_ms=_to_int(
                form_fields.get(BackfillCreateField.EXTRA_SLEEP_MS.value)
            ),
            backoff_schedule=_not_blank(
                form_fields.get(BackfillCreateField.BACKOFF_SCHEDULE.value)
            ),
            custom_parameters=self._custom_parameters(form_fields),
        )
        return service, variant, request

    def create(self, form_fields: Mapping[str, Optional[str]]) -> CreateBackfillResponse:
        """
        Build a create request and submit it to the backend.

        Args:
            form_fields: Form field values keyed by field id

        Returns:
            Backend response carrying the new backfill run ID
        """
        service, variant, request = self.build_request(form_fields)

        logger.info(
            f"Creating backfill for {service} ({variant})",
            dry_run=request.dry_run,
        )
        response = self.client.create(service=service, variant=variant, request=request)

        logger.info(f"Backfill created successfully: {response.backfill_run_id}")
        return response

    def _resolve_range(
        self, form_fields: Mapping[str, Optional[str]]
    ) -> Tuple[Optional[bytes], Optional[bytes]]:
        """
        Pick the key range for the new backfill.

        Continue resumes a cloned backfill from its cursor, restart reruns its
        original range, anything else uses the range typed into the form.
        """
        range_option = form_fields.get(BackfillCreateField.RANGE_OPTION.value)

        if range_option in (RangeOption.CONTINUE.value, RangeOption.RESTART.value):
            partition = self._clone_source_partition(form_fields)
            if partition is None:
                return None, None
            if range_option == RangeOption.CONTINUE.value and partition.pkey_cursor is not None:
                start = partition.pkey_cursor
            else:
                start = partition.pkey_start
            return _encode(start), _encode(partition.pkey_end)

        return (
            _encode(_not_blank(form_fields.get(BackfillCreateField.RANGE_START.value))),
            _encode(_not_blank(form_fields.get(BackfillCreateField.RANGE_END.value))),
        )

    def _clone_source_partition(
        self, form_fields: Mapping[str, Optional[str]]
    ) -> Optional[PartitionStatus]:
        """First partition of the backfill being cloned, if it can be found."""
        raw_id = form_fields.get(BackfillCreateField.BACKFILL_ID_TO_CLONE.value)
        backfill_id = _to_int(raw_id)
        if backfill_id is None:
            logger.warning(f"Ignoring clone range, invalid backfill id {raw_id!r}")
            return None

        try:
            status = self.client.status(backfill_id)
        except BackfillNotFoundError:
            logger.warning(f"Ignoring clone range, backfill {backfill_id} not found")
            return None

        if not status.partitions:
            return None
        return status.partitions[0]

    def _custom_parameters(
        self, form_fields: Mapping[str, Optional[str]]
    ) -> Optional[dict[str, bytes]]:
        prefix = BackfillCreateField.CUSTOM_PARAMETER_PREFIX.value
        parameters = {
            key[len(prefix):]: value.encode("utf-8")
            for key, value in form_fields.items()
            if key.startswith(prefix) and _not_blank(value) is not None
        }
        return parameters or None
