from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from backfill_dashboard.api.deps import get_backfila_client
from backfill_dashboard.core.exceptions import BackfillNotFoundError
from backfill_dashboard.domain.schemas.backfill import (
    BackfillStatusResponse,
    CreateBackfillResponse,
)
from backfill_dashboard.main import app


class FakeBackfilaClient:
    """In-memory stand-in for the backfill backend."""

    def __init__(self, statuses=None, backfill_run_id=42, create_error=None, healthy=True):
        self.statuses = statuses or {}
        self.backfill_run_id = backfill_run_id
        self.create_error = create_error
        self.healthy = healthy
        self.status_calls = []
        self.create_calls = []

    def status(self, backfill_id, offset=None):
        self.status_calls.append((backfill_id, offset))
        if backfill_id not in self.statuses:
            raise BackfillNotFoundError(backfill_id)
        return self.statuses[backfill_id]

    def create(self, service, variant, request):
        self.create_calls.append((service, variant, request))
        if self.create_error is not None:
            raise self.create_error
        return CreateBackfillResponse(backfill_run_id=self.backfill_run_id)

    def logs_url(self, backfill_id):
        return f"https://logs.example.com/backfills/{backfill_id}"

    def is_healthy(self):
        return self.healthy


def make_partition(**overrides):
    partition = {
        "name": "-80",
        "state": "PAUSED",
        "pkey_cursor": None,
        "pkey_start": "K0",
        "pkey_end": "K9",
        "backfilled_matching_record_count": 0,
        "computed_matching_record_count": 0,
        "matching_records_per_minute": None,
        "precomputing_done": False,
    }
    partition.update(overrides)
    return partition


def make_status(**overrides):
    status = {
        "id": 12,
        "service_name": "franklin",
        "variant": "default",
        "name": "ChickenSandwichBackfill",
        "state": "PAUSED",
        "dry_run": True,
        "num_threads": 1,
        "scan_size": 10000,
        "batch_size": 100,
        "extra_sleep_ms": 0,
        "backoff_schedule": None,
        "created_at": datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        "created_by_user": "molly",
        "deleted_at": None,
        "parameters": None,
        "partitions": [make_partition()],
        "event_logs": [
            {
                "occurred_at": datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
                "user": "molly",
                "partition_name": None,
                "message": "backfill created",
                "extra_data": None,
            }
        ],
        "next_offset": None,
    }
    status.update(overrides)
    return BackfillStatusResponse.model_validate(status)


@pytest.fixture()
def fake_client():
    return FakeBackfilaClient(statuses={12: make_status()})


@pytest.fixture()
def client(fake_client):
    app.dependency_overrides[get_backfila_client] = lambda: fake_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
