from datetime import datetime, timezone

import pytest

from backfill_dashboard.domain.schemas.backfill import BackfillState, PartitionStatus
from backfill_dashboard.domain.services.backfill_show import (
    BackfillShowService,
    backfill_label,
    get_cancel_button,
    get_delete_button,
    get_state_button,
    partition_eta,
    partition_progress_percent,
    partition_rate,
    split_columns,
)
from conftest import FakeBackfilaClient, make_partition, make_status


def _partition(**overrides):
    return PartitionStatus.model_validate(make_partition(**overrides))


def _service(*statuses, auto_reload_seconds=0):
    client = FakeBackfilaClient(statuses={status.id: status for status in statuses})
    return BackfillShowService(client, app_name="Backfila", auto_reload_seconds=auto_reload_seconds)


def test_label_hides_default_variant():
    assert backfill_label("franklin", "default") == "franklin"
    assert backfill_label("franklin", "blue") == "franklin (blue)"


@pytest.mark.parametrize("count, left, right", [(7, 4, 3), (8, 4, 4), (1, 1, 0), (0, 0, 0)])
def test_split_columns(count, left, right):
    left_rows, right_rows = split_columns(list(range(count)))

    assert len(left_rows) == left
    assert len(right_rows) == right
    assert left_rows + right_rows == list(range(count))


class TestPartitionProgress:
    def test_running_while_precomputing(self):
        partition = _partition(state="RUNNING", precomputing_done=False, matching_records_per_minute=None)

        assert partition_rate(partition) == "Computing..."
        assert partition_eta(partition) == "Computing..."

    def test_running_while_precomputing_with_rate(self):
        partition = _partition(state="RUNNING", precomputing_done=False, matching_records_per_minute=30)

        assert partition_rate(partition) == "30 #/m"
        assert partition_eta(partition) == "Computing..."

    def test_running_without_rate(self):
        partition = _partition(
            state="RUNNING",
            precomputing_done=True,
            matching_records_per_minute=0,
            computed_matching_record_count=100,
        )

        assert partition_rate(partition) == "Calculating..."
        assert partition_eta(partition) == "Calculating..."

    def test_running_without_computed_records(self):
        partition = _partition(
            state="RUNNING",
            precomputing_done=True,
            matching_records_per_minute=60,
            computed_matching_record_count=0,
        )

        assert partition_rate(partition) == "60 #/m"
        assert partition_eta(partition) == "Calculating..."

    def test_running_with_rate(self):
        partition = _partition(
            state="RUNNING",
            precomputing_done=True,
            matching_records_per_minute=60,
            backfilled_matching_record_count=40,
            computed_matching_record_count=5440,
        )

        assert partition_rate(partition) == "60 #/m"
        # 5400 remaining records at one per second
        assert partition_eta(partition) == "1h30m"

    @pytest.mark.parametrize("state", ["PAUSED", "COMPLETE", "CANCELLED"])
    def test_not_running(self, state):
        partition = _partition(state=state, precomputing_done=True, matching_records_per_minute=60)

        assert partition_rate(partition) == "-"
        assert partition_eta(partition) == "-"

    def test_progress_percent(self):
        assert partition_progress_percent(_partition(precomputing_done=False)) is None
        assert (
            partition_progress_percent(
                _partition(
                    precomputing_done=True,
                    backfilled_matching_record_count=50,
                    computed_matching_record_count=200,
                )
            )
            == 25
        )
        assert partition_progress_percent(_partition(precomputing_done=True)) == 0


class TestStateButtons:
    def test_paused_offers_start_and_cancel(self):
        assert get_state_button(BackfillState.PAUSED).label == "Start"
        assert get_state_button(BackfillState.PAUSED).href == "RUNNING"
        assert get_cancel_button(BackfillState.PAUSED).label == "Cancel"
        assert get_cancel_button(BackfillState.PAUSED).href == "CANCELLED"
        assert get_delete_button(BackfillState.PAUSED, None) is None

    def test_running_offers_pause(self):
        assert get_state_button(BackfillState.RUNNING).label == "Pause"
        assert get_state_button(BackfillState.RUNNING).href == "PAUSED"
        assert get_cancel_button(BackfillState.RUNNING) is None
        assert get_delete_button(BackfillState.RUNNING, None) is None

    @pytest.mark.parametrize("state", [BackfillState.COMPLETE, BackfillState.CANCELLED])
    def test_terminal_states_offer_delete_once(self, state):
        assert get_state_button(state) is None
        assert get_cancel_button(state) is None
        assert get_delete_button(state, None).href == "soft_delete"
        assert get_delete_button(state, datetime.now(timezone.utc)) is None


class TestBuildPage:
    def test_header_and_links_for_default_variant(self):
        page = _service(make_status()).build_page(12)

        assert page.title == "Backfill 12 | Backfila"
        assert page.heading == "franklin Backfill Run"
        assert page.subheading == "#12"
        assert page.name == "ChickenSandwichBackfill"
        assert [link.href for link in page.breadcrumbs] == [
            "/services/",
            "/services/franklin",
            "/backfills/12",
        ]
        assert page.breadcrumbs[2].label == "Backfill #12"
        assert page.clone_href == "/backfills/create/franklin/12"
        assert page.update_action == "/api/backfill/12/update"

    def test_header_and_links_for_variant(self):
        page = _service(make_status(variant="blue")).build_page(12)

        assert page.label == "franklin (blue)"
        assert page.breadcrumbs[1].href == "/services/franklin/blue"
        assert page.clone_href == "/backfills/create/franklin/blue/12"

    def test_configuration_rows(self):
        page = _service(make_status(backoff_schedule="1000,2000")).build_page(12)
        rows = page.left_configuration_rows + page.right_configuration_rows

        assert len(page.left_configuration_rows) == 5
        assert len(page.right_configuration_rows) == 4
        assert [row.label for row in rows] == [
            "State",
            "Dry Run",
            "Threads per partition",
            "Scan Size",
            "Batch Size",
            "Sleep between batches (ms)",
            "Backoff Schedule",
            "Created",
            "Logs",
        ]
        state_row = rows[0]
        assert state_row.description == "PAUSED"
        assert state_row.button.label == "Start"
        assert state_row.cancel_button.label == "Cancel"
        assert rows[1].description == "dry run"
        assert [row.update_field_id for row in rows if row.is_editable] == [
            "num_threads",
            "scan_size",
            "batch_size",
            "extra_sleep_ms",
            "backoff_schedule",
        ]
        assert rows[6].description == "1000,2000"
        assert rows[7].description == "2024-01-02 03:04:05 by molly"
        assert rows[8].is_external_link
        assert rows[8].button.href == "https://logs.example.com/backfills/12"

    def test_custom_parameters_strip_prefix(self):
        status = make_status(
            parameters={"custom_parameter_region": "us-west", "limit": "10"}
        )
        rows = _service(status).build_page(12)
        rows = rows.left_configuration_rows + rows.right_configuration_rows

        assert [(row.label, row.description) for row in rows[-3:]] == [
            ("Custom Parameters", ""),
            ("region", "us-west"),
            ("limit", "10"),
        ]

    def test_edit_cursor_only_when_paused(self):
        paused = _service(make_status()).build_page(12)
        running = _service(
            make_status(state="RUNNING", partitions=[make_partition(state="RUNNING")])
        ).build_page(12)

        assert paused.show_partition_actions
        assert paused.partitions[0].edit_cursor_href == "/backfills/12/partitions/-80/edit-cursor"
        assert not running.show_partition_actions
        assert running.partitions[0].edit_cursor_href is None

    def test_partition_rows(self):
        status = make_status(
            state="RUNNING",
            partitions=[
                make_partition(
                    state="RUNNING",
                    pkey_cursor="K3",
                    backfilled_matching_record_count=3,
                    computed_matching_record_count=9,
                    precomputing_done=False,
                )
            ],
        )
        row = _service(status).build_page(12).partitions[0]

        assert row.cursor == "K3"
        assert row.range == "K0 to K9"
        assert row.progress == "3 / 9"
        assert row.progress_percent is None
        assert row.rate == "Computing..."
        assert row.eta == "Computing..."

    def test_event_log_rows(self):
        page = _service(make_status()).build_page(12)

        (event,) = page.event_logs
        assert event.occurred_at == "2024-01-02 03:04:05"
        assert event.user == "molly"
        assert event.partition_name == ""
        assert event.message == "backfill created"

    def test_first_page_links_to_next(self):
        service = _service(make_status(next_offset="abc"))

        page = service.build_page(12)

        assert page.pagination.previous_href is None
        assert page.pagination.next_href == "/backfills/12?offset=abc"
        assert service.client.status_calls == [(12, None)]

    def test_later_page_links_both_ways(self):
        service = _service(make_status(next_offset="def"))

        page = service.build_page(12, offset="abc")

        assert page.pagination.previous_href == "/backfills/12"
        assert page.pagination.next_href == "/backfills/12?offset=def&lastOffset=abc"
        assert service.client.status_calls == [(12, "abc")]

    def test_last_page_links_back(self):
        page = _service(make_status()).build_page(12, offset="def", last_offset="abc")

        assert page.pagination.previous_href == "/backfills/12?offset=abc"
        assert page.pagination.next_href is None

    def test_auto_reload_only_while_running(self):
        running = _service(make_status(state="RUNNING"), auto_reload_seconds=15).build_page(12)
        paused = _service(make_status(), auto_reload_seconds=15).build_page(12)

        assert running.auto_reload_seconds == 15
        assert paused.auto_reload_seconds == 0


class TestShowEndpoint:
    def test_renders_status_page(self, client):
        response = client.get("/backfills/12")

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "<title>Backfill 12 | Backfila</title>" in response.text
        assert "franklin Backfill Run" in response.text
        assert "Threads per partition" in response.text
        assert 'value="RUNNING"' in response.text
        assert 'value="CANCELLED"' in response.text
        assert "Edit Cursor" in response.text
        assert "backfill created" in response.text
        assert 'http-equiv="refresh"' not in response.text

    def test_renders_running_partitions(self, client, fake_client):
        fake_client.statuses[12] = make_status(
            state="RUNNING",
            partitions=[make_partition(state="RUNNING", precomputing_done=False)],
        )

        response = client.get("/backfills/12")

        assert response.status_code == 200
        assert "Computing..." in response.text
        assert 'value="PAUSED"' in response.text
        assert "Edit Cursor" not in response.text

    def test_passes_pagination_offsets(self, client, fake_client):
        fake_client.statuses[12] = make_status(next_offset="def")

        response = client.get("/backfills/12", params={"offset": "abc", "lastOffset": "xyz"})

        assert response.status_code == 200
        assert fake_client.status_calls == [(12, "abc")]
        assert 'href="/backfills/12?offset=xyz"' in response.text
        assert 'href="/backfills/12?offset=def&amp;lastOffset=abc"' in response.text

    def test_unknown_backfill(self, client):
        response = client.get("/backfills/99")

        assert response.status_code == 404
        assert "not found" in response.text
