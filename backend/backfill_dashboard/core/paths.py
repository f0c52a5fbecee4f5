"""
Dashboard URL paths.

Paths of the pages served here and of the backend pages they link to.
"""

from typing import Optional, Union
from urllib.parse import quote, urlencode

SERVICE_INDEX_PATH = "/services/"
BACKFILL_CREATE_HANDLER_PATH = "/api/backfill/create"
BACKFILL_SHOW_PATH = "/backfills/{id}"
BACKFILL_UPDATE_HANDLER_PATH = "/api/backfill/{id}/update"
EDIT_PARTITION_CURSOR_PATH = "/backfills/{id}/partitions/{partition_name}/edit-cursor"


def _join_segments(prefix: str, *segments: str) -> str:
    """Append non-blank path segments to a prefix."""
    parts = [quote(segment, safe="") for segment in segments if segment]
    return "/".join([prefix.rstrip("/"), *parts])


def backfill_show_path(backfill_id: Union[int, str]) -> str:
    return BACKFILL_SHOW_PATH.replace("{id}", str(backfill_id))


def backfill_show_page_path(
    backfill_id: Union[int, str],
    offset: Optional[str] = None,
    last_offset: Optional[str] = None,
) -> str:
    """Status page path with event log pagination parameters."""
    path = backfill_show_path(backfill_id)
    params = {}
    if offset:
        params["offset"] = offset
    if last_offset:
        params["lastOffset"] = last_offset
    return f"{path}?{urlencode(params)}" if params else path


def backfill_update_handler_path(backfill_id: Union[int, str]) -> str:
    return BACKFILL_UPDATE_HANDLER_PATH.replace("{id}", str(backfill_id))


def edit_partition_cursor_path(backfill_id: Union[int, str], partition_name: str) -> str:
    return EDIT_PARTITION_CURSOR_PATH.replace("{id}", str(backfill_id)).replace(
        "{partition_name}", quote(partition_name, safe="")
    )


def service_show_path(service: str, variant_or_blank: str = "") -> str:
    return _join_segments("/services", service, variant_or_blank)


def backfill_create_path(
    service: str,
    variant_or_backfill_name_or_id: str = "",
    backfill_name_or_id_or_blank: str = "",
) -> str:
    """
    Path of the create form, optionally prefilled from an existing backfill.

    For the default variant the second segment is the backfill to clone and
    the third is blank; otherwise it is the variant followed by the backfill.
    """
    return _join_segments(
        "/backfills/create",
        service,
        variant_or_backfill_name_or_id,
        backfill_name_or_id_or_blank,
    )
