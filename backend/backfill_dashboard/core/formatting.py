"""
Display formatting helpers.

Pure functions shared by the dashboard pages.
"""

from datetime import datetime
from typing import Optional, Union

SECONDS_PER_YEAR = 31536000  # 365 days, no calendar awareness
SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_duration(millis: Union[int, float]) -> str:
    """
    Format a duration as a compact string such as ``1d2h3m4s``.

    Components are emitted largest first and only when non-zero. Anything
    under one second renders as ``< 1s``.

    Args:
        millis: Duration in milliseconds

    Returns:
        Human-readable duration
    """
    remaining = max(int(millis // 1000), 0)
    parts = []

    for unit_seconds, suffix in (
        (SECONDS_PER_YEAR, "y"),
        (SECONDS_PER_DAY, "d"),
        (SECONDS_PER_HOUR, "h"),
        (SECONDS_PER_MINUTE, "m"),
        (1, "s"),
    ):
        count, remaining = divmod(remaining, unit_seconds)
        if count > 0:
            parts.append(f"{count}{suffix}")

    return "".join(parts) if parts else "< 1s"


def format_timestamp(value: Optional[datetime]) -> str:
    """Format a timestamp to second precision, empty when missing."""
    if value is None:
        return ""
    return value.strftime(TIMESTAMP_FORMAT)
