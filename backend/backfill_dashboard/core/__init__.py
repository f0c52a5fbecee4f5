"""
Core initialization module.

Exports core utilities and configuration.
"""

from backfill_dashboard.core.config import get_settings, settings
from backfill_dashboard.core.exceptions import (
    BackendServiceError,
    BackendUnavailableError,
    BackfillDashboardException,
    BackfillNotFoundError,
    FormValidationError,
)
from backfill_dashboard.core.formatting import format_duration, format_timestamp
from backfill_dashboard.core.logging import get_logger, setup_logging

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    # Exceptions
    "BackfillDashboardException",
    "FormValidationError",
    "BackfillNotFoundError",
    "BackendServiceError",
    "BackendUnavailableError",
    # Formatting
    "format_duration",
    "format_timestamp",
    # Logging
    "setup_logging",
    "get_logger",
]
