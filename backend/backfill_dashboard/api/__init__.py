"""
API initialization module.

Exports API dependencies and utilities.
"""

from backfill_dashboard.api.deps import get_backfila_client

__all__ = [
    "get_backfila_client",
]
