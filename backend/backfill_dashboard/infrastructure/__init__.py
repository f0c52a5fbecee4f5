"""
Infrastructure layer initialization.

Exports infrastructure components like the backend client.
"""

from backfill_dashboard.infrastructure.backfila_client import BackfilaClient

__all__ = [
    "BackfilaClient",
]
