"""
Domain services initialization.

Exports all service classes containing business logic.
"""

from backfill_dashboard.domain.services.backfill_create import BackfillCreateService
from backfill_dashboard.domain.services.backfill_show import BackfillShowService

__all__ = [
    "BackfillCreateService",
    "BackfillShowService",
]
