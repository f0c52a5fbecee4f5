"""
Backfill Dashboard.

Server-rendered pages for creating, cloning and inspecting backfill runs.
"""

__version__ = "1.0.0"
