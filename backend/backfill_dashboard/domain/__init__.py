"""
Domain layer initialization.

Schemas and services of the backfill dashboard.
"""
