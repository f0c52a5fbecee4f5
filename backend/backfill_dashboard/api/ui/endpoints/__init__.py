"""Dashboard page endpoints."""
