"""Observability helpers (structured logging)."""
