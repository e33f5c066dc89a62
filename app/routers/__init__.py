"""API routers for the SmartCity agents service."""

from app.routers import agents, districts, observability

__all__ = [
    "agents",
    "districts",
    "observability",
]
