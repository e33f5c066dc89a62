"""SQLAlchemy models for the SmartCity agents service."""

from app.models.analytics import AnalyticsEvent

__all__ = [
    "AnalyticsEvent",
]
