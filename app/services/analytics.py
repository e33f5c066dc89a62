"""Analytics event sink.

track_event is fire-and-forget: events go into a bounded in-memory buffer
(served by the observability router) and, when ANALYTICS_PERSIST_ENABLED
is set, are written to the analytics_events table in the background.
Failures are logged but never raised.
"""

import asyncio
import logging
from collections import deque
from typing import Any, Optional

from app.config import get_settings
from app.database import async_session_maker
from app.models.analytics import AnalyticsEvent

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Best-effort telemetry recorder."""

    def __init__(self, buffer_size: Optional[int] = None, persist: Optional[bool] = None):
        settings = get_settings()
        self.persist = settings.analytics_persist_enabled if persist is None else persist
        self._events: deque[dict[str, Any]] = deque(
            maxlen=buffer_size or settings.analytics_buffer_size
        )
        self._pending: set[asyncio.Task] = set()

    def track_event(self, name: str, payload: dict[str, Any]) -> None:
        """Record a telemetry event. Never raises."""
        try:
            self._events.append({"name": name, "payload": dict(payload)})
            logger.info(f"[ANALYTICS] {name} | {payload}")
            if self.persist:
                self._schedule_write(name, payload)
        except Exception as e:
            logger.warning(f"[ANALYTICS] Failed to track {name}: {e}")

    def get_events(self, name: Optional[str] = None, limit: int = 100) -> list[dict[str, Any]]:
        """Most recent events last, optionally filtered by name."""
        events = [e for e in self._events if name is None or e["name"] == name]
        return events[-limit:] if limit > 0 else []

    def clear(self) -> None:
        self._events.clear()

    async def flush(self) -> None:
        """Wait for background writes to finish (shutdown, tests)."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    def _schedule_write(self, name: str, payload: dict[str, Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"[ANALYTICS] No running loop, {name} kept in memory only")
            return
        task = loop.create_task(self._write(name, payload))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write(self, name: str, payload: dict[str, Any]) -> None:
        try:
            async with async_session_maker() as db:
                db.add(AnalyticsEvent(name=name, payload=payload))
                await db.commit()
        except Exception as e:
            logger.warning(f"[ANALYTICS] Failed to persist {name}: {e}")
