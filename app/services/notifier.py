"""In-process event notifications.

Subscribers register a callback per event name; publish fans the payload
out to each of them in registration order. Callbacks may be plain
functions or coroutines. A failing subscriber is logged and skipped.

Usage:
    notifier = TaskNotifier()
    notifier.subscribe(TASK_ASSIGNED, on_task_assigned)
    await notifier.publish(TASK_ASSIGNED, {"agent_id": "a1", "task": task})
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Union

logger = logging.getLogger(__name__)

TASK_ASSIGNED = "taskAssigned"

Subscriber = Callable[[dict[str, Any]], Union[None, Awaitable[None]]]


class TaskNotifier:
    """Fan-out of named events to subscribers."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Subscriber]] = {}

    def subscribe(self, event: str, callback: Subscriber) -> None:
        self._subscribers.setdefault(event, []).append(callback)
        logger.info(f"Subscriber registered: {event} → {getattr(callback, '__qualname__', callback)}")

    def unsubscribe(self, event: str, callback: Subscriber) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    async def publish(self, event: str, payload: dict[str, Any]) -> int:
        """Deliver to every subscriber. Returns the number that succeeded."""
        callbacks = list(self._subscribers.get(event, []))
        if not callbacks:
            logger.debug(f"No subscribers for event: {event}")
            return 0

        delivered = 0
        for callback in callbacks:
            try:
                result = callback(payload)
                if inspect.isawaitable(result):
                    await result
                delivered += 1
            except Exception as e:
                logger.error(f"Subscriber failed for {event}: {e}")
        return delivered
