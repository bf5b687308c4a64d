"""Synchronous in-process bus for calendar domain events."""

from __future__ import annotations

from collections import defaultdict
from typing import Callable

from pydantic import BaseModel

from shared_calendar.logging_config import get_logger

logger = get_logger(__name__)

Handler = Callable[[BaseModel], None]


class EventBus:
    """Publish/subscribe bus keyed on the exact domain event class.

    Handlers run synchronously in registration order, so a command is fully
    handled before the next one is read.
    """

    def __init__(self) -> None:
        self._subscribers: dict[type[BaseModel], list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: type[BaseModel], handler: Handler) -> None:
        self._subscribers[event_type].append(handler)

    def publish(self, event: BaseModel) -> int:
        """Deliver *event* and return how many handlers received it."""
        handlers = self._subscribers.get(type(event), [])
        logger.debug(
            "domain_event_published",
            event_type=type(event).__name__,
            handler_count=len(handlers),
        )
        for handler in handlers:
            handler(event)
        return len(handlers)
