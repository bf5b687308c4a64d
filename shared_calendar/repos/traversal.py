"""Forward-only cursor over the events held by an EventStore."""

from __future__ import annotations

from shared_calendar.domain.models import Event
from shared_calendar.exceptions import TraversalExhaustedError


class EventTraversal:
    """Walks the first *size* events of *events* in physical order.

    The store hands over a copy of its list, so later inserts, removals and
    sorts are not seen. Callers wanting chronological order must sort the
    store before asking for a traversal.
    """

    def __init__(self, events: list[Event], size: int) -> None:
        self._events = events
        self._size = size
        self._next_index = 0

    def has_more(self) -> bool:
        return self._next_index < self._size

    def next(self) -> Event:
        if not self.has_more():
            raise TraversalExhaustedError(self._size)
        event = self._events[self._next_index]
        self._next_index += 1
        return event

    def __iter__(self) -> EventTraversal:
        return self

    def __next__(self) -> Event:
        if not self.has_more():
            raise StopIteration
        return self.next()
