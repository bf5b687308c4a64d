"""In-memory store for registered users and scheduled events."""

from __future__ import annotations

from collections.abc import Sequence

from shared_calendar.domain.models import DEFAULT_MAX_USERS, PROPOSER_INDEX, Event
from shared_calendar.exceptions import (
    DuplicateEventError,
    DuplicateUserError,
    EventNotFoundError,
    RosterFullError,
)
from shared_calendar.logging_config import get_logger
from shared_calendar.repos.traversal import EventTraversal
from shared_calendar.services.conflicts import find_conflicts

logger = get_logger(__name__)


class EventStore:
    """List-backed store for users and Event instances.

    Predicates answer domain questions with booleans and never raise. The
    mutating operations trust the caller to have validated the command
    first; they only raise when going ahead would corrupt the store
    (duplicate names, a full roster, removing an event that isn't there).

    Events are kept in no particular order: removal swaps the last event
    into the freed slot, so call ``sort_chronological`` before reporting.
    """

    def __init__(self, max_users: int = DEFAULT_MAX_USERS) -> None:
        self.max_users = max_users
        self._users: list[str] = []
        self._events: list[Event] = []

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def user_exists(self, name: str) -> bool:
        return any(user == name for user in self._users)

    def add_user(self, name: str) -> None:
        if self.user_exists(name):
            raise DuplicateUserError(name)
        if self.roster_full():
            raise RosterFullError(self.max_users)
        self._users.append(name)
        logger.debug("user_added", user=name, user_count=len(self._users))

    def all_users_exist(self, names: Sequence[str]) -> bool:
        return all(self.user_exists(name) for name in names)

    def user_count(self) -> int:
        return len(self._users)

    def roster_full(self) -> bool:
        return len(self._users) >= self.max_users

    # ------------------------------------------------------------------
    # Event lookups
    # ------------------------------------------------------------------

    def _find_index(self, event_name: str) -> int | None:
        for i, event in enumerate(self._events):
            if event.name == event_name:
                return i
        return None

    def _find(self, event_name: str) -> Event | None:
        index = self._find_index(event_name)
        return None if index is None else self._events[index]

    def event_exists(self, name: str) -> bool:
        return self._find_index(name) is not None

    def is_participant(self, event: Event, name: str) -> bool:
        return event.has_participant(name)

    def event_belongs_to_user(self, event_name: str, user_name: str) -> bool:
        event = self._find(event_name)
        return event is not None and self.is_participant(event, user_name)

    def is_creator(
        self, event_name: str, user_name: str, proposer_index: int = PROPOSER_INDEX
    ) -> bool:
        event = self._find(event_name)
        if event is None or proposer_index >= event.participant_count:
            return False
        return event.participant(proposer_index) == user_name

    def user_has_events(self, user_name: str) -> bool:
        return any(self.is_participant(event, user_name) for event in self._events)

    def events_for_user(self, user_name: str) -> list[Event]:
        """Return the user's events in the store's current order."""
        return [e for e in self.new_traversal() if self.is_participant(e, user_name)]

    def event_count(self) -> int:
        return len(self._events)

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def is_user_busy(self, day: int, start: int, end: int, name: str) -> bool:
        """True if *name* takes part in a live event overlapping the slot."""
        return any(
            self.is_participant(event, name)
            for event in find_conflicts(day, start, end, self._events)
        )

    def any_guest_busy(
        self, day: int, start: int, end: int, participants: Sequence[str]
    ) -> bool:
        """True if any participant other than the proposer is busy.

        The proposer (index 0) is deliberately skipped; callers check it on
        its own with ``is_user_busy`` so the two outcomes can be reported
        differently.
        """
        return any(
            self.is_user_busy(day, start, end, guest)
            for guest in participants[PROPOSER_INDEX + 1 :]
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_event(
        self,
        name: str,
        day: int,
        start: int,
        end: int,
        participants: Sequence[str],
    ) -> Event:
        """Append a new event without checking availability or membership."""
        if self.event_exists(name):
            raise DuplicateEventError(name)
        event = Event(
            name=name,
            day=day,
            start_time=start,
            end_time=end,
            participants=tuple(participants),
        )
        self._events.append(event)
        logger.debug("event_added", event_name=name, event_count=len(self._events))
        return event

    def cancel_event(self, event_name: str) -> Event:
        """Remove *event_name* by moving the last event into its slot."""
        index = self._find_index(event_name)
        if index is None:
            raise EventNotFoundError(event_name)
        removed = self._events[index]
        self._events[index] = self._events[-1]
        self._events.pop()
        logger.debug(
            "event_canceled", event_name=event_name, event_count=len(self._events)
        )
        return removed

    def sort_chronological(self) -> None:
        """Selection-sort events in place by (day, start_time).

        Events sharing a (day, start_time) key come out in no guaranteed
        order.
        """
        events = self._events
        for i in range(len(events)):
            earliest = i
            for j in range(i + 1, len(events)):
                if events[j].sort_key < events[earliest].sort_key:
                    earliest = j
            events[i], events[earliest] = events[earliest], events[i]

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def max_participant_count(self) -> int:
        return max((e.participant_count for e in self._events), default=0)

    def top_events(self) -> list[Event]:
        """Return the events with the most participants, in current order."""
        top = self.max_participant_count()
        return [e for e in self.new_traversal() if e.participant_count == top]

    def new_traversal(self) -> EventTraversal:
        return EventTraversal(list(self._events), len(self._events))
