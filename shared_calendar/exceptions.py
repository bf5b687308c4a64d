"""Exceptions raised when a caller breaks a registry precondition.

Domain-rule outcomes (a busy proposer, an unknown user, ...) are never raised;
the store answers those with booleans and the command layer prints a message.
Everything here signals a programming error or a broken environment.
"""

from __future__ import annotations

from typing import Any


class CalendarError(Exception):
    """Base exception for all shared calendar errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ---------------------------------------------------------------------------
# Contract violations
# ---------------------------------------------------------------------------


class DuplicateUserError(CalendarError):
    """Raised when registering a name the roster already holds."""

    def __init__(self, user: str) -> None:
        super().__init__(f"User {user!r} is already registered", {"user": user})
        self.user = user


class RosterFullError(CalendarError):
    """Raised when registering a user while the roster is at capacity."""

    def __init__(self, capacity: int) -> None:
        super().__init__(
            f"Roster is full ({capacity} users)", {"capacity": capacity}
        )
        self.capacity = capacity


class DuplicateEventError(CalendarError):
    """Raised when inserting an event whose name is already live."""

    def __init__(self, event_name: str) -> None:
        super().__init__(
            f"Event {event_name!r} already exists", {"event_name": event_name}
        )
        self.event_name = event_name


class EventNotFoundError(CalendarError):
    """Raised when removing an event that is not in the store."""

    def __init__(self, event_name: str) -> None:
        super().__init__(
            f"Event {event_name!r} not found", {"event_name": event_name}
        )
        self.event_name = event_name


class ParticipantIndexError(CalendarError, IndexError):
    """Raised on participant lookup outside ``0 <= index < count``."""

    def __init__(self, event_name: str, index: int, count: int) -> None:
        super().__init__(
            f"Participant index {index} out of range for event {event_name!r} "
            f"with {count} participants",
            {"event_name": event_name, "index": index, "count": count},
        )


class TraversalExhaustedError(CalendarError):
    """Raised when ``next()`` is called on a traversal with nothing left."""

    def __init__(self, size: int) -> None:
        super().__init__(
            f"Traversal exhausted after {size} events", {"size": size}
        )


# ---------------------------------------------------------------------------
# Environment failures
# ---------------------------------------------------------------------------


class SeedFileError(CalendarError):
    """Base class for problems reading the initial users/events file."""


class SeedFileNotFoundError(SeedFileError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Seed file not found: {path}", {"path": path})
        self.path = path


class SeedFileFormatError(SeedFileError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Malformed seed file {path}: {reason}", {"path": path, "reason": reason}
        )
        self.path = path
