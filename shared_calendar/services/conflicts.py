"""Service for detecting scheduling conflicts between events."""

from __future__ import annotations

from collections.abc import Iterable

from shared_calendar.domain.models import Event


def overlaps(
    existing_start: int,
    existing_end: int,
    proposed_start: int,
    proposed_end: int,
) -> bool:
    """Return True if two half-open ``[start, end)`` intervals share any hour.

    Covers a proposal starting inside, ending inside, or wrapping the existing
    interval, as well as two identical intervals.
    Exact boundary touches (end == start) are NOT considered conflicts.
    """
    return proposed_start < existing_end and existing_start < proposed_end


def find_conflicts(
    day: int,
    start: int,
    end: int,
    existing_events: Iterable[Event],
) -> list[Event]:
    """Return existing events on *day* that overlap ``[start, end)``."""
    return [
        event
        for event in existing_events
        if event.day == day
        and overlaps(event.start_time, event.end_time, start, end)
    ]
