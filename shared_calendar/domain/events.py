"""Domain events emitted while processing calendar commands."""

from __future__ import annotations

from pydantic import BaseModel


class UserRegistered(BaseModel):
    """Fired when a new user joins the roster."""

    user: str


class EventScheduled(BaseModel):
    """Fired after an event passes validation and is stored."""

    event_name: str
    day: int
    start_time: int
    end_time: int
    participants: list[str]


class EventCanceled(BaseModel):
    """Fired when the creator cancels an event."""

    event_name: str
    canceled_by: str


class CommandRejected(BaseModel):
    """Fired when a command fails a validation rule."""

    command: str
    reason: str
