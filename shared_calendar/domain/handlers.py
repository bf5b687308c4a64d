"""Domain event handlers, wired up when the command processor starts."""

from __future__ import annotations

from pydantic import BaseModel

from shared_calendar.domain.bus import EventBus
from shared_calendar.domain.events import (
    CommandRejected,
    EventCanceled,
    EventScheduled,
    UserRegistered,
)
from shared_calendar.logging_config import get_logger

logger = get_logger(__name__)


class AuditTrail:
    """List-backed record of every domain event seen in this session."""

    def __init__(self) -> None:
        self._entries: list[BaseModel] = []

    def add(self, entry: BaseModel) -> None:
        self._entries.append(entry)

    def list_all(self) -> list[BaseModel]:
        return list(self._entries)

    def list_of_type(self, entry_type: type) -> list[BaseModel]:
        return [e for e in self._entries if isinstance(e, entry_type)]


class HandlerRegistry:
    """Wires audit handlers to the bus."""

    def __init__(self, bus: EventBus, audit_trail: AuditTrail) -> None:
        self.bus = bus
        self.audit_trail = audit_trail
        self._register()

    def _register(self) -> None:
        self.bus.subscribe(UserRegistered, self.on_user_registered)
        self.bus.subscribe(EventScheduled, self.on_event_scheduled)
        self.bus.subscribe(EventCanceled, self.on_event_canceled)
        self.bus.subscribe(CommandRejected, self.on_command_rejected)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def on_user_registered(self, event: UserRegistered) -> None:
        self.audit_trail.add(event)
        logger.info("user_registered", user=event.user)

    def on_event_scheduled(self, event: EventScheduled) -> None:
        self.audit_trail.add(event)
        logger.info(
            "event_scheduled",
            event_name=event.event_name,
            day=event.day,
            start_time=event.start_time,
            end_time=event.end_time,
            proposer=event.participants[0],
            participant_count=len(event.participants),
        )

    def on_event_canceled(self, event: EventCanceled) -> None:
        self.audit_trail.add(event)
        logger.info(
            "event_canceled", event_name=event.event_name, canceled_by=event.canceled_by
        )

    def on_command_rejected(self, event: CommandRejected) -> None:
        self.audit_trail.add(event)
        logger.info("command_rejected", command=event.command, reason=event.reason)
