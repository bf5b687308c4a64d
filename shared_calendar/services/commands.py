"""Command interpreter: parses text commands and drives the EventStore."""

from __future__ import annotations

from collections.abc import Callable
from typing import TextIO

from shared_calendar.domain.bus import EventBus
from shared_calendar.domain.events import (
    CommandRejected,
    EventCanceled,
    EventScheduled,
    UserRegistered,
)
from shared_calendar.domain.models import (
    DAY_END_HOUR,
    DAY_START_HOUR,
    FIRST_DAY,
    LAST_DAY,
    PROPOSER_INDEX,
    Event,
)
from shared_calendar.logging_config import get_logger
from shared_calendar.repos.memory import EventStore
from shared_calendar.services.tokens import TokenReader

logger = get_logger(__name__)

CMD_CREATE = "create"
CMD_SCHEDULE = "schedule"
CMD_CANCEL = "cancel"
CMD_SHOW = "show"
CMD_TOP = "top"
CMD_EXIT = "exit"

MSG_EXIT = "Application exited."
MSG_INVALID_CMD = "Invalid command."
MSG_USER_ALREADY_REGISTERED = "User already registered."
MSG_USER_CREATED = "User successfully created."
MSG_ROSTER_FULL = "User limit reached."
MSG_SOME_USER_NOT_REGISTERED = "Some user not registered."
MSG_EVENT_ALREADY_EXISTS = "Event already exists."
MSG_PROPOSER_NOT_AVAILABLE = "Proposer not available."
MSG_SOME_USER_NOT_AVAILABLE = "Some user not available."
MSG_EVENT_CREATED = "Event successfully created."
MSG_USER_NOT_REGISTERED = "User not registered."
MSG_EVENT_NOT_FOUND = "Event not found in calendar of {user}."
MSG_NOT_PROPOSER = "User {user} did not create event {event}."
MSG_EVENT_CANCELED = "Event successfully canceled."
MSG_NO_EVENTS = "User {user} has no events."
MSG_NO_GLOBAL_EVENTS = "No events registered."


def _on_grid(day: int, start: int, end: int) -> bool:
    return (
        FIRST_DAY <= day <= LAST_DAY
        and DAY_START_HOUR <= start < end <= DAY_END_HOUR
    )


class CommandProcessor:
    """Runs the create/schedule/cancel/show/top/exit command set.

    Each command applies its checks in a fixed order and reports the first
    one that fails. Output lines go to *output*; successful changes and
    rejections are published on *bus* for the audit handlers.
    """

    def __init__(self, store: EventStore, bus: EventBus, output: TextIO) -> None:
        self.store = store
        self.bus = bus
        self.output = output
        self._handlers: dict[str, Callable[[TokenReader], None]] = {
            CMD_CREATE: self.create,
            CMD_SCHEDULE: self.schedule,
            CMD_CANCEL: self.cancel,
            CMD_SHOW: self.show,
            CMD_TOP: self.top,
            CMD_EXIT: self.exit,
        }

    def _say(self, message: str) -> None:
        print(message, file=self.output)

    def _reject(self, command: str, message: str) -> None:
        self.bus.publish(CommandRejected(command=command, reason=message))
        self._say(message)

    def _print_events(self, events: list[Event]) -> None:
        for event in events:
            self._say(event.describe())

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def execute(self, command: str, reader: TokenReader) -> bool:
        """Run one command; return False once ``exit`` has been handled."""
        handler = self._handlers.get(command)
        if handler is None:
            reader.discard_line()
            self._say(MSG_INVALID_CMD)
            return True
        handler(reader)
        return command != CMD_EXIT

    def run(self, reader: TokenReader) -> None:
        """Process commands until ``exit`` or the input runs out."""
        try:
            while self.execute(reader.next_token(), reader):
                pass
        except EOFError:
            logger.info("input_exhausted")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, reader: TokenReader) -> None:
        user = reader.next_token()
        if self.store.user_exists(user):
            self._reject(CMD_CREATE, MSG_USER_ALREADY_REGISTERED)
            return
        if self.store.roster_full():
            self._reject(CMD_CREATE, MSG_ROSTER_FULL)
            return
        self.store.add_user(user)
        self.bus.publish(UserRegistered(user=user))
        self._say(MSG_USER_CREATED)

    def schedule(self, reader: TokenReader) -> None:
        name = reader.next_token()
        try:
            day = reader.next_int()
            start = reader.next_int()
            end = reader.next_int()
            participants = [reader.next_token() for _ in range(reader.next_int())]
        except ValueError:
            reader.discard_line()
            self._say(MSG_INVALID_CMD)
            return

        if not participants or not _on_grid(day, start, end):
            self._say(MSG_INVALID_CMD)
            return

        store = self.store
        if not store.all_users_exist(participants):
            self._reject(CMD_SCHEDULE, MSG_SOME_USER_NOT_REGISTERED)
        elif store.event_exists(name):
            self._reject(CMD_SCHEDULE, MSG_EVENT_ALREADY_EXISTS)
        elif store.is_user_busy(day, start, end, participants[PROPOSER_INDEX]):
            self._reject(CMD_SCHEDULE, MSG_PROPOSER_NOT_AVAILABLE)
        elif store.any_guest_busy(day, start, end, participants):
            self._reject(CMD_SCHEDULE, MSG_SOME_USER_NOT_AVAILABLE)
        else:
            store.add_event(name, day, start, end, participants)
            self.bus.publish(
                EventScheduled(
                    event_name=name,
                    day=day,
                    start_time=start,
                    end_time=end,
                    participants=participants,
                )
            )
            self._say(MSG_EVENT_CREATED)

    def cancel(self, reader: TokenReader) -> None:
        name = reader.next_token()
        user = reader.next_token()

        store = self.store
        if not store.user_exists(user):
            self._reject(CMD_CANCEL, MSG_USER_NOT_REGISTERED)
        elif not store.event_belongs_to_user(name, user):
            self._reject(CMD_CANCEL, MSG_EVENT_NOT_FOUND.format(user=user))
        elif not store.is_creator(name, user, PROPOSER_INDEX):
            self._reject(CMD_CANCEL, MSG_NOT_PROPOSER.format(user=user, event=name))
        else:
            store.cancel_event(name)
            self.bus.publish(EventCanceled(event_name=name, canceled_by=user))
            self._say(MSG_EVENT_CANCELED)

    def show(self, reader: TokenReader) -> None:
        user = reader.next_token()

        store = self.store
        if not store.user_exists(user):
            self._reject(CMD_SHOW, MSG_USER_NOT_REGISTERED)
        elif not store.user_has_events(user):
            self._reject(CMD_SHOW, MSG_NO_EVENTS.format(user=user))
        else:
            store.sort_chronological()
            self._print_events(store.events_for_user(user))

    def top(self, reader: TokenReader) -> None:
        store = self.store
        if store.event_count() == 0:
            self._say(MSG_NO_GLOBAL_EVENTS)
            return
        store.sort_chronological()
        self._print_events(store.top_events())

    def exit(self, reader: TokenReader) -> None:
        self._say(MSG_EXIT)
