"""Tests for the command interpreter: validation order and output format."""

from __future__ import annotations

import io

import pytest

from shared_calendar.domain.bus import EventBus
from shared_calendar.domain.events import CommandRejected, EventScheduled
from shared_calendar.repos.memory import EventStore
from shared_calendar.services.commands import CommandProcessor
from shared_calendar.services.tokens import TokenReader


class Session:
    def __init__(self, users=("ana", "bob", "carl"), max_users: int = 100) -> None:
        self.store = EventStore(max_users=max_users)
        for user in users:
            self.store.add_user(user)
        self.bus = EventBus()
        self.published: list = []
        self.bus.subscribe(EventScheduled, self.published.append)
        self.bus.subscribe(CommandRejected, self.published.append)
        self.output = io.StringIO()
        self.processor = CommandProcessor(self.store, self.bus, self.output)

    def run(self, script: str) -> list[str]:
        """Feed *script* to the processor and return only the new output lines."""
        start = self.output.tell()
        self.processor.run(TokenReader(io.StringIO(script)))
        return self.output.getvalue()[start:].splitlines()


@pytest.fixture()
def session() -> Session:
    return Session()


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------


def test_create_user(session):
    assert session.run("create dora\n") == ["User successfully created."]
    assert session.store.user_exists("dora") is True


def test_create_existing_user(session):
    assert session.run("create ana\n") == ["User already registered."]


def test_create_when_roster_full():
    """A full roster is reported and the session carries on."""
    session = Session(users=(), max_users=1)
    lines = session.run("create ana\ncreate bob\ncreate ana\nexit\n")
    assert lines == [
        "User successfully created.",
        "User limit reached.",
        "User already registered.",
        "Application exited.",
    ]
    assert session.store.user_exists("bob") is False


# ---------------------------------------------------------------------------
# schedule
# ---------------------------------------------------------------------------


def test_schedule_success(session):
    assert session.run("schedule e1 1 8 9 2 ana bob\n") == [
        "Event successfully created."
    ]
    assert session.store.event_exists("e1") is True
    scheduled = [p for p in session.published if isinstance(p, EventScheduled)]
    assert scheduled[0].participants == ["ana", "bob"]


def test_schedule_participants_may_span_lines(session):
    assert session.run("schedule e1 1 8 9 3\nana\nbob carl\n") == [
        "Event successfully created."
    ]
    assert session.store.event_count() == 1


def test_schedule_unregistered_participant(session):
    assert session.run("schedule e1 1 8 9 2 ana zed\n") == [
        "Some user not registered."
    ]


def test_schedule_duplicate_name(session):
    lines = session.run("schedule e1 1 8 9 1 ana\nschedule e1 2 8 9 1 bob\n")
    assert lines == ["Event successfully created.", "Event already exists."]


def test_schedule_proposer_busy(session):
    lines = session.run("schedule e1 1 8 10 1 ana\nschedule e2 1 9 11 2 ana bob\n")
    assert lines[-1] == "Proposer not available."


def test_schedule_guest_busy(session):
    lines = session.run("schedule e1 1 8 10 1 carl\nschedule e2 1 9 11 3 ana bob carl\n")
    assert lines[-1] == "Some user not available."


def test_schedule_back_to_back_is_fine(session):
    lines = session.run("schedule e1 1 8 10 1 ana\nschedule e2 1 10 12 1 ana\n")
    assert lines == ["Event successfully created.", "Event successfully created."]


def test_schedule_checks_registration_before_uniqueness(session):
    session.run("schedule e1 1 8 9 1 ana\n")
    assert session.run("schedule e1 1 8 9 1 zed\n") == ["Some user not registered."]


def test_schedule_checks_uniqueness_before_availability(session):
    session.run("schedule e1 1 8 9 1 ana\n")
    assert session.run("schedule e1 1 8 9 1 ana\n") == ["Event already exists."]


def test_schedule_checks_proposer_before_guests(session):
    """When both proposer and a guest clash, the proposer outcome wins."""
    session.run("schedule e1 1 8 9 2 ana bob\n")
    assert session.run("schedule e2 1 8 9 2 ana bob\n") == ["Proposer not available."]


def test_schedule_off_grid_is_invalid(session):
    assert session.run("schedule e1 6 8 9 1 ana\n") == ["Invalid command."]
    assert session.run("schedule e1 1 10 10 1 ana\n") == ["Invalid command."]
    assert session.store.event_count() == 0


def test_schedule_without_participants_is_invalid(session):
    assert session.run("schedule e1 1 8 9 0\n") == ["Invalid command."]


def test_schedule_non_numeric_day_is_invalid(session):
    lines = session.run("schedule e1 monday 8 9 1 ana\ncreate dora\n")
    assert lines == ["Invalid command.", "User successfully created."]


def test_rejections_are_published(session):
    session.run("schedule e1 1 8 9 1 zed\n")
    rejected = [p for p in session.published if isinstance(p, CommandRejected)]
    assert rejected == [
        CommandRejected(command="schedule", reason="Some user not registered.")
    ]


# ---------------------------------------------------------------------------
# cancel
# ---------------------------------------------------------------------------


def test_cancel_unregistered_user(session):
    assert session.run("cancel e1 zed\n") == ["User not registered."]


def test_cancel_event_not_in_calendar(session):
    session.run("schedule e1 1 8 9 1 ana\n")
    assert session.run("cancel e1 carl\n") == ["Event not found in calendar of carl."]
    assert session.run("cancel ghost ana\n") == ["Event not found in calendar of ana."]


def test_cancel_missing_event_with_user_in_first_slot(session):
    """A missing event must not resolve to whatever sits in the first slot."""
    session.run("schedule first 1 8 9 1 ana\n")
    assert session.run("cancel ghost ana\n") == ["Event not found in calendar of ana."]
    assert session.store.event_exists("first") is True


def test_cancel_by_guest(session):
    session.run("schedule e1 1 8 9 2 ana bob\n")
    assert session.run("cancel e1 bob\n") == ["User bob did not create event e1."]
    assert session.store.event_exists("e1") is True


def test_cancel_by_creator(session):
    session.run("schedule e1 1 8 9 2 ana bob\n")
    assert session.run("cancel e1 ana\n") == ["Event successfully canceled."]
    assert session.store.event_exists("e1") is False


# ---------------------------------------------------------------------------
# show / top
# ---------------------------------------------------------------------------


def test_show_unregistered(session):
    assert session.run("show zed\n") == ["User not registered."]


def test_show_no_events(session):
    assert session.run("show ana\n") == ["User ana has no events."]


def test_show_lists_user_events_chronologically(session):
    session.run(
        "schedule late 3 14 15 1 ana\n"
        "schedule other 1 8 9 1 bob\n"
        "schedule early 1 10 12 2 bob ana\n"
        "schedule mid 2 8 9 1 ana\n"
    )
    assert session.run("show ana\n") == [
        "early, day 1, 10-12, 2 participants.",
        "mid, day 2, 8-9, 1 participants.",
        "late, day 3, 14-15, 1 participants.",
    ]


def test_top_no_events(session):
    assert session.run("top\n") == ["No events registered."]


def test_top_lists_largest_events(session):
    session.run(
        "schedule pair 1 8 9 2 ana bob\n"
        "schedule big-late 4 8 9 3 ana bob carl\n"
        "schedule big-early 2 8 9 3 carl bob ana\n"
        "schedule solo 1 10 11 1 carl\n"
    )
    assert session.run("top\n") == [
        "big-early, day 2, 8-9, 3 participants.",
        "big-late, day 4, 8-9, 3 participants.",
    ]


# ---------------------------------------------------------------------------
# Loop behaviour
# ---------------------------------------------------------------------------


def test_unknown_command_discards_rest_of_line(session):
    lines = session.run("frobnicate create dora\ncreate dora\n")
    assert lines == ["Invalid command.", "User successfully created."]


def test_exit_stops_processing(session):
    lines = session.run("exit\ncreate dora\n")
    assert lines == ["Application exited."]
    assert session.store.user_exists("dora") is False


def test_end_of_input_stops_quietly(session):
    assert session.run("create dora\n") == ["User successfully created."]


def test_ana_bob_scenario():
    session = Session(users=("ana", "bob"))
    lines = session.run(
        "schedule e1 1 8 9 2 ana bob\n"
        "schedule e2 1 8 9 2 bob ana\n"
        "cancel e1 bob\n"
        "cancel e1 ana\n"
        "show ana\n"
        "exit\n"
    )
    assert lines == [
        "Event successfully created.",
        "Proposer not available.",
        "User bob did not create event e1.",
        "Event successfully canceled.",
        "User ana has no events.",
        "Application exited.",
    ]


def test_handler_errors_after_storing_are_not_reported_as_invalid(session):
    """Only malformed arguments print "Invalid command."; later failures propagate."""

    def broken_handler(event):
        raise ValueError("audit sink failed")

    session.bus.subscribe(EventScheduled, broken_handler)

    with pytest.raises(ValueError, match="audit sink failed"):
        session.run("schedule e1 1 8 9 1 ana\n")

    assert session.store.event_exists("e1") is True
    assert "Invalid command." not in session.output.getvalue()
