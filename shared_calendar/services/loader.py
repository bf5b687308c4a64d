"""Service for loading the initial users and events from a seed file."""

from __future__ import annotations

from pathlib import Path

from shared_calendar.exceptions import (
    CalendarError,
    SeedFileFormatError,
    SeedFileNotFoundError,
)
from shared_calendar.logging_config import get_logger
from shared_calendar.repos.memory import EventStore
from shared_calendar.services.tokens import TokenReader

logger = get_logger(__name__)


def _read_users(reader: TokenReader, store: EventStore) -> None:
    for _ in range(reader.next_int()):
        store.add_user(reader.next_token())


def _read_events(reader: TokenReader, store: EventStore) -> None:
    for _ in range(reader.next_int()):
        name = reader.next_token()
        day = reader.next_int()
        start = reader.next_int()
        end = reader.next_int()
        participants = [reader.next_token() for _ in range(reader.next_int())]
        # Seed data is trusted: no availability or membership checks.
        store.add_event(name, day, start, end, participants)


def load_seed_file(path: str | Path, store: EventStore) -> None:
    """Populate *store* from the seed file at *path*.

    Layout (whitespace separated)::

        <user count> <user>...
        <event count>
        <name> <day> <start> <end> <participant count> <participant>...

    Raises ``SeedFileNotFoundError`` if the file can't be opened and
    ``SeedFileFormatError`` if it is truncated or holds bad values.
    """
    path = Path(path)
    try:
        stream = path.open(encoding="utf-8")
    except OSError as exc:
        # Missing files, directories (a blank path is ".") and unreadable files.
        raise SeedFileNotFoundError(str(path)) from exc

    with stream:
        reader = TokenReader(stream)
        try:
            _read_users(reader, store)
            _read_events(reader, store)
        except EOFError as exc:
            raise SeedFileFormatError(str(path), "unexpected end of file") from exc
        except ValueError as exc:
            raise SeedFileFormatError(str(path), str(exc)) from exc
        except CalendarError as exc:
            raise SeedFileFormatError(str(path), exc.message) from exc

    logger.info(
        "seed_file_loaded",
        path=str(path),
        user_count=store.user_count(),
        event_count=store.event_count(),
    )
