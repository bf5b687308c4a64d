"""Command-line entry point for the shared calendar.

The first input line names the seed file; every following token is part of
the command stream (``create``, ``schedule``, ``cancel``, ``show``, ``top``,
``exit``).
"""

from __future__ import annotations

import sys
from typing import TextIO

from shared_calendar.domain.bus import EventBus
from shared_calendar.domain.handlers import AuditTrail, HandlerRegistry
from shared_calendar.exceptions import SeedFileError, SeedFileNotFoundError
from shared_calendar.logging_config import configure_logging, get_logger
from shared_calendar.repos.memory import EventStore
from shared_calendar.services.commands import CommandProcessor
from shared_calendar.services.loader import load_seed_file
from shared_calendar.services.tokens import TokenReader
from shared_calendar.settings import Settings, get_settings

logger = get_logger(__name__)

MSG_FILE_NOT_FOUND = "File Not Found"


class Application:
    """Store, bus and handlers for one session."""

    def __init__(self, settings: Settings, output: TextIO) -> None:
        self.store = EventStore(max_users=settings.max_users)
        self.bus = EventBus()
        self.audit_trail = AuditTrail()
        self.handler_registry = HandlerRegistry(
            bus=self.bus, audit_trail=self.audit_trail
        )
        self.processor = CommandProcessor(self.store, self.bus, output)


def main(stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    """Run a session; return the process exit status."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    settings = get_settings()
    configure_logging(settings)

    app = Application(settings, stdout)
    reader = TokenReader(stdin)

    try:
        seed_path = reader.next_line()
        load_seed_file(seed_path, app.store)
    except EOFError:
        logger.error("seed_path_missing")
        print(MSG_FILE_NOT_FOUND, file=stdout)
        return 1
    except SeedFileNotFoundError as exc:
        logger.error("seed_file_not_found", path=exc.path)
        print(MSG_FILE_NOT_FOUND, file=stdout)
        return 1
    except SeedFileError as exc:
        logger.error("seed_load_failed", error=exc.message, **exc.details)
        return 1

    app.processor.run(reader)
    return 0


if __name__ == "__main__":
    sys.exit(main())
