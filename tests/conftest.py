from __future__ import annotations

import pytest

from shared_calendar.logging_config import configure_logging
from shared_calendar.settings import Settings, get_settings


@pytest.fixture(autouse=True, scope="session")
def _quiet_logging():
    # Unconfigured structlog prints to stdout, which would leak into captured output.
    configure_logging(Settings(log_level="WARNING", log_format="text"))


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
