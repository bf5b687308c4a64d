"""Domain models for the shared calendar registry."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from shared_calendar.exceptions import ParticipantIndexError

# The first participant of every event is the one who proposed it.
PROPOSER_INDEX = 0

FIRST_DAY = 1
LAST_DAY = 5
DAY_START_HOUR = 8
DAY_END_HOUR = 20

DEFAULT_MAX_USERS = 100


class Event(BaseModel):
    """A scheduled event on the 5-day, 8-20h grid.

    Times are whole hours and the interval is half-open, so an event from
    9 to 10 does not clash with one from 10 to 11.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    day: int = Field(ge=FIRST_DAY, le=LAST_DAY)
    start_time: int = Field(ge=DAY_START_HOUR, le=DAY_END_HOUR)
    end_time: int = Field(ge=DAY_START_HOUR, le=DAY_END_HOUR)
    participants: tuple[str, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def _end_after_start(self) -> Event:
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self

    @property
    def participant_count(self) -> int:
        return len(self.participants)

    @property
    def proposer(self) -> str:
        return self.participants[PROPOSER_INDEX]

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.day, self.start_time)

    def participant(self, index: int) -> str:
        """Return the participant at *index*.

        Negative indexes are not wrapped; anything outside
        ``0 <= index < participant_count`` raises ``ParticipantIndexError``.
        """
        if not 0 <= index < len(self.participants):
            raise ParticipantIndexError(self.name, index, len(self.participants))
        return self.participants[index]

    def has_participant(self, user: str) -> bool:
        return any(p == user for p in self.participants)

    def describe(self) -> str:
        return (
            f"{self.name}, day {self.day}, {self.start_time}-{self.end_time}, "
            f"{self.participant_count} participants."
        )
