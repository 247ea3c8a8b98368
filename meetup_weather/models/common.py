"""Common types and helpers shared across models."""

from datetime import datetime
from enum import IntEnum
from typing import TypeAlias

LocationKey: TypeAlias = str


class Weekday(IntEnum):
    """ISO day-of-week numbering (Monday=1 .. Sunday=7)."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7

    @property
    def label(self) -> str:
        return self.name.capitalize()


def local_now() -> datetime:
    return datetime.now()


def normalize_location_key(location: str) -> LocationKey:
    return location.strip().casefold()
