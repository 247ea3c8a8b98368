"""Calendar arithmetic for recurring weekly meetups.

Every "this weekday" / "a week later" computation in the package goes
through this module; callers never add day offsets themselves.
"""

from datetime import date, datetime, time, timedelta
from typing import TypeVar

from meetup_weather.models.common import Weekday
from meetup_weather.models.errors import InvalidHour, InvalidWeekday

D = TypeVar("D", date, datetime)

ONE_WEEK = timedelta(days=7)


def parse_weekday(name: str) -> Weekday:
    """Map an English weekday name (any case, surrounding spaces ignored) to a Weekday."""
    if not isinstance(name, str):
        raise InvalidWeekday(str(name))
    try:
        return Weekday[name.strip().upper()]
    except KeyError:
        raise InvalidWeekday(name) from None


def weekday_of(d: date) -> Weekday:
    return Weekday(d.isoweekday())


def days_until_weekday(from_day: Weekday, target: Weekday) -> int:
    """Smallest non-negative number of days from ``from_day`` to ``target`` (0-6)."""
    return (target - from_day) % 7


def next_occurrence_of_weekday(weekday_name: str, reference: D) -> D:
    """Return the next occurrence of ``weekday_name`` on or after ``reference``.

    If ``reference`` already falls on that weekday, ``reference`` itself is
    returned, whatever its time of day. Time-of-day of a datetime reference
    is preserved.
    """
    target = parse_weekday(weekday_name)
    offset = days_until_weekday(weekday_of(reference), target)
    return reference + timedelta(days=offset)


def one_week_later(d: D) -> D:
    return d + ONE_WEEK


def validate_hour(hour: int) -> int:
    if isinstance(hour, bool) or not isinstance(hour, int) or not 0 <= hour <= 23:
        raise InvalidHour(f"Hour must be an integer in 0-23, got {hour!r}")
    return hour


def validate_hour_range(start_hour: int, end_hour: int) -> tuple[int, int]:
    validate_hour(start_hour)
    validate_hour(end_hour)
    if start_hour >= end_hour:
        raise InvalidHour(
            f"Start hour must be before end hour, got {start_hour}-{end_hour}"
        )
    return start_hour, end_hour


def set_hour_of_day(d: date | datetime, hour: int) -> datetime:
    """Same calendar date at ``hour``:00:00."""
    validate_hour(hour)
    if isinstance(d, datetime):
        return d.replace(hour=hour, minute=0, second=0, microsecond=0)
    return datetime.combine(d, time(hour=hour))


def format_hour_label(hour: int) -> str:
    validate_hour(hour)
    if hour == 0:
        return "12 AM"
    if hour == 12:
        return "12 PM"
    if hour < 12:
        return f"{hour} AM"
    return f"{hour - 12} PM"


def format_hour_range(start_hour: int, end_hour: int) -> str:
    return f"{format_hour_label(start_hour)} - {format_hour_label(end_hour)}"


def format_date_label(d: date) -> str:
    """E.g. ``Friday, October 23``."""
    return f"{weekday_of(d).label}, {d.strftime('%B')} {d.day}"
