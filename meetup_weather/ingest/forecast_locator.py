"""Forecast locator: picks the day record for a meetup date out of a multi-day payload."""

import logging
from datetime import date, datetime

from meetup_weather.models.forecast import DayRecord, ForecastPayload
from meetup_weather.schedule.dates import (
    next_occurrence_of_weekday,
    one_week_later,
    parse_weekday,
    weekday_of,
)

logger = logging.getLogger(__name__)


def days_by_date(payload: ForecastPayload) -> dict[date, DayRecord]:
    return {day.date: day for day in payload.days}


def find_day(
    payload: ForecastPayload,
    weekday_name: str,
    reference: date | datetime,
    allow_weekday_fallback: bool = True,
) -> DayRecord | None:
    """Find the day record for the next occurrence of ``weekday_name``.

    An exact calendar-date match always wins. When the payload has no record
    for that date and ``allow_weekday_fallback`` is set, the earliest record
    with the same weekday that is neither in the past nor the following
    week's occurrence is returned instead and a warning is logged. Callers
    can spot the substitution because the record's ``date`` differs from
    the target date.

    Returns None when nothing matches (forecast horizon too short).
    """
    today = _as_date(reference)
    target = _as_date(next_occurrence_of_weekday(weekday_name, reference))

    exact = days_by_date(payload).get(target)
    if exact is not None:
        return exact

    if not allow_weekday_fallback:
        logger.info("No forecast day for %s (%s)", weekday_name, target)
        return None

    weekday = parse_weekday(weekday_name)
    following = one_week_later(target)
    candidates = [
        d for d in payload.days
        if weekday_of(d.date) == weekday and d.date >= today and d.date != following
    ]
    if not candidates:
        logger.info(
            "No forecast day for %s (%s) in %d days",
            weekday_name, target, len(payload.days),
        )
        return None

    best = min(candidates, key=lambda d: d.date)
    logger.warning(
        "Exact date %s not in forecast, falling back to %s %s",
        target, weekday.label, best.date,
    )
    return best


def find_next_occurrence(
    payload: ForecastPayload,
    weekday_name: str,
    after_date: date | datetime,
) -> DayRecord | None:
    """Find the occurrence of ``weekday_name`` one week after ``after_date``.

    Only an exact date match counts. A short forecast horizon yields None
    rather than a record from another week.
    """
    weekday = parse_weekday(weekday_name)
    anchor = one_week_later(_as_date(after_date))
    target = next_occurrence_of_weekday(weekday.name, anchor)

    day = days_by_date(payload).get(target)
    if day is None:
        logger.info(
            "Next %s (%s) is beyond the forecast horizon", weekday.label, target
        )
    return day


def _as_date(d: date | datetime) -> date:
    if isinstance(d, datetime):
        return d.date()
    return d
