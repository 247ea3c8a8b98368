"""Data normalizer: turns a located day record into a display record."""

import math
from datetime import date

from meetup_weather.models.display import (
    NO_DATA_SUMMARY,
    DisplayRecord,
    HourlyPoint,
    SkyCondition,
)
from meetup_weather.models.forecast import DayRecord, HourRecord
from meetup_weather.schedule.dates import format_hour_label
from meetup_weather.signal.classifier import classify_day

# Checked in order; first match wins.
_CONDITION_KEYWORDS: tuple[tuple[SkyCondition, tuple[str, ...]], ...] = (
    (SkyCondition.RAINY, ("rain", "shower", "drizzle")),
    (SkyCondition.CLOUDY, ("cloud", "overcast")),
)


def round_half_up(value: float) -> int:
    """Round halves upward; builtin round() rounds half to even."""
    return int(math.floor(value + 0.5))


def map_condition(conditions: str) -> SkyCondition:
    text = (conditions or "").lower()
    for category, keywords in _CONDITION_KEYWORDS:
        if any(k in text for k in keywords):
            return category
    return SkyCondition.SUNNY


def _temp_or_mean(value: float | None, mean: float | None) -> int:
    if value is not None:
        return round_half_up(value)
    if mean is not None:
        return round_half_up(mean)
    return 0


def extract_hours(
    hours: tuple[HourRecord, ...], start_hour: int, end_hour: int
) -> tuple[HourlyPoint, ...]:
    """Hours within [start_hour, end_hour], ascending by hour of day."""
    selected = sorted(
        (h for h in hours if start_hour <= h.hour <= end_hour),
        key=lambda h: h.hour,
    )
    return tuple(
        HourlyPoint(
            hour=h.hour,
            label=format_hour_label(h.hour),
            temp=round_half_up(h.temp) if h.temp is not None else 0,
            precipitation=h.precip_prob or 0,
            wind_speed=h.wind_speed or 0,
        )
        for h in selected
    )


def empty_display(target_date: date) -> DisplayRecord:
    return DisplayRecord(
        target_date=target_date,
        temp_high=0,
        temp_low=0,
        precipitation=0,
        wind_speed=0,
        summary=NO_DATA_SUMMARY,
        condition=SkyCondition.SUNNY,
        hourly=(),
        tags=(),
        has_data=False,
    )


def normalize(
    day: DayRecord | None,
    target_date: date,
    start_hour: int,
    end_hour: int,
    description: str = "",
) -> DisplayRecord:
    """Build the display record for ``day``.

    ``description`` is the payload-level forecast text used as the summary.
    A missing day (not found in the forecast) produces a zeroed record with
    ``has_data=False`` instead of raising. ``source_date`` is the date of
    ``day``, which differs from ``target_date`` when the locator substituted
    another week.
    """
    if day is None:
        return empty_display(target_date)

    return DisplayRecord(
        target_date=target_date,
        temp_high=_temp_or_mean(day.temp_max, day.temp),
        temp_low=_temp_or_mean(day.temp_min, day.temp),
        precipitation=day.precip_prob or 0,
        wind_speed=day.wind_speed or 0,
        summary=description or "",
        condition=map_condition(day.conditions),
        hourly=extract_hours(day.hours, start_hour, end_hour),
        tags=classify_day(day),
        source_date=day.date,
    )
