"""Decode the provider's timeline JSON into strict forecast records.

The provider returns open records with many extra keys. Only the fields the
pipeline uses are kept; everything else is dropped here, at the fetch
boundary.
"""

from datetime import date
from typing import Any

from meetup_weather.models.errors import PayloadDecodeError
from meetup_weather.models.forecast import DayRecord, ForecastPayload, HourRecord


def decode_forecast(raw: Any) -> ForecastPayload:
    """Decode a timeline API response. Raises PayloadDecodeError if unusable."""
    if not isinstance(raw, dict):
        raise PayloadDecodeError(f"Expected JSON object, got {type(raw).__name__}")

    raw_days = raw.get("days")
    if not isinstance(raw_days, list) or not raw_days:
        raise PayloadDecodeError("Forecast contains no days")

    days = tuple(_decode_day(d) for d in raw_days)
    seen: set[date] = set()
    for day in days:
        if day.date in seen:
            raise PayloadDecodeError(f"Duplicate forecast date {day.date}")
        seen.add(day.date)

    alerts = tuple(
        str(a.get("event") or a.get("headline") or "")
        for a in raw.get("alerts") or []
        if isinstance(a, dict)
    )

    return ForecastPayload(
        days=days,
        description=_text(raw.get("description")),
        latitude=_number(raw, "latitude"),
        longitude=_number(raw, "longitude"),
        resolved_address=_text(raw.get("resolvedAddress")),
        address=_text(raw.get("address")),
        timezone=_text(raw.get("timezone")),
        tz_offset=_number(raw, "tzoffset"),
        alerts=alerts,
    )


def _decode_day(raw: Any) -> DayRecord:
    if not isinstance(raw, dict):
        raise PayloadDecodeError("Forecast day is not an object")
    try:
        day_date = date.fromisoformat(str(raw.get("datetime", ""))[:10])
    except ValueError as e:
        raise PayloadDecodeError(f"Bad forecast date: {raw.get('datetime')!r}") from e

    hours = tuple(_decode_hour(h) for h in raw.get("hours") or [])

    return DayRecord(
        date=day_date,
        temp_max=_number(raw, "tempmax"),
        temp_min=_number(raw, "tempmin"),
        temp=_number(raw, "temp"),
        precip_prob=_number(raw, "precipprob"),
        precip=_number(raw, "precip"),
        wind_speed=_number(raw, "windspeed"),
        wind_gust=_number(raw, "windgust"),
        humidity=_number(raw, "humidity"),
        conditions=_text(raw.get("conditions")),
        hours=hours,
    )


def _decode_hour(raw: Any) -> HourRecord:
    if not isinstance(raw, dict):
        raise PayloadDecodeError("Forecast hour is not an object")
    return HourRecord(
        hour=parse_hour_of_day(raw.get("datetime")),
        temp=_number(raw, "temp"),
        feels_like=_number(raw, "feelslike"),
        precip_prob=_number(raw, "precipprob"),
        precip=_number(raw, "precip"),
        wind_speed=_number(raw, "windspeed"),
        wind_gust=_number(raw, "windgust"),
        humidity=_number(raw, "humidity"),
        conditions=_text(raw.get("conditions")),
    )


def parse_hour_of_day(value: Any) -> int:
    """Parse ``"13:00:00"`` or ``"13"`` into 13."""
    try:
        hour = int(str(value).split(":")[0])
    except ValueError as e:
        raise PayloadDecodeError(f"Bad forecast hour: {value!r}") from e
    if not 0 <= hour <= 23:
        raise PayloadDecodeError(f"Forecast hour out of range: {value!r}")
    return hour


def _number(raw: dict, key: str) -> float | None:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PayloadDecodeError(f"Expected number for {key!r}, got {value!r}")
    return float(value)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""
