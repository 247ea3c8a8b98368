"""Provider forecast data models, decoded from the timeline API payload."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class HourRecord:
    hour: int  # 0-23
    temp: float | None = None
    feels_like: float | None = None
    precip_prob: float | None = None
    precip: float | None = None
    wind_speed: float | None = None
    wind_gust: float | None = None
    humidity: float | None = None
    conditions: str = ""


@dataclass(frozen=True)
class DayRecord:
    date: date
    temp_max: float | None = None
    temp_min: float | None = None
    temp: float | None = None
    precip_prob: float | None = None
    precip: float | None = None
    wind_speed: float | None = None
    wind_gust: float | None = None
    humidity: float | None = None
    conditions: str = ""
    hours: tuple[HourRecord, ...] = ()


@dataclass(frozen=True)
class ForecastPayload:
    days: tuple[DayRecord, ...]
    description: str = ""
    latitude: float | None = None
    longitude: float | None = None
    resolved_address: str = ""
    address: str = ""
    timezone: str = ""
    tz_offset: float | None = None
    alerts: tuple[str, ...] = field(default=())
