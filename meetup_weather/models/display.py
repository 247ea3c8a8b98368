"""Display records consumed by the presentation layer."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from meetup_weather.models.tags import WeatherTag

NO_DATA_SUMMARY = "No data available."


class SkyCondition(StrEnum):
    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAINY = "rainy"


@dataclass(frozen=True)
class HourlyPoint:
    hour: int
    label: str  # e.g. "3 PM"
    temp: int
    precipitation: float
    wind_speed: float


@dataclass(frozen=True)
class DisplayRecord:
    target_date: date
    temp_high: int
    temp_low: int
    precipitation: float
    wind_speed: float
    summary: str
    condition: SkyCondition
    hourly: tuple[HourlyPoint, ...]
    tags: tuple[WeatherTag, ...]
    has_data: bool = True
    # Date of the forecast record shown; differs from target_date on a weekday fallback.
    source_date: date | None = None

    @property
    def is_substitute(self) -> bool:
        return self.source_date is not None and self.source_date != self.target_date


@dataclass(frozen=True)
class DisplayPair:
    this_occurrence: DisplayRecord
    next_occurrence: DisplayRecord
    alerts: tuple[str, ...] = ()  # provider alert event names for the location
