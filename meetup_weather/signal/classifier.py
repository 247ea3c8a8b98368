"""Weather classifier: fixed threshold rules mapping day metrics to tags.

Rules are independent; every rule that holds contributes its tag, in
declaration order. Units are Fahrenheit, inches and mph.
"""

from collections.abc import Callable
from dataclasses import dataclass

from meetup_weather.models.forecast import DayRecord
from meetup_weather.models.tags import WEATHER_TAGS, TagInfo, WeatherTag


@dataclass(frozen=True)
class DayMetrics:
    max_temp: float = 0.0
    precip_prob: float = 0.0
    precip_amount: float = 0.0
    wind_speed: float = 0.0
    wind_gust: float = 0.0
    humidity: float = 0.0

    @classmethod
    def from_values(
        cls,
        max_temp: float | None = None,
        precip_prob: float | None = None,
        precip_amount: float | None = None,
        wind_speed: float | None = None,
        wind_gust: float | None = None,
        humidity: float | None = None,
    ) -> "DayMetrics":
        """Build metrics, treating missing upstream values as 0."""
        return cls(
            max_temp=max_temp or 0.0,
            precip_prob=precip_prob or 0.0,
            precip_amount=precip_amount or 0.0,
            wind_speed=wind_speed or 0.0,
            wind_gust=wind_gust or 0.0,
            humidity=humidity or 0.0,
        )

    @classmethod
    def from_day(cls, day: DayRecord) -> "DayMetrics":
        return cls.from_values(
            max_temp=day.temp_max,
            precip_prob=day.precip_prob,
            precip_amount=day.precip,
            wind_speed=day.wind_speed,
            wind_gust=day.wind_gust,
            humidity=day.humidity,
        )


def _nice_day(m: DayMetrics) -> bool:
    return 60 <= m.max_temp <= 75 and m.precip_prob < 30 and m.wind_speed < 10


def _chance_of_rain(m: DayMetrics) -> bool:
    return m.precip_prob >= 30 or m.precip_amount >= 0.2


def _too_windy(m: DayMetrics) -> bool:
    return m.wind_speed >= 15 or m.wind_gust >= 20


def _hot_day(m: DayMetrics) -> bool:
    return m.max_temp >= 85


def _cold_day(m: DayMetrics) -> bool:
    return m.max_temp < 50


def _humid(m: DayMetrics) -> bool:
    return m.humidity >= 75


RULES: tuple[tuple[WeatherTag, Callable[[DayMetrics], bool]], ...] = (
    (WeatherTag.NICE_DAY, _nice_day),
    (WeatherTag.CHANCE_OF_RAIN, _chance_of_rain),
    (WeatherTag.TOO_WINDY, _too_windy),
    (WeatherTag.HOT_DAY, _hot_day),
    (WeatherTag.COLD_DAY, _cold_day),
    (WeatherTag.HUMID, _humid),
)


def classify(metrics: DayMetrics) -> tuple[WeatherTag, ...]:
    """Evaluate every rule (no short-circuit) and return the tags that hold."""
    return tuple(tag for tag, rule in RULES if rule(metrics))


def classify_day(day: DayRecord) -> tuple[WeatherTag, ...]:
    return classify(DayMetrics.from_day(day))


def tag_info(tags: tuple[WeatherTag, ...] | list[WeatherTag]) -> list[TagInfo]:
    return [WEATHER_TAGS[t] for t in tags]
