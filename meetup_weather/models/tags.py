"""Weather tag definitions."""

from dataclasses import dataclass
from enum import StrEnum


class WeatherTag(StrEnum):
    NICE_DAY = "niceDay"
    CHANCE_OF_RAIN = "chanceOfRain"
    TOO_WINDY = "tooWindy"
    HOT_DAY = "hotDay"
    COLD_DAY = "coldDay"
    HUMID = "humid"


@dataclass(frozen=True)
class TagInfo:
    tag: WeatherTag
    emoji: str
    label: str
    description: str


WEATHER_TAGS: dict[WeatherTag, TagInfo] = {
    WeatherTag.NICE_DAY: TagInfo(
        WeatherTag.NICE_DAY, "✅", "Nice Day", "Perfect weather for outdoor activities"
    ),
    WeatherTag.CHANCE_OF_RAIN: TagInfo(
        WeatherTag.CHANCE_OF_RAIN, "🌧", "Chance of Rain", "Bring an umbrella"
    ),
    WeatherTag.TOO_WINDY: TagInfo(
        WeatherTag.TOO_WINDY, "💨", "Too Windy", "Wind may affect outdoor activities"
    ),
    WeatherTag.HOT_DAY: TagInfo(
        WeatherTag.HOT_DAY, "🥵", "Hot Day", "Stay hydrated and seek shade"
    ),
    WeatherTag.COLD_DAY: TagInfo(
        WeatherTag.COLD_DAY, "🥶", "Cold Day", "Dress warmly"
    ),
    WeatherTag.HUMID: TagInfo(
        WeatherTag.HUMID, "💦", "Humid", "High humidity may make it feel warmer"
    ),
}
