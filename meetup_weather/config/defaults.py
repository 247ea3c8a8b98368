"""Named time-of-day presets for meetup hour ranges."""

from meetup_weather.models.errors import InvalidHour

TIME_OF_DAY_PRESETS: dict[str, tuple[int, int]] = {
    "morning": (8, 12),
    "afternoon": (12, 17),
    "evening": (17, 21),
}


def hour_range_for_time_of_day(name: str) -> tuple[int, int]:
    try:
        return TIME_OF_DAY_PRESETS[name.strip().lower()]
    except KeyError:
        raise InvalidHour(
            f"Unknown time of day {name!r}, expected one of "
            f"{', '.join(TIME_OF_DAY_PRESETS)}"
        ) from None
