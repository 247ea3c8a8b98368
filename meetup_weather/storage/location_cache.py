"""Session-lifetime forecast cache keyed by normalized location."""

from meetup_weather.models.common import LocationKey, normalize_location_key
from meetup_weather.models.forecast import ForecastPayload


class LocationCache:
    """In-memory mapping of location key to the last fetched payload.

    Entries never expire; a newer fetch for the same key replaces the old one.
    """

    def __init__(self) -> None:
        self._entries: dict[LocationKey, ForecastPayload] = {}

    @staticmethod
    def key_for(location: str) -> LocationKey:
        return normalize_location_key(location)

    def get(self, key: LocationKey) -> ForecastPayload | None:
        return self._entries.get(key)

    def put(self, key: LocationKey, payload: ForecastPayload) -> None:
        self._entries[key] = payload

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
