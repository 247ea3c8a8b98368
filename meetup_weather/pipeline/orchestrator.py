"""Forecast orchestrator: owns the location cache and the current selection.

A location submission fetches (or reuses) the multi-day forecast for that
location; changing the weekday or hour range only re-runs the locator and
normalizer against the cached payload.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from meetup_weather.ingest.forecast_locator import find_day, find_next_occurrence
from meetup_weather.models.common import LocationKey, local_now
from meetup_weather.models.display import DisplayPair
from meetup_weather.models.errors import EmptyLocation, FetchError, FetchFailed
from meetup_weather.models.forecast import ForecastPayload
from meetup_weather.models.status import FetchState, OrchestratorStatus, Selection
from meetup_weather.schedule.dates import (
    next_occurrence_of_weekday,
    one_week_later,
    parse_weekday,
    validate_hour_range,
)
from meetup_weather.signal.normalizer import empty_display, normalize
from meetup_weather.storage.location_cache import LocationCache

logger = logging.getLogger(__name__)

FetchForecast = Callable[[str], Awaitable[ForecastPayload]]

MSG_UNEXPECTED_FAILURE = "Failed to load the forecast. Please try again later."


class ForecastOrchestrator:
    def __init__(
        self,
        fetch_forecast: FetchForecast,
        cache: LocationCache | None = None,
        weekday: str = "friday",
        start_hour: int = 12,
        end_hour: int = 17,
        allow_weekday_fallback: bool = True,
        clock: Callable[[], datetime] = local_now,
    ):
        parse_weekday(weekday)
        validate_hour_range(start_hour, end_hour)
        self._fetch_forecast = fetch_forecast
        self.cache = cache if cache is not None else LocationCache()
        self.allow_weekday_fallback = allow_weekday_fallback
        self._clock = clock
        self._selection = Selection(weekday.strip().lower(), start_hour, end_hour)

        self._location = ""
        self._current_key: LocationKey | None = None
        self._states: dict[LocationKey, FetchState] = {}
        self._errors: dict[LocationKey, str] = {}
        self._in_flight: dict[LocationKey, asyncio.Task[ForecastPayload]] = {}
        self._display = self._initial_display()

    # --- Caller API ---

    @property
    def selection(self) -> Selection:
        return self._selection

    async def submit_location(self, location: str) -> None:
        """Select ``location`` and resolve its forecast.

        Uses the cached payload when present. Otherwise fetches it, sharing
        an in-flight fetch for the same location. Raises EmptyLocation for
        blank input and FetchFailed when the provider call fails for the
        location that is still selected.
        """
        if not location or not location.strip():
            raise EmptyLocation()

        key = self.cache.key_for(location)
        self._current_key = key
        self._location = location.strip()

        if self.cache.get(key) is not None:
            logger.info("Using cached forecast for %r", key)
            self._states[key] = FetchState.READY
            self._errors.pop(key, None)
            self._recompute()
            return

        task = self._in_flight.get(key)
        if task is None:
            logger.info("Fetching forecast for %r", self._location)
            self._states[key] = FetchState.FETCHING
            self._errors.pop(key, None)
            task = asyncio.ensure_future(self._fetch_forecast(self._location))
            self._in_flight[key] = task
        else:
            logger.info("Joining in-flight fetch for %r", key)

        try:
            payload = await task
        except FetchError as e:
            self._states[key] = FetchState.FAILED
            self._errors[key] = e.message
            if key != self._current_key:
                logger.warning(
                    "Ignoring failed fetch for %r, location changed to %r",
                    key, self._current_key,
                )
                return
            logger.error("Forecast fetch failed for %r: %s (%s)", key, e.message, e.kind)
            raise FetchFailed(e) from e
        except Exception:
            self._states[key] = FetchState.FAILED
            self._errors[key] = MSG_UNEXPECTED_FAILURE
            logger.exception("Unexpected error fetching forecast for %r", key)
            raise
        finally:
            self._finish_fetch(key, task)

        if key != self._current_key:
            logger.warning(
                "Discarding stale forecast for %r, location changed to %r",
                key, self._current_key,
            )
            if self.cache.get(key) is None:
                self._states[key] = FetchState.EMPTY
            return

        self.cache.put(key, payload)
        self._states[key] = FetchState.READY
        self._errors.pop(key, None)
        self._recompute()

    def apply_selection(self, weekday: str, start_hour: int, end_hour: int) -> None:
        """Change the weekday and hour range; recompute locally from the cache.

        Raises InvalidWeekday or InvalidHour before any state change.
        """
        parse_weekday(weekday)
        validate_hour_range(start_hour, end_hour)
        selection = Selection(weekday.strip().lower(), start_hour, end_hour)
        if selection == self._selection:
            return
        self._selection = selection
        self._recompute()

    def set_weekday(self, name: str) -> None:
        self.apply_selection(name, self._selection.start_hour, self._selection.end_hour)

    def set_hour_range(self, start_hour: int, end_hour: int) -> None:
        self.apply_selection(self._selection.weekday, start_hour, end_hour)

    def get_current_display(self) -> DisplayPair:
        return self._display

    def get_status(self) -> OrchestratorStatus:
        key = self._current_key
        if key is None:
            return OrchestratorStatus(FetchState.EMPTY, "", "")
        return OrchestratorStatus(
            state=self._states.get(key, FetchState.EMPTY),
            error_message=self._errors.get(key, ""),
            location=self._location,
        )

    # --- Internals ---

    def _finish_fetch(self, key: LocationKey, task: asyncio.Task) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    def _initial_display(self) -> DisplayPair:
        this_date = next_occurrence_of_weekday(self._selection.weekday, self._clock().date())
        return DisplayPair(
            this_occurrence=empty_display(this_date),
            next_occurrence=empty_display(one_week_later(this_date)),
        )

    def _recompute(self) -> None:
        if self._current_key is None:
            self._display = self._initial_display()
            return
        payload = self.cache.get(self._current_key)
        if payload is None:
            return

        weekday = self._selection.weekday
        start, end = self._selection.start_hour, self._selection.end_hour
        reference = self._clock()
        this_date = next_occurrence_of_weekday(weekday, reference.date())
        next_date = one_week_later(this_date)

        this_day = find_day(
            payload, weekday, reference,
            allow_weekday_fallback=self.allow_weekday_fallback,
        )
        next_day = find_next_occurrence(payload, weekday, this_date)

        self._display = DisplayPair(
            this_occurrence=normalize(this_day, this_date, start, end, payload.description),
            next_occurrence=normalize(next_day, next_date, start, end, payload.description),
            alerts=payload.alerts,
        )
        logger.debug(
            "Recomputed display for %r: %s %s-%s",
            self._current_key, weekday, start, end,
        )
