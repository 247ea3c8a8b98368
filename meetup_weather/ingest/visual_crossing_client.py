"""Visual Crossing timeline API client with retry and error classification."""

import asyncio
import logging
import os
from urllib.parse import quote

import httpx

from meetup_weather.config.schema import ProviderConfig
from meetup_weather.ingest.payload_decoder import decode_forecast
from meetup_weather.models.errors import (
    AuthError,
    BadLocationError,
    FetchError,
    NetworkError,
    RateLimitedError,
    UpstreamError,
)
from meetup_weather.models.forecast import ForecastPayload

logger = logging.getLogger(__name__)

VISUAL_CROSSING_BASE_URL = (
    "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services/timeline"
)
API_KEY_ENV = "VISUAL_CROSSING_API_KEY"

MSG_BAD_LOCATION = "Invalid location. Please check and try again."
MSG_AUTH = "API key error. Please check your credentials."
MSG_NO_KEY = "Weather API key is not configured. Please check server configuration."
MSG_RATE_LIMITED = "API rate limit exceeded. Please try again later."
MSG_NETWORK = (
    "Failed to fetch weather data. Please check your connection and try again."
)

_RETRY_STATUSES = (429, 503)


class VisualCrossingClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = VISUAL_CROSSING_BASE_URL,
        timeout: float = 15.0,
        max_retries: int = 2,
        retry_base_delay: float = 1.0,
        unit_group: str = "us",
        include: str = "hours",
    ):
        self.api_key = api_key if api_key is not None else os.environ.get(API_KEY_ENV, "")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        self.unit_group = unit_group
        self.include = include

    @classmethod
    def from_config(
        cls, config: ProviderConfig, api_key: str | None = None
    ) -> "VisualCrossingClient":
        return cls(
            api_key=api_key,
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            max_retries=config.max_retries,
            retry_base_delay=config.retry_base_delay_seconds,
            unit_group=config.unit_group,
            include=config.include,
        )

    async def fetch_forecast(self, location: str) -> ForecastPayload:
        """Fetch and decode the multi-day forecast for ``location``."""
        raw = await self.get_raw_forecast(location)
        payload = decode_forecast(raw)
        logger.info(
            "Fetched %d forecast days for %r (%s)",
            len(payload.days), location, payload.resolved_address,
        )
        return payload

    async def get_raw_forecast(self, location: str) -> dict:
        """Fetch the raw timeline JSON for ``location``.

        Retries on 503/429 and transport errors with exponential backoff.
        Raises a FetchError subclass describing the failure.
        """
        if not self.api_key:
            # Server misconfiguration, not a caller credential problem.
            raise UpstreamError(MSG_NO_KEY)

        url = f"{self.base_url}/{quote(location.strip(), safe='')}"
        params = {
            "key": self.api_key,
            "include": self.include,
            "unitGroup": self.unit_group,
        }

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            for attempt in range(self.max_retries + 1):
                try:
                    resp = await client.get(url, params=params)
                except httpx.RequestError as e:
                    if attempt < self.max_retries:
                        delay = self.retry_base_delay * (2**attempt)
                        logger.warning(
                            "Visual Crossing request error, retrying in %.1fs: %s",
                            delay, e,
                        )
                        await asyncio.sleep(delay)
                        continue
                    logger.error("Visual Crossing request failed for %r: %s", location, e)
                    raise NetworkError(MSG_NETWORK) from e

                if resp.status_code in _RETRY_STATUSES and attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "Visual Crossing returned %d, retrying in %.1fs (attempt %d/%d)",
                        resp.status_code, delay, attempt + 1, self.max_retries,
                    )
                    await asyncio.sleep(delay)
                    continue

                if resp.status_code >= 400:
                    raise _classify_status(resp)

                try:
                    return resp.json()
                except ValueError as e:
                    raise UpstreamError(
                        "Weather API returned an unreadable response", resp.status_code
                    ) from e


def _classify_status(resp: httpx.Response) -> FetchError:
    status = resp.status_code
    logger.error("Visual Crossing %d: %s", status, resp.text[:200])
    if status == 400:
        return BadLocationError(MSG_BAD_LOCATION, status)
    if status in (401, 403):
        return AuthError(MSG_AUTH, status)
    if status == 429:
        return RateLimitedError(MSG_RATE_LIMITED, status)
    return UpstreamError(f"Weather API error: {resp.reason_phrase}", status)
