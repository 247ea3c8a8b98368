"""Meetup weather HTTP API: FastAPI backend for the browser front end.

One app instance holds one session: a single orchestrator and its
location cache. Every endpoint touching the orchestrator is async so all
state changes happen on the event loop.
"""

import logging

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from meetup_weather.config.loader import config_hash
from meetup_weather.config.schema import AppConfig
from meetup_weather.ingest.visual_crossing_client import VisualCrossingClient
from meetup_weather.models.errors import (
    EmptyLocation,
    FetchError,
    FetchErrorKind,
    FetchFailed,
    InvalidHour,
    InvalidWeekday,
)
from meetup_weather.models.tags import WEATHER_TAGS
from meetup_weather.pipeline.orchestrator import FetchForecast, ForecastOrchestrator
from meetup_weather.reporting.formatters import (
    display_pair_dict,
    status_dict,
    tag_info_dict,
)

logger = logging.getLogger(__name__)

HTTP_STATUS_BY_KIND: dict[FetchErrorKind, int] = {
    FetchErrorKind.BAD_LOCATION: 400,
    FetchErrorKind.AUTH_ERROR: 401,
    FetchErrorKind.RATE_LIMITED: 429,
    FetchErrorKind.UPSTREAM_ERROR: 502,
    FetchErrorKind.NETWORK_ERROR: 502,
}


class LocationIn(BaseModel):
    location: str


class SelectionIn(BaseModel):
    weekday: str
    start_hour: int
    end_hour: int


def _fetch_error_response(e: FetchError) -> HTTPException:
    return HTTPException(
        status_code=HTTP_STATUS_BY_KIND[e.kind],
        detail={"error": e.message, "kind": e.kind.value},
    )


def create_app(
    config: AppConfig | None = None,
    client: VisualCrossingClient | None = None,
    fetch_forecast: FetchForecast | None = None,
) -> FastAPI:
    config = config or AppConfig()
    client = client or VisualCrossingClient.from_config(config.provider)
    orchestrator = ForecastOrchestrator(
        fetch_forecast or client.fetch_forecast,
        weekday=config.selection.weekday,
        start_hour=config.selection.start_hour,
        end_hour=config.selection.end_hour,
        allow_weekday_fallback=config.locator.weekday_fallback,
    )

    app = FastAPI(title="Meetup Weather", version="0.1.0")
    app.state.orchestrator = orchestrator
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Provider proxy ──────────────────────────────────────────────

    @app.get("/api/weather")
    async def proxy_weather(location: str | None = Query(None)):
        """Raw provider JSON for a location."""
        if not location or not location.strip():
            raise HTTPException(400, {"error": "Location parameter is required"})
        try:
            return await client.get_raw_forecast(location)
        except FetchError as e:
            raise _fetch_error_response(e) from e

    # ── Session endpoints ───────────────────────────────────────────

    @app.post("/api/location")
    async def submit_location(body: LocationIn):
        try:
            await orchestrator.submit_location(body.location)
        except EmptyLocation as e:
            raise HTTPException(422, {"error": str(e)}) from e
        except FetchFailed as e:
            raise _fetch_error_response(e.cause) from e
        return display_pair_dict(orchestrator.get_current_display())

    @app.put("/api/selection")
    async def apply_selection(body: SelectionIn):
        try:
            orchestrator.apply_selection(body.weekday, body.start_hour, body.end_hour)
        except (InvalidWeekday, InvalidHour) as e:
            raise HTTPException(422, {"error": str(e)}) from e
        return display_pair_dict(orchestrator.get_current_display())

    @app.get("/api/display")
    async def get_display():
        return display_pair_dict(orchestrator.get_current_display())

    @app.get("/api/status")
    async def get_status():
        sel = orchestrator.selection
        return {
            **status_dict(orchestrator.get_status()),
            "weekday": sel.weekday,
            "start_hour": sel.start_hour,
            "end_hour": sel.end_hour,
        }

    @app.get("/api/tags")
    async def get_tags():
        return [tag_info_dict(info) for info in WEATHER_TAGS.values()]

    @app.get("/health")
    async def health():
        return {"status": "ok", "config_hash": config_hash(config)}

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="127.0.0.1", port=8777)
