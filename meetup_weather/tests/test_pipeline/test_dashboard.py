"""Tests for the HTTP API."""

import inspect

import pytest
from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

from meetup_weather.config.loader import config_hash
from meetup_weather.config.schema import AppConfig
from meetup_weather.dashboard import create_app
from meetup_weather.ingest.visual_crossing_client import MSG_NO_KEY, VisualCrossingClient
from meetup_weather.models.errors import BadLocationError, RateLimitedError
from meetup_weather.models.forecast import ForecastPayload


class FakeClient:
    def __init__(self, raw: dict):
        self.raw = raw
        self.queries: list[str] = []

    async def get_raw_forecast(self, location: str) -> dict:
        self.queries.append(location)
        if location == "nowhere":
            raise BadLocationError("Invalid location. Please check and try again.", 400)
        return self.raw


@pytest.fixture
def calls() -> list[str]:
    return []


@pytest.fixture
def app_client(two_week_payload: ForecastPayload, timeline_json: dict, calls: list[str]):
    async def fetch_forecast(location: str) -> ForecastPayload:
        calls.append(location)
        if location == "busy":
            raise RateLimitedError("API rate limit exceeded. Please try again later.", 429)
        return two_week_payload

    app = create_app(
        AppConfig(), client=FakeClient(timeline_json), fetch_forecast=fetch_forecast
    )
    return TestClient(app)


class TestDashboard:
    def test_health(self, app_client: TestClient):
        resp = app_client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "config_hash": config_hash(AppConfig())}

    def test_orchestrator_endpoints_run_on_event_loop(self, app_client: TestClient):
        # Orchestrator state is only touched on the event loop.
        endpoints = {
            route.path: route.endpoint
            for route in app_client.app.routes
            if isinstance(route, APIRoute)
        }
        for path in ("/api/location", "/api/selection", "/api/display", "/api/status"):
            assert inspect.iscoroutinefunction(endpoints[path]), path

    def test_initial_status_and_display(self, app_client: TestClient):
        status = app_client.get("/api/status").json()
        assert status["state"] == "empty"
        assert status["weekday"] == "friday"
        assert (status["start_hour"], status["end_hour"]) == (12, 17)

        display = app_client.get("/api/display").json()
        assert display["this_occurrence"]["has_data"] is False
        assert display["this_occurrence"]["summary"] == "No data available."

    def test_tags(self, app_client: TestClient):
        tags = app_client.get("/api/tags").json()
        assert [t["tag"] for t in tags] == [
            "niceDay", "chanceOfRain", "tooWindy", "hotDay", "coldDay", "humid",
        ]

    def test_submit_location(self, app_client: TestClient, calls: list[str]):
        resp = app_client.post("/api/location", json={"location": "Reston, VA"})
        assert resp.status_code == 200
        assert set(resp.json()) == {"this_occurrence", "next_occurrence", "alerts"}

        status = app_client.get("/api/status").json()
        assert status["state"] == "ready"
        assert status["location"] == "Reston, VA"

        app_client.post("/api/location", json={"location": "  reston, va "})
        assert calls == ["Reston, VA"]

    def test_submit_empty_location(self, app_client: TestClient, calls: list[str]):
        resp = app_client.post("/api/location", json={"location": "   "})
        assert resp.status_code == 422
        assert calls == []

    def test_submit_location_fetch_failure(self, app_client: TestClient):
        resp = app_client.post("/api/location", json={"location": "busy"})
        assert resp.status_code == 429
        assert resp.json()["detail"]["kind"] == "rate_limited"

        status = app_client.get("/api/status").json()
        assert status["state"] == "failed"
        assert "rate limit" in status["error_message"]

    def test_apply_selection(self, app_client: TestClient, calls: list[str]):
        app_client.post("/api/location", json={"location": "Reston, VA"})
        resp = app_client.put(
            "/api/selection",
            json={"weekday": "Saturday", "start_hour": 8, "end_hour": 12},
        )
        assert resp.status_code == 200
        assert resp.json()["this_occurrence"]["date_label"].startswith("Saturday")
        assert app_client.get("/api/status").json()["weekday"] == "saturday"
        assert len(calls) == 1

    def test_apply_invalid_selection(self, app_client: TestClient):
        resp = app_client.put(
            "/api/selection",
            json={"weekday": "friday", "start_hour": 17, "end_hour": 12},
        )
        assert resp.status_code == 422
        assert app_client.get("/api/status").json()["start_hour"] == 12

    def test_weather_proxy(self, app_client: TestClient, timeline_json: dict):
        resp = app_client.get("/api/weather", params={"location": "Reston, VA"})
        assert resp.status_code == 200
        assert resp.json() == timeline_json

    def test_weather_proxy_requires_location(self, app_client: TestClient):
        resp = app_client.get("/api/weather")
        assert resp.status_code == 400

    def test_weather_proxy_bad_location(self, app_client: TestClient):
        resp = app_client.get("/api/weather", params={"location": "nowhere"})
        assert resp.status_code == 400
        assert resp.json()["detail"]["kind"] == "bad_location"

    def test_weather_proxy_without_api_key(self, two_week_payload: ForecastPayload):
        async def fetch_forecast(location: str) -> ForecastPayload:
            return two_week_payload

        app = create_app(
            AppConfig(),
            client=VisualCrossingClient(api_key=""),
            fetch_forecast=fetch_forecast,
        )
        resp = TestClient(app).get("/api/weather", params={"location": "Reston, VA"})
        assert resp.status_code == 502
        assert resp.json()["detail"]["error"] == MSG_NO_KEY
