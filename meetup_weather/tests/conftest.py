"""Shared test fixtures."""

import json
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest
import yaml

from meetup_weather.config.schema import AppConfig
from meetup_weather.models.forecast import DayRecord, ForecastPayload, HourRecord

# Tuesday. The Friday after it is 2026-10-23 (offset 3).
REFERENCE = datetime(2026, 10, 20, 9, 30)


def _build_hours(*hours: int, temp: float = 70.0) -> tuple[HourRecord, ...]:
    return tuple(
        HourRecord(hour=h, temp=temp + i, precip_prob=10.0, wind_speed=5.0)
        for i, h in enumerate(hours)
    )


def _build_day(d: date, **fields) -> DayRecord:
    values = {
        "temp_max": 70.0,
        "temp_min": 55.0,
        "temp": 62.5,
        "precip_prob": 10.0,
        "precip": 0.0,
        "wind_speed": 5.0,
        "wind_gust": 8.0,
        "humidity": 50.0,
        "conditions": "Clear",
    }
    values.update(fields)
    return DayRecord(date=d, **values)


def _build_payload(
    start: date, n_days: int, overrides: dict[date, dict] | None = None,
    description: str = "Mild week ahead.",
) -> ForecastPayload:
    overrides = overrides or {}
    days = []
    for i in range(n_days):
        d = start + timedelta(days=i)
        days.append(_build_day(d, **overrides.get(d, {})))
    return ForecastPayload(
        days=tuple(days),
        description=description,
        resolved_address="Reston, VA, United States",
        address="Reston, VA",
    )


@pytest.fixture
def reference() -> datetime:
    return REFERENCE


@pytest.fixture
def make_hours():
    """Builder for hourly records: make_hours(12, 13, temp=70.0)."""
    return _build_hours


@pytest.fixture
def make_day():
    """Builder for a day record with mild defaults; keyword args override fields."""
    return _build_day


@pytest.fixture
def make_payload():
    """Builder for a consecutive-day payload: make_payload(start, n_days, overrides)."""
    return _build_payload


@pytest.fixture
def two_week_payload() -> ForecastPayload:
    """Fourteen days from the reference date, Fridays at offsets 3 and 10."""
    start = REFERENCE.date()
    return _build_payload(
        start,
        14,
        overrides={
            date(2026, 10, 23): {
                "temp_max": 72.0, "precip_prob": 15.0, "wind_speed": 8.0,
                "hours": _build_hours(17, 12, 13, 9, 20, 15),
            },
            date(2026, 10, 30): {
                "temp_max": 65.0, "precip_prob": 45.0, "wind_speed": 16.0,
                "conditions": "Rain, Partially cloudy",
            },
        },
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def timeline_json(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "timeline_reston.json") as f:
        return json.load(f)


@pytest.fixture
def default_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "selection": {"weekday": "Saturday", "start_hour": 9, "end_hour": 12},
        "provider": {"timeout_seconds": 5.0},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
