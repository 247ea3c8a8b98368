"""Tests for locating meetup days inside a forecast payload."""

import logging
from datetime import date, datetime

from meetup_weather.ingest.forecast_locator import find_day, find_next_occurrence
from meetup_weather.models.forecast import ForecastPayload


class TestFindDay:
    def test_exact_match(self, two_week_payload: ForecastPayload, reference: datetime):
        day = find_day(two_week_payload, "friday", reference)
        assert day is not None
        assert day.date == date(2026, 10, 23)
        assert day.temp_max == 72.0

    def test_exact_match_wins_over_weekday_match(self, make_day, reference: datetime):
        # Two Fridays present, listed with the later one first.
        payload = ForecastPayload(days=(
            make_day(date(2026, 10, 30), temp_max=50.0),
            make_day(date(2026, 10, 23), temp_max=72.0),
        ))
        day = find_day(payload, "friday", reference)
        assert day is not None
        assert day.date == date(2026, 10, 23)

    def test_today_is_target_weekday(self, two_week_payload: ForecastPayload, reference: datetime):
        day = find_day(two_week_payload, "tuesday", reference)
        assert day is not None
        assert day.date == reference.date()

    def test_weekday_fallback_logs_warning(self, make_payload, reference: datetime, caplog):
        # Starts after the target Friday 10-23; 10-30 is the following week's
        # occurrence, so 11-06 is the substitute.
        payload = make_payload(date(2026, 10, 24), 17)
        with caplog.at_level(logging.WARNING):
            day = find_day(payload, "friday", reference)
        assert day is not None
        assert day.date == date(2026, 11, 6)
        assert "falling back" in caplog.text

    def test_fallback_never_uses_following_week(self, make_payload, reference: datetime):
        # Only Friday in range is 10-30, which belongs to the next-occurrence card.
        payload = make_payload(date(2026, 10, 24), 10)
        assert find_day(payload, "friday", reference) is None

    def test_fallback_skips_past_dates(self, make_day, reference: datetime):
        payload = ForecastPayload(days=(make_day(date(2026, 10, 16), temp_max=40.0),))
        assert find_day(payload, "friday", reference) is None

    def test_fallback_picks_earliest_eligible_week(self, make_day, reference: datetime):
        payload = ForecastPayload(days=(
            make_day(date(2026, 11, 13)),
            make_day(date(2026, 10, 16)),
            make_day(date(2026, 11, 6)),
            make_day(date(2026, 10, 30)),
        ))
        day = find_day(payload, "friday", reference)
        assert day is not None
        assert day.date == date(2026, 11, 6)

    def test_fallback_disabled(self, make_payload, reference: datetime):
        payload = make_payload(date(2026, 10, 24), 17)
        assert find_day(payload, "friday", reference, allow_weekday_fallback=False) is None

    def test_not_found(self, make_payload, reference: datetime):
        # Saturday through Thursday: no Friday at all.
        payload = make_payload(date(2026, 10, 24), 6)
        assert find_day(payload, "friday", reference) is None

    def test_accepts_date_reference(self, two_week_payload: ForecastPayload, reference: datetime):
        day = find_day(two_week_payload, "Friday", reference.date())
        assert day is not None
        assert day.date == date(2026, 10, 23)


class TestFindNextOccurrence:
    def test_one_week_after(self, two_week_payload: ForecastPayload):
        day = find_next_occurrence(two_week_payload, "friday", date(2026, 10, 23))
        assert day is not None
        assert day.date == date(2026, 10, 30)
        assert day.precip_prob == 45.0

    def test_anchor_adjusts_forward_to_weekday(self, two_week_payload: ForecastPayload):
        # Tuesday + 7 = Tuesday 10-27, moved forward to Friday 10-30.
        day = find_next_occurrence(two_week_payload, "friday", date(2026, 10, 20))
        assert day is not None
        assert day.date == date(2026, 10, 30)

    def test_accepts_datetime(self, two_week_payload: ForecastPayload):
        day = find_next_occurrence(two_week_payload, "friday", datetime(2026, 10, 23, 15))
        assert day is not None
        assert day.date == date(2026, 10, 30)

    def test_beyond_horizon_is_not_found(self, make_payload):
        # Ten days from Tuesday 10-20; the occurrence 12 days out is Sunday 11-01.
        payload = make_payload(date(2026, 10, 20), 10)
        assert find_next_occurrence(payload, "sunday", date(2026, 10, 25)) is None

    def test_no_weekday_fallback(self, make_payload):
        # A Friday exists (10-23) but not the one a week after 10-23.
        payload = make_payload(date(2026, 10, 20), 10)
        assert find_next_occurrence(payload, "friday", date(2026, 10, 23)) is None
