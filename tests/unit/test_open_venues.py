"""Batch open-now filtering across venues in different timezones."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from venue_hours.application.open_venues import (
    adapt_payloads,
    evaluate_venue,
    filter_open_payloads,
    filter_open_venues,
)
from venue_hours.config.settings import ServiceSettings
from venue_hours.domain.enums import BusinessStatus
from venue_hours.domain.models import GeoPoint, RealTimeStatus, VenueHours

# Friday 12:00 UTC: 22:00 Friday in UTC+10, 05:00 Friday in UTC-7.
UTC_NOW = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)
LATE_FRIDAY = ["Friday: 5:00 pm – 2:00 am", "Saturday: 5:00 pm – 2:00 am"]


def _venue(place_id: str, hours=None, **kw) -> VenueHours:
    kw.setdefault("utc_offset_minutes", 600)
    return VenueHours(place_id=place_id, name=f"venue-{place_id}", weekday_descriptions=hours or [], **kw)


def _events(stream) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]


def test_evaluate_venue_uses_venue_local_time():
    result = evaluate_venue(_venue("a", LATE_FRIDAY), UTC_NOW)
    assert result.local_time == datetime(2026, 10, 16, 22, 0)
    assert result.status.is_open is True
    assert result.status.message == "Open until 2:00 AM tomorrow (overnight hours)"


def test_same_instant_differs_by_offset():
    sydney = evaluate_venue(_venue("syd", LATE_FRIDAY), UTC_NOW)
    denver = evaluate_venue(_venue("den", LATE_FRIDAY, utc_offset_minutes=-420), UTC_NOW)
    assert sydney.status.is_open is True
    assert denver.status.is_open is False
    assert denver.status.message == "Closed - Opens at 5:00 PM"


def test_filter_keeps_open_venues_in_input_order(logger, log_stream):
    venues = [
        _venue("late", LATE_FRIDAY),
        _venue("day", ["Friday: 9:00 am – 5:00 pm"]),
        _venue("nohours"),
        _venue("paused", LATE_FRIDAY, business_status=BusinessStatus.CLOSED_TEMPORARILY),
        _venue("gone", LATE_FRIDAY, business_status=BusinessStatus.CLOSED_PERMANENTLY),
        _venue("vague", ["Friday: call ahead"], open_now=True),
    ]
    result = filter_open_venues(venues, UTC_NOW, settings=ServiceSettings(), logger=logger)

    assert [item.venue.place_id for item in result] == ["late", "vague"]
    assert result[1].status.message == "Currently open"

    skipped = {e["place_id"]: e["reason"] for e in _events(log_stream) if e["event"] == "venue_skipped"}
    assert skipped == {
        "nohours": "no_hours",
        "paused": "closed_temporarily",
        "gone": "closed_permanently",
    }
    end = [e for e in _events(log_stream) if e["event"] == "stage_end"][0]
    assert end["venues_in"] == 6
    assert end["venues_open"] == 2


def test_candidate_cap(logger):
    venues = [_venue(str(i), LATE_FRIDAY) for i in range(5)]
    result = filter_open_venues(venues, UTC_NOW, max_candidates=2, settings=ServiceSettings(), logger=logger)
    assert [item.venue.place_id for item in result] == ["0", "1"]


def test_candidate_cap_defaults_to_settings(logger):
    venues = [_venue(str(i), LATE_FRIDAY) for i in range(5)]
    result = filter_open_venues(venues, UTC_NOW, settings=ServiceSettings(max_candidates=3), logger=logger)
    assert len(result) == 3


def test_radius_filter(logger, log_stream):
    origin = GeoPoint(lat=0.0, lon=0.0)
    venues = [
        _venue("near", LATE_FRIDAY, lat=0.0, lon=0.01),
        _venue("far", LATE_FRIDAY, lat=0.0, lon=0.05),
        _venue("unknown", LATE_FRIDAY),
    ]
    result = filter_open_venues(venues, UTC_NOW, origin=origin, radius_m=5000, settings=ServiceSettings(), logger=logger)

    assert [item.venue.place_id for item in result] == ["near", "unknown"]
    assert result[0].distance_km == pytest.approx(1.112, abs=0.01)
    assert result[1].distance_km is None
    skipped = [e for e in _events(log_stream) if e["event"] == "venue_skipped"]
    assert skipped[0]["place_id"] == "far"
    assert skipped[0]["reason"] == "out_of_radius"


def test_origin_without_radius_uses_settings_default(logger):
    origin = GeoPoint(lat=0.0, lon=0.0)
    venues = [_venue("far", LATE_FRIDAY, lat=0.0, lon=0.05)]
    wide = filter_open_venues(venues, UTC_NOW, origin=origin, settings=ServiceSettings(), logger=logger)
    narrow = filter_open_venues(
        venues, UTC_NOW, origin=origin, settings=ServiceSettings(default_radius_m=1000), logger=logger
    )
    assert wide[0].distance_km == pytest.approx(5.56, abs=0.01)
    assert narrow == []


def test_one_failing_venue_does_not_abort_the_batch(monkeypatch, logger, log_stream):
    from venue_hours.application import open_venues

    real_evaluate = open_venues.evaluate

    def flaky_evaluate(schedule, now, fallback_open_now=None) -> RealTimeStatus:
        if schedule and schedule[0].startswith("Boom"):
            raise RuntimeError("bad record")
        return real_evaluate(schedule, now, fallback_open_now)

    monkeypatch.setattr(open_venues, "evaluate", flaky_evaluate)
    venues = [_venue("bad", ["Boom: 1 am – 2 am"]), _venue("good", LATE_FRIDAY)]
    result = filter_open_venues(venues, UTC_NOW, settings=ServiceSettings(), logger=logger)

    assert [item.venue.place_id for item in result] == ["good"]
    errors = [e for e in _events(log_stream) if e["event"] == "venue_skipped" and e["reason"] == "error"]
    assert errors[0]["place_id"] == "bad"
    assert errors[0]["error"] == "bad record"


def test_evaluation_events_when_enabled(logger, log_stream):
    venues = [_venue("late", LATE_FRIDAY), _venue("day", ["Friday: 9:00 am – 5:00 pm"])]
    filter_open_venues(venues, UTC_NOW, settings=ServiceSettings(log_evaluations=True), logger=logger)
    evaluations = [e for e in _events(log_stream) if e["event"] == "evaluation"]
    assert [(e["place_id"], e["is_open"]) for e in evaluations] == [("late", True), ("day", False)]


def test_evaluation_events_off_by_default(logger, log_stream):
    filter_open_venues([_venue("late", LATE_FRIDAY)], UTC_NOW, settings=ServiceSettings(), logger=logger)
    assert not [e for e in _events(log_stream) if e["event"] == "evaluation"]


def test_adapt_payloads_skips_invalid(logger, log_stream):
    payloads = [
        {"id": "ok", "regularOpeningHours": {"weekdayDescriptions": LATE_FRIDAY}},
        "not a place",
        {"displayName": {"text": "missing id"}},
    ]
    venues = adapt_payloads(payloads, "v1", logger=logger)
    assert [venue.place_id for venue in venues] == ["ok"]
    reasons = [(e["place_id"], e["reason"]) for e in _events(log_stream) if e["event"] == "venue_skipped"]
    assert reasons == [("payload_1", "invalid_payload"), ("payload_2", "invalid_payload")]


def test_filter_open_payloads_end_to_end(logger):
    payloads = [
        {
            "place_id": "bar",
            "name": "Harbour Bar",
            "utc_offset_minutes": 660,
            "opening_hours": {"open_now": False, "weekday_text": LATE_FRIDAY},
        },
        {
            "place_id": "cafe",
            "name": "Morning Cafe",
            "utc_offset_minutes": 660,
            "opening_hours": {"open_now": True, "weekday_text": ["Friday: 7:00 am – 3:00 pm"]},
        },
        None,
    ]
    result = filter_open_payloads(payloads, "legacy", UTC_NOW, settings=ServiceSettings(), logger=logger)
    assert [item.venue.name for item in result] == ["Harbour Bar"]
    assert result[0].local_time == datetime(2026, 10, 16, 23, 0)


def test_overflowing_offset_does_not_lose_the_batch(logger, log_stream):
    bad = json.loads('{"id": "huge", "utcOffsetMinutes": 1e400}')
    bad["regularOpeningHours"] = {"weekdayDescriptions": LATE_FRIDAY}
    good = {"id": "ok", "utcOffsetMinutes": 600, "regularOpeningHours": {"weekdayDescriptions": LATE_FRIDAY}}

    result = filter_open_payloads([bad, good], "v1", UTC_NOW, settings=ServiceSettings(), logger=logger)

    # The unusable offset is dropped, so "huge" is evaluated in UTC (Friday 12:00, closed).
    assert [item.venue.place_id for item in result] == ["ok"]
    assert not [e for e in _events(log_stream) if e["event"] == "venue_skipped" and e["reason"] == "error"]


def test_unexpected_adapter_failure_skips_only_that_payload(monkeypatch, logger, log_stream):
    from venue_hours.application import open_venues

    real_adapt = open_venues.to_venue_hours

    def flaky_adapt(payload, api_version):
        if payload.get("id") == "boom":
            raise OverflowError("cannot convert float infinity to integer")
        return real_adapt(payload, api_version)

    monkeypatch.setattr(open_venues, "to_venue_hours", flaky_adapt)
    payloads = [{"id": "boom"}, {"id": "ok", "regularOpeningHours": {"weekdayDescriptions": LATE_FRIDAY}}]
    venues = adapt_payloads(payloads, "v1", logger=logger)

    assert [venue.place_id for venue in venues] == ["ok"]
    skipped = [e for e in _events(log_stream) if e["event"] == "venue_skipped"]
    assert skipped[0]["place_id"] == "payload_0"
    assert skipped[0]["reason"] == "invalid_payload"
    assert skipped[0]["error"].startswith("OverflowError")


def test_candidate_cap_emits_warning(logger, log_stream):
    venues = [_venue(str(i), LATE_FRIDAY) for i in range(5)]
    filter_open_venues(venues, UTC_NOW, max_candidates=2, settings=ServiceSettings(), logger=logger)
    warnings = [e for e in _events(log_stream) if e["event"] == "warning"]
    assert len(warnings) == 1
    assert warnings[0]["message"] == "candidate cap reached"
    assert (warnings[0]["cap"], warnings[0]["dropped"]) == (2, 3)


def test_payload_batch_ends_with_summary(logger, log_stream):
    payloads = [
        {"id": "ok", "utcOffsetMinutes": 600, "regularOpeningHours": {"weekdayDescriptions": LATE_FRIDAY}},
        "garbage",
    ]
    filter_open_payloads(payloads, "v1", UTC_NOW, settings=ServiceSettings(), logger=logger)
    summary = _events(log_stream)[-1]
    assert summary["event"] == "summary"
    assert (summary["payloads_in"], summary["venues_adapted"], summary["venues_open"]) == (2, 1, 1)
