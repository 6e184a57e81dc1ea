from datetime import datetime, timedelta, timezone

from campusmap.domain.schemas.event import CanonicalEvent
from campusmap.services.events.calendar_window import (
    event_occurs_on_date,
    format_civil_date,
    get_campus_time_zone,
    get_current_campus_date,
    get_event_date_range,
)
from campusmap.services.events.normalize import normalize_events


def _event(start: str, end: str) -> CanonicalEvent:
    return CanonicalEvent(
        id="e1",
        title="Event",
        start=datetime.fromisoformat(start),
        end=datetime.fromisoformat(end),
    )


def test_campus_time_zone_defaults_to_chicago() -> None:
    assert get_campus_time_zone() == "America/Chicago"


def test_format_civil_date_projects_into_zone() -> None:
    late_utc = datetime(2025, 1, 16, 3, 0, tzinfo=timezone.utc)
    assert format_civil_date(late_utc) == "2025-01-15"
    assert format_civil_date(late_utc, "UTC") == "2025-01-16"


def test_current_campus_date_uses_reference() -> None:
    reference = datetime(2025, 6, 15, 2, 0, tzinfo=timezone.utc)
    assert get_current_campus_date(reference) == "2025-06-14"
    assert get_current_campus_date(reference, "America/New_York") == "2025-06-14"
    assert get_current_campus_date(reference, "Europe/Berlin") == "2025-06-15"


def test_event_date_range_for_multi_day_event() -> None:
    event = _event("2025-01-15T10:00:00-06:00", "2025-01-17T12:00:00-06:00")
    assert get_event_date_range(event) == ("2025-01-15", "2025-01-17")


def test_occurs_on_date_inside_and_outside_window() -> None:
    event = _event("2025-01-15T10:00:00-06:00", "2025-01-17T12:00:00-06:00")
    assert event_occurs_on_date(event, "2025-01-14") is False
    assert event_occurs_on_date(event, "2025-01-15") is True
    assert event_occurs_on_date(event, "2025-01-16") is True
    assert event_occurs_on_date(event, "2025-01-17") is True
    assert event_occurs_on_date(event, "2025-01-18") is False


def test_empty_date_means_no_filter() -> None:
    event = _event("2025-01-15T10:00:00-06:00", "2025-01-15T12:00:00-06:00")
    assert event_occurs_on_date(event, "") is True
    assert event_occurs_on_date(event, None) is True


def test_evening_utc_event_belongs_to_previous_campus_day() -> None:
    event = _event("2025-03-06T01:00:00+00:00", "2025-03-06T01:00:00+00:00")
    assert event_occurs_on_date(event, "2025-03-05") is True
    assert event_occurs_on_date(event, "2025-03-06") is False
    assert event_occurs_on_date(event, "2025-03-06", "UTC") is True


def test_end_before_start_is_evaluated_literally() -> None:
    event = _event("2025-01-17T10:00:00-06:00", "2025-01-15T10:00:00-06:00")
    assert event_occurs_on_date(event, "2025-01-16") is False
    assert event_occurs_on_date(event, "2025-01-17") is False
    assert event.display_end == event.start
    assert event.end < event.start


def test_instants_at_the_calendar_edge_keep_their_own_date() -> None:
    (event,) = normalize_events([{"id": "x", "title": "Late", "start": "9999-12-31T23:00:00"}])

    assert format_civil_date(event.start, "UTC") == "9999-12-31"
    assert event_occurs_on_date(event, "2025-01-01", "UTC") is False
    assert event_occurs_on_date(event, "9999-12-31", "UTC") is True

    earliest = datetime(1, 1, 1, 0, 0, tzinfo=timezone(timedelta(hours=14)))
    assert format_civil_date(earliest, "UTC") == "0001-01-01"
