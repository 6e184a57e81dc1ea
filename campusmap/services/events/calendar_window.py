from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from campusmap.config import settings
from campusmap.domain.schemas.event import CanonicalEvent


def get_campus_time_zone() -> str:
    return settings.CAMPUS_TIME_ZONE


def _zone(time_zone: str | None) -> ZoneInfo:
    return ZoneInfo(time_zone or get_campus_time_zone())


def format_civil_date(instant: datetime, time_zone: str | None = None) -> str:
    """Render ``instant`` as a ``YYYY-MM-DD`` civil date in ``time_zone``.

    Naive datetimes are taken to already be campus-local. Instants whose
    projection would fall outside the representable range keep their own
    calendar date.
    """
    tz = _zone(time_zone)
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=_zone(None))
    try:
        projected = instant.astimezone(tz)
    except OverflowError:
        projected = instant
    return projected.date().isoformat()


def get_current_campus_date(
    reference: datetime | None = None,
    time_zone: str | None = None,
) -> str:
    now = reference or datetime.now(tz=timezone.utc)
    return format_civil_date(now, time_zone)


def get_event_date_range(
    event: CanonicalEvent,
    time_zone: str | None = None,
) -> tuple[str, str]:
    return (
        format_civil_date(event.start, time_zone),
        format_civil_date(event.end, time_zone),
    )


def event_occurs_on_date(
    event: CanonicalEvent,
    civil_date: str | None,
    time_zone: str | None = None,
) -> bool:
    """True when ``civil_date`` falls within the event's civil-date span.

    An empty ``civil_date`` disables the filter. The span is evaluated as
    given, so an event whose end date precedes its start date matches nothing.
    """
    if not civil_date:
        return True

    start_date, end_date = get_event_date_range(event, time_zone)
    return start_date <= civil_date <= end_date
