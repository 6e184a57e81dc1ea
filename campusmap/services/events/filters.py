from __future__ import annotations

from typing import Iterable

from campusmap.domain.schemas.event import CanonicalEvent
from campusmap.services.events.calendar_window import event_occurs_on_date


def _matches_search(event: CanonicalEvent, needle: str) -> bool:
    if not needle:
        return True
    haystacks = [event.title, event.description or "", event.location or "", *event.tags]
    return any(needle in text.lower() for text in haystacks)


def filter_events(
    events: Iterable[CanonicalEvent],
    *,
    search: str = "",
    civil_date: str | None = None,
    location: str | None = None,
    tag: str | None = None,
    time_zone: str | None = None,
) -> list[CanonicalEvent]:
    """Apply the events-panel filters, keeping the input order.

    ``location`` and ``tag`` compare case-insensitively against the whole
    value; ``search`` is a substring match over title, description, location
    and tags.
    """
    needle = search.strip().lower()
    wanted_location = location.strip().lower() if location else None
    wanted_tag = tag.strip().lower() if tag else None

    matched: list[CanonicalEvent] = []
    for event in events:
        if not _matches_search(event, needle):
            continue
        if not event_occurs_on_date(event, civil_date, time_zone):
            continue
        if wanted_location and (event.location or "").strip().lower() != wanted_location:
            continue
        if wanted_tag and not any(t.lower() == wanted_tag for t in event.tags):
            continue
        matched.append(event)
    return matched


def _unique_case_insensitive(values: Iterable[str]) -> list[str]:
    seen: dict[str, str] = {}
    for value in values:
        trimmed = value.strip()
        if trimmed:
            seen.setdefault(trimmed.lower(), trimmed)
    return sorted(seen.values())


def unique_locations(events: Iterable[CanonicalEvent]) -> list[str]:
    return _unique_case_insensitive(e.location for e in events if e.location)


def unique_tags(events: Iterable[CanonicalEvent]) -> list[str]:
    return _unique_case_insensitive(tag for e in events for tag in e.tags)
