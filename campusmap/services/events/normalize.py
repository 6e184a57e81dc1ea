from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Iterable
from zoneinfo import ZoneInfo

from campusmap.core.text import clean_string, clean_string_list
from campusmap.domain.schemas.event import (
    DEFAULT_CATEGORY,
    EVENT_CATEGORIES,
    CanonicalEvent,
    EventFeed,
)
from campusmap.services.events.calendar_window import get_campus_time_zone

logger = logging.getLogger(__name__)

RawEvent = dict[str, Any]

CATEGORY_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    ("sports", ("sport", "athlet", "game", "intramural")),
    ("career", ("career", "job", "intern", "recruit", "employment", "network")),
    ("wellness", ("wellness", "health", "fitness", "counsel", "therapy", "mindful")),
    (
        "social",
        (
            "social",
            "student life",
            "student affairs",
            "community",
            "arts",
            "culture",
            "entertainment",
            "celebration",
        ),
    ),
]


def normalize_events(raw_records: Iterable[Any]) -> list[CanonicalEvent]:
    tz = ZoneInfo(get_campus_time_zone())
    cleaned: list[CanonicalEvent] = []
    dropped = 0

    for item in raw_records:
        event = _to_canonical_event(item, tz)
        if event is None:
            dropped += 1
            continue
        cleaned.append(event)

    if dropped:
        logger.debug("Dropped %s malformed event records", dropped)

    cleaned.sort(key=lambda event: event.start)
    return cleaned


def parse_event_feed(payload: Any) -> EventFeed:
    if isinstance(payload, list):
        return EventFeed(events=payload)
    if not isinstance(payload, dict):
        return EventFeed()

    scraped_at = payload.get("scrapedAt")
    events = payload.get("events")
    return EventFeed(
        scraped_at=scraped_at if isinstance(scraped_at, str) and scraped_at else None,
        events=events if isinstance(events, list) else [],
    )


def infer_category(tags: Iterable[str] | None) -> str:
    normalized = [tag.lower() for tag in tags or [] if isinstance(tag, str)]
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in tag for tag in normalized for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def _to_canonical_event(item: Any, tz: ZoneInfo) -> CanonicalEvent | None:
    if not isinstance(item, dict):
        return None

    title = clean_string(item.get("title"))
    if not title:
        logger.debug("Skipping event without title: %r", item.get("id"))
        return None

    start = _parse_datetime(item.get("start"), tz)
    if start is None:
        logger.debug("Skipping event %r with unparseable start", title)
        return None
    end = _parse_datetime(item.get("end"), tz) or start

    url = clean_string(item.get("url"))
    event_id = _as_id(item.get("id")) or url
    if not event_id:
        logger.debug("Skipping event %r without id or url", title)
        return None

    return CanonicalEvent(
        id=event_id,
        title=title,
        description=clean_string(item.get("description")),
        start=start,
        end=end,
        location=clean_string(item.get("location")),
        url=url,
        category=_as_category(item.get("category")),
        tags=clean_string_list(item.get("tags")),
        lat=_as_coordinate(item.get("lat")),
        lng=_as_coordinate(item.get("lng")),
    )


def _as_id(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        try:
            return str(value)
        except ValueError:
            return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return str(int(value)) if value.is_integer() else str(value)
    return clean_string(value)


def _as_category(value: Any) -> str:
    if isinstance(value, str):
        candidate = value.strip().lower()
        if candidate in EVENT_CATEGORIES:
            return candidate
    return DEFAULT_CATEGORY


def _as_coordinate(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        coordinate = float(value)
    except OverflowError:
        return None
    return coordinate if math.isfinite(coordinate) else None


def _parse_datetime(value: Any, tz: ZoneInfo) -> datetime | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)

    return parsed
