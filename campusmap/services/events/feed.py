from __future__ import annotations

import json
import logging
from pathlib import Path

from campusmap.domain.schemas.event import CanonicalEvent, EventFeed
from campusmap.services.events.normalize import normalize_events, parse_event_feed

logger = logging.getLogger(__name__)


def load_event_feed(path: str | Path) -> EventFeed:
    feed_path = Path(path)
    try:
        raw = feed_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("Events snapshot not found at %s; using empty feed", feed_path)
        return EventFeed()

    return parse_event_feed(json.loads(raw))


def load_canonical_events(path: str | Path) -> tuple[EventFeed, list[CanonicalEvent]]:
    feed = load_event_feed(path)
    events = normalize_events(feed.events)
    logger.info(
        "Loaded %s of %s events from %s (scrapedAt=%s)",
        len(events),
        len(feed.events),
        path,
        feed.scraped_at,
    )
    return feed, events
