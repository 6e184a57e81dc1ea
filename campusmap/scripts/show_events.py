from __future__ import annotations

import argparse

from campusmap.config import settings
from campusmap.core.env import load_env
from campusmap.domain.schemas.building import Building
from campusmap.logging import configure_logging
from campusmap.services.events.calendar_window import get_current_campus_date
from campusmap.services.events.feed import load_canonical_events
from campusmap.services.events.filters import filter_events
from campusmap.services.geo.aggregate import aggregate_by_location
from campusmap.services.geo.directory import load_building_directory


def describe_events_on(
    events_path: str,
    civil_date: str,
    buildings: list[Building],
    search: str = "",
) -> list[str]:
    feed, events = load_canonical_events(events_path)
    matching = filter_events(events, search=search, civil_date=civil_date)
    clusters = aggregate_by_location(matching, buildings)

    lines = [f"{len(matching)} events on {civil_date or 'any date'} (scrapedAt={feed.scraped_at})"]
    for cluster in clusters:
        lines.append(f"{cluster.label} [{cluster.lat:.6f}, {cluster.lng:.6f}]")
        for event in cluster.events:
            lines.append(f"  - {event.start.isoformat()} {event.title} ({event.category})")
    return lines


def main() -> None:
    load_env()
    configure_logging()

    parser = argparse.ArgumentParser(description="Print event map clusters for a campus date.")
    parser.add_argument("--events", default=settings.EVENTS_PATH, help="Events snapshot JSON")
    parser.add_argument("--buildings", help="Building directory JSON")
    parser.add_argument("--date", default=None, help="YYYY-MM-DD; defaults to today on campus")
    parser.add_argument("--all", action="store_true", help="Ignore the date filter")
    parser.add_argument("--search", default="", help="Free-text search")
    args = parser.parse_args()

    civil_date = "" if args.all else (args.date or get_current_campus_date())
    buildings = load_building_directory(args.buildings) if args.buildings else []

    for line in describe_events_on(args.events, civil_date, buildings, search=args.search):
        print(line)


if __name__ == "__main__":
    main()
