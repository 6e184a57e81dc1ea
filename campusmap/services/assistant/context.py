from __future__ import annotations

from datetime import datetime
from typing import Iterable

from campusmap.domain.schemas.event import CanonicalEvent, EventCluster

OUT_OF_SCOPE_REPLY = "I'm sorry, I can only answer questions related to the events provided."


def format_event_snippet(event: CanonicalEvent) -> str:
    tags = ", ".join(event.tags) or "None"
    return (
        f"Title: {event.title}\n"
        f"Start: {event.start.isoformat()}\n"
        f"End: {event.end.isoformat()}\n"
        f"Location: {event.location or 'Unknown location'}\n"
        f"Category: {event.category}\n"
        f"Tags: {tags}\n"
        f"URL: {event.url or 'None'}\n"
        "---"
    )


def build_events_snapshot(
    events: Iterable[CanonicalEvent],
    scraped_at: str | None = None,
) -> str:
    segments = []
    if scraped_at:
        segments.append(f"Events data last updated at {scraped_at}.")
    formatted = "\n".join(format_event_snippet(event) for event in events)
    if formatted:
        segments.append(formatted)
    return "\n".join(segments)


def summarize_clusters(clusters: Iterable[EventCluster]) -> str:
    lines = []
    for cluster in clusters:
        titles = ", ".join(event.title for event in cluster.events)
        noun = "event" if len(cluster.events) == 1 else "events"
        lines.append(f"{cluster.label}: {len(cluster.events)} {noun} ({titles})")
    return "\n".join(lines)


def build_system_prompt(snapshot: str, now: datetime, locations: str = "") -> str:
    friendly_date = now.strftime("%A, %B %d, %Y")
    location_section = f"Events grouped by map location:\n{locations}\n\n" if locations else ""
    return (
        "You are an Event Assistant AI. You must ONLY answer questions based on the event data "
        "provided. If a user asks about anything outside the event data, reply: "
        f'"{OUT_OF_SCOPE_REPLY}" Do not infer or invent information. Always quote or summarize '
        "directly from the provided event data. If the question cannot be answered with the "
        "available data, state that clearly.\n\n"
        f"Today's date is {friendly_date} (ISO {now.isoformat()}). Use this to interpret any "
        "relative date references in the user's question and focus on the appropriate events.\n\n"
        f"{location_section}"
        f"Here is the complete list of events you can reference:\n{snapshot}"
    )
