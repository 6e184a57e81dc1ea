from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from campusmap.core.text import normalize_for_search
from campusmap.domain.schemas.building import Building
from campusmap.domain.schemas.event import CanonicalEvent, EventCluster

logger = logging.getLogger(__name__)

COORDINATE_PRECISION = 6


@dataclass(frozen=True)
class ResolvedLocation:
    label: str
    lat: float | None = None
    lng: float | None = None
    building_id: str | None = None
    location: str | None = None

    @property
    def has_position(self) -> bool:
        return self.lat is not None and self.lng is not None


def coordinate_key(lat: float, lng: float) -> str:
    return f"{lat:.{COORDINATE_PRECISION}f},{lng:.{COORDINATE_PRECISION}f}"


def build_group_key(resolved: ResolvedLocation) -> str | None:
    if resolved.building_id:
        return f"building:{resolved.building_id}"
    if resolved.has_position:
        return f"coords:{coordinate_key(resolved.lat, resolved.lng)}"
    if resolved.location:
        normalized = normalize_for_search(resolved.location)
        if normalized:
            return f"location:{normalized}"
    return None


def match_building(location: str, buildings: Sequence[Building]) -> Building | None:
    """Return the first directory entry that the free-text ``location`` names.

    A building matches when its name is contained in the text, its code
    appears as a whole token, or one of its alias tags is contained in the
    text. Directory order decides between several matches.
    """
    normalized_location = normalize_for_search(location)
    if not normalized_location:
        return None
    tokens = set(normalized_location.split())

    for building in buildings:
        normalized_name = normalize_for_search(building.name)
        if normalized_name and normalized_name in normalized_location:
            return building

        normalized_code = normalize_for_search(building.code)
        if normalized_code and normalized_code in tokens:
            return building

        for tag in building.tags:
            normalized_tag = normalize_for_search(tag)
            if normalized_tag and normalized_tag in normalized_location:
                return building

    return None


def resolve_event_location(
    event: CanonicalEvent,
    buildings: Sequence[Building],
) -> ResolvedLocation | None:
    if event.has_coordinates:
        return ResolvedLocation(
            label=event.location or event.title,
            lat=event.lat,
            lng=event.lng,
            location=event.location,
        )

    if not event.location:
        return None

    building = match_building(event.location, buildings)
    if building is None:
        return None

    return ResolvedLocation(
        label=building.name,
        lat=building.lat,
        lng=building.lng,
        building_id=building.id,
        location=event.location,
    )


class _ClusterBuilder:
    def __init__(self, key: str, resolved: ResolvedLocation) -> None:
        self.key = key
        self.resolved = resolved
        self.events: list[CanonicalEvent] = []

    def add(self, event: CanonicalEvent) -> None:
        self.events.append(event)
        self.events.sort(key=lambda item: item.start)

    def build(self) -> EventCluster:
        return EventCluster(
            key=self.key,
            label=self.resolved.label,
            lat=self.resolved.lat,
            lng=self.resolved.lng,
            location=self.resolved.location,
            events=tuple(self.events),
        )


def _collect(pairs: Iterable[tuple[CanonicalEvent, ResolvedLocation | None]]) -> list[EventCluster]:
    groups: dict[str, _ClusterBuilder] = {}
    for event, resolved in pairs:
        if resolved is None:
            continue
        key = build_group_key(resolved)
        if key is None:
            continue
        group = groups.get(key)
        if group is None:
            group = groups[key] = _ClusterBuilder(key, resolved)
        group.add(event)

    clusters = [group.build() for group in groups.values()]
    clusters.sort(key=lambda cluster: (cluster.label, cluster.key))
    return clusters


def aggregate_by_location(
    events: Iterable[CanonicalEvent],
    buildings: Sequence[Building],
) -> list[EventCluster]:
    directory = tuple(buildings)
    pairs = [(event, resolve_event_location(event, directory)) for event in events]
    unresolved = sum(1 for _, resolved in pairs if resolved is None)
    if unresolved:
        logger.debug("%s events could not be placed on the map", unresolved)
    return _collect(pairs)


def group_by_exact_location(events: Iterable[CanonicalEvent]) -> list[EventCluster]:
    return _collect(
        (event, resolve_event_location(event, ()) if event.has_coordinates else None)
        for event in events
    )
