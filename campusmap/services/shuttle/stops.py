from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from campusmap.domain.schemas.shuttle import ShuttleRoute, ShuttleStop


@dataclass(frozen=True)
class StopEntry:
    stop: ShuttleStop
    routes: tuple[ShuttleRoute, ...]

    @property
    def route_codes(self) -> list[str]:
        return [route.code for route in self.routes]


def index_stops(routes: Iterable[ShuttleRoute]) -> list[StopEntry]:
    """One entry per stop id, listing each route that serves it once.

    The first occurrence of a stop supplies its details.
    """
    first_seen: dict[str, ShuttleStop] = {}
    serving: dict[str, list[ShuttleRoute]] = {}

    for route in routes:
        for stop in route.stops:
            first_seen.setdefault(stop.id, stop)
            route_list = serving.setdefault(stop.id, [])
            if all(existing.code != route.code for existing in route_list):
                route_list.append(route)

    entries = [StopEntry(stop=stop, routes=tuple(serving[stop_id])) for stop_id, stop in first_seen.items()]
    entries.sort(key=lambda entry: (entry.stop.name, entry.stop.id))
    return entries
