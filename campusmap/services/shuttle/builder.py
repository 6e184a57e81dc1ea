from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

from campusmap.core.text import clean_string, normalize_stop_id, parse_boolean, parse_delimited
from campusmap.domain.schemas.shuttle import ShuttleRoute, ShuttleService, ShuttleStop, StopCoordinate

logger = logging.getLogger(__name__)

COLUMNS = [
    "route_code",
    "route_name",
    "route_color",
    "service_label",
    "service_days",
    "service_tz",
    "service_start",
    "service_end",
    "stop_sequence",
    "stop_name",
    "stop_address",
    "reserved",
    "legacy_lat",
    "legacy_lng",
    "is_transfer_hub",
    "transfers_to",
    "departure_pattern",
    "departure_times",
    "notes",
]
MIN_HEADER_WIDTH = 18

# Fields that must agree across every row of a route, in reporting order.
ROUTE_METADATA_FIELDS = [
    "route_name",
    "route_color",
    "service_label",
    "service_days",
    "service_tz",
    "service_start",
    "service_end",
]


class ShuttleRouteBuildError(ValueError):
    pass


@dataclass
class _RouteAccumulator:
    code: str
    metadata: dict[str, str]
    stops: list[ShuttleStop] = field(default_factory=list)

    def mismatched_fields(self, row: Mapping[str, str]) -> list[str]:
        return [name for name in ROUTE_METADATA_FIELDS if self.metadata[name] != row[name]]

    def build(self) -> ShuttleRoute:
        return ShuttleRoute(
            code=self.code,
            name=self.metadata["route_name"],
            color=self.metadata["route_color"],
            service=ShuttleService(
                label=self.metadata["service_label"],
                days=self.metadata["service_days"],
                time_zone=self.metadata["service_tz"],
                start=self.metadata["service_start"],
                end=self.metadata["service_end"],
            ),
            stops=tuple(sorted(self.stops, key=lambda stop: stop.sequence)),
        )


def _as_record(row: Sequence[Any]) -> tuple[dict[str, str], list[str]]:
    values = ["" if value is None else str(value) for value in row]
    values.extend([""] * (len(COLUMNS) - len(values)))
    return dict(zip(COLUMNS, values)), values[len(COLUMNS):]


def _as_coordinate(value: StopCoordinate | Mapping[str, Any]) -> StopCoordinate:
    if isinstance(value, StopCoordinate):
        return value
    return StopCoordinate.model_validate(value)


def _parse_sequence(record: Mapping[str, str]) -> int:
    raw = record["stop_sequence"]
    try:
        return int(raw.strip())
    except ValueError:
        raise ShuttleRouteBuildError(
            f'Invalid stop sequence "{raw}" for stop "{record["stop_name"]}".'
        ) from None


def _lookup_coordinates(
    record: Mapping[str, str],
    stop_id: str,
    stop_lookup: Mapping[str, StopCoordinate | Mapping[str, Any]],
) -> StopCoordinate:
    coords = stop_lookup.get(stop_id)
    if coords is None:
        available = ", ".join(sorted(stop_lookup))
        raise ShuttleRouteBuildError(
            f'Missing coordinates for stop "{record["stop_name"]}" (normalized id: "{stop_id}").\n'
            f"Available stop ids: {available}"
        )
    return _as_coordinate(coords)


def build_routes(
    rows: Sequence[Sequence[Any]],
    stop_lookup: Mapping[str, StopCoordinate | Mapping[str, Any]],
) -> list[ShuttleRoute]:
    """Merge per-stop rows into routes.

    ``rows`` excludes the header. Rows lacking any of route code, name, color,
    stop name or sequence are skipped; every other inconsistency aborts the
    build with ``ShuttleRouteBuildError``.
    """
    routes: dict[str, _RouteAccumulator] = {}
    skipped = 0

    for row in rows:
        if not row:
            continue

        record, extra = _as_record(row)
        if any(clean_string(value) for value in extra):
            raise ShuttleRouteBuildError(
                f'Encountered unexpected extra columns in CSV row for stop "{record["stop_name"]}".'
            )

        required = ("route_code", "route_name", "route_color", "stop_name", "stop_sequence")
        if not all(record[name] for name in required):
            skipped += 1
            continue

        sequence = _parse_sequence(record)
        stop_id = normalize_stop_id(record["stop_name"])
        coords = _lookup_coordinates(record, stop_id, stop_lookup)

        code = record["route_code"]
        route = routes.get(code)
        if route is None:
            route = routes[code] = _RouteAccumulator(
                code=code,
                metadata={name: record[name] for name in ROUTE_METADATA_FIELDS},
            )
        else:
            mismatched = route.mismatched_fields(record)
            if mismatched:
                raise ShuttleRouteBuildError(
                    f"Route metadata mismatch for {code}: {', '.join(mismatched)}."
                )

        route.stops.append(
            ShuttleStop(
                id=stop_id,
                name=record["stop_name"],
                sequence=sequence,
                lat=coords.lat,
                lng=coords.lng,
                address=clean_string(record["stop_address"]),
                is_transfer_hub=parse_boolean(record["is_transfer_hub"]),
                transfers_to=parse_delimited(record["transfers_to"], "|"),
                departure_pattern=clean_string(record["departure_pattern"]),
                departure_times=parse_delimited(record["departure_times"], ";"),
                notes=clean_string(record["notes"]),
            )
        )

    if skipped:
        logger.debug("Skipped %s structural rows", skipped)

    return [routes[code].build() for code in sorted(routes)]


def read_routes_csv(path: str | Path) -> list[list[str]]:
    with Path(path).open(newline="", encoding="utf-8") as handle:
        rows = [row for row in csv.reader(handle) if any(cell.strip() for cell in row)]

    if not rows or len(rows[0]) < MIN_HEADER_WIDTH:
        raise ShuttleRouteBuildError("Unexpected shuttle routes CSV header shape.")
    return rows[1:]


def load_stop_lookup(path: str | Path) -> dict[str, StopCoordinate]:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ShuttleRouteBuildError(f"Stop lookup {path} must be a JSON object keyed by stop id.")
    return {key: StopCoordinate.model_validate(value) for key, value in raw.items()}
