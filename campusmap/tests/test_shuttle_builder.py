import pytest

from campusmap.domain.schemas.shuttle import StopCoordinate
from campusmap.services.shuttle.builder import ShuttleRouteBuildError, build_routes

LOOKUP = {
    "central-library": StopCoordinate(lat=32.7297, lng=-97.1128, name="Central Library"),
    "university-center": {"lat": 32.7312, "lng": -97.1108},
    "college-park-center": {"lat": 32.7305, "lng": -97.1079},
}


def _row(
    code: str,
    sequence: str,
    stop: str,
    *,
    name: str = "Blue Route",
    color: str = "#0064b1",
    label: str = "Weekdays",
    transfer_hub: str = "",
    transfers: str = "",
    times: str = "",
    extra: list[str] | None = None,
) -> list[str]:
    row = [
        code,
        name,
        color,
        label,
        "Mon-Fri",
        "America/Chicago",
        "07:00",
        "19:00",
        sequence,
        stop,
        "",
        "",
        "",
        "",
        transfer_hub,
        transfers,
        "",
        times,
        "",
    ]
    return row + (extra or [])


def test_build_routes_orders_stops_and_routes() -> None:
    rows = [
        _row("RED", "1", "University Center", name="Red Route", color="#c00"),
        _row("BLUE", "3", "College Park Center"),
        _row("BLUE", "1", "Central Library", transfer_hub="Yes", transfers="Red Route | | Green Route"),
        _row("BLUE", "2", "University Center", times="7:00 AM; 7:30 AM;"),
    ]

    routes = build_routes(rows, LOOKUP)

    assert [route.code for route in routes] == ["BLUE", "RED"]
    blue = routes[0]
    assert [stop.sequence for stop in blue.stops] == [1, 2, 3]
    assert blue.service.time_zone == "America/Chicago"
    first = blue.stops[0]
    assert first.id == "central-library"
    assert (first.lat, first.lng) == (32.7297, -97.1128)
    assert first.is_transfer_hub is True
    assert first.transfers_to == ("Red Route", "Green Route")
    assert first.departure_times == ()
    assert first.address is None
    assert blue.stops[1].departure_times == ("7:00 AM", "7:30 AM")
    assert routes[1].stops[0].id == blue.stops[1].id


def test_duplicate_sequences_keep_row_order() -> None:
    rows = [
        _row("BLUE", "2", "College Park Center"),
        _row("BLUE", "1", "University Center"),
        _row("BLUE", "2", "Central Library"),
    ]
    stops = build_routes(rows, LOOKUP)[0].stops
    assert [stop.id for stop in stops] == ["university-center", "college-park-center", "central-library"]


def test_structural_rows_are_skipped() -> None:
    rows = [
        [],
        ["", "", "", "", "", "", "", "", "", "", ""],
        _row("BLUE", "", "Central Library"),
        _row("BLUE", "1", ""),
        _row("BLUE", "1", "Central Library"),
    ]
    routes = build_routes(rows, LOOKUP)
    assert len(routes) == 1
    assert len(routes[0].stops) == 1


def test_short_rows_are_padded() -> None:
    row = _row("BLUE", "1", "Central Library")[:10]
    stop = build_routes([row], LOOKUP)[0].stops[0]
    assert stop.transfers_to == ()
    assert stop.notes is None


def test_metadata_mismatch_names_fields() -> None:
    rows = [
        _row("BLUE", "1", "Central Library"),
        _row("BLUE", "2", "University Center", label="Weekends", color="#fff"),
    ]
    with pytest.raises(ShuttleRouteBuildError) as excinfo:
        build_routes(rows, LOOKUP)
    message = str(excinfo.value)
    assert "BLUE" in message
    assert "service_label" in message
    assert "route_color" in message
    assert "service_days" not in message


def test_invalid_sequence_aborts() -> None:
    with pytest.raises(ShuttleRouteBuildError, match="Invalid stop sequence"):
        build_routes([_row("BLUE", "first", "Central Library")], LOOKUP)


def test_missing_coordinates_lists_known_ids() -> None:
    with pytest.raises(ShuttleRouteBuildError) as excinfo:
        build_routes([_row("BLUE", "1", "Maverick Stadium")], LOOKUP)
    message = str(excinfo.value)
    assert "maverick-stadium" in message
    assert "central-library, college-park-center, university-center" in message


def test_extra_columns_abort() -> None:
    with pytest.raises(ShuttleRouteBuildError, match="unexpected extra columns"):
        build_routes([_row("BLUE", "1", "Central Library", extra=["surprise"])], LOOKUP)


def test_blank_extra_columns_are_tolerated() -> None:
    routes = build_routes([_row("BLUE", "1", "Central Library", extra=["", "  "])], LOOKUP)
    assert len(routes[0].stops) == 1
