from campusmap.domain.schemas.shuttle import ShuttleRoute, ShuttleService, ShuttleStop
from campusmap.services.shuttle.stops import index_stops

SERVICE = ShuttleService(label="Weekdays", days="Mon-Fri", time_zone="America/Chicago", start="07:00", end="19:00")


def _stop(stop_id: str, name: str, sequence: int) -> ShuttleStop:
    return ShuttleStop(id=stop_id, name=name, sequence=sequence, lat=32.7, lng=-97.1)


def test_index_stops_merges_shared_stops() -> None:
    blue = ShuttleRoute(
        code="BLUE",
        name="Blue",
        color="#00f",
        service=SERVICE,
        stops=(_stop("uc", "University Center", 1), _stop("lib", "Central Library", 2), _stop("uc", "University Center", 3)),
    )
    red = ShuttleRoute(code="RED", name="Red", color="#f00", service=SERVICE, stops=(_stop("uc", "University Center", 1),))

    entries = index_stops([blue, red])

    assert [entry.stop.id for entry in entries] == ["lib", "uc"]
    assert entries[0].route_codes == ["BLUE"]
    assert entries[1].route_codes == ["BLUE", "RED"]
