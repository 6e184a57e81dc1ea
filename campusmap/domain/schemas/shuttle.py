from pydantic import BaseModel, ConfigDict


class StopCoordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float
    name: str | None = None


class ShuttleStop(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    sequence: int
    lat: float
    lng: float
    address: str | None = None
    is_transfer_hub: bool = False
    transfers_to: tuple[str, ...] = ()
    departure_pattern: str | None = None
    departure_times: tuple[str, ...] = ()
    notes: str | None = None


class ShuttleService(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    days: str
    time_zone: str
    start: str
    end: str


class ShuttleRoute(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    color: str
    service: ShuttleService
    stops: tuple[ShuttleStop, ...] = ()
