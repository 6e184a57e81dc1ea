from pydantic import BaseModel, ConfigDict


class Building(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    code: str
    lat: float
    lng: float
    tags: tuple[str, ...] = ()
    description: str | None = None
