from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

EventCategory = Literal["academic", "sports", "social", "career", "wellness"]

EVENT_CATEGORIES: tuple[str, ...] = ("academic", "sports", "social", "career", "wellness")
DEFAULT_CATEGORY: EventCategory = "academic"


class CanonicalEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str | None = None
    start: datetime
    end: datetime
    location: str | None = None
    url: str | None = None
    category: EventCategory = DEFAULT_CATEGORY
    tags: tuple[str, ...] = ()
    lat: float | None = None
    lng: float | None = None

    @property
    def display_end(self) -> datetime:
        # Source data may carry end < start; the record itself is left as-is.
        return self.end if self.end >= self.start else self.start

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None


class EventCluster(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    lat: float | None = None
    lng: float | None = None
    location: str | None = None
    events: tuple[CanonicalEvent, ...] = ()


class EventFeed(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    scraped_at: str | None = Field(default=None, alias="scrapedAt")
    events: list[Any] = Field(default_factory=list)
