"""Pydantic domain models."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from venue_hours.domain.enums import BusinessStatus


@dataclass(frozen=True)
class TimeRange:
    open_minutes: int
    close_minutes: int
    opens_at: str
    closes_at: str
    close_period: str

    @property
    def is_overnight(self) -> bool:
        return self.close_minutes < self.open_minutes

    def contains(self, minutes: int) -> bool:
        if self.is_overnight:
            return minutes >= self.open_minutes or minutes <= self.close_minutes
        return self.open_minutes <= minutes <= self.close_minutes


class CurrentPeriod(BaseModel):
    day: str
    hours: str
    is_overnight_period: bool = False
    closes_at: Optional[str] = None


class RealTimeStatus(BaseModel):
    is_open: bool
    current_period: Optional[CurrentPeriod] = None
    message: str = Field(min_length=1)


class VenueHours(BaseModel):
    """Provider-neutral view of one venue's opening hours."""

    place_id: str
    name: str = ""
    weekday_descriptions: list[str] = Field(default_factory=list)
    open_now: Optional[bool] = None
    business_status: BusinessStatus = BusinessStatus.UNKNOWN
    lat: Optional[float] = None
    lon: Optional[float] = None
    utc_offset_minutes: Optional[int] = None
    source: str = ""

    @field_validator("weekday_descriptions", mode="before")
    @classmethod
    def _keep_text_entries(cls, value: object) -> list[str]:
        if not isinstance(value, (list, tuple)):
            return []
        return [item for item in value if isinstance(item, str)]

    @property
    def has_location(self) -> bool:
        return self.lat is not None and self.lon is not None


class GeoPoint(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class VenueAvailability(BaseModel):
    venue: VenueHours
    local_time: dt.datetime
    status: RealTimeStatus
    distance_km: Optional[float] = None
