"""API request/response models."""

from __future__ import annotations

import datetime as dt
from typing import Any, Optional

from pydantic import BaseModel, Field

from venue_hours.domain.enums import PlacesApiVersion
from venue_hours.domain.models import GeoPoint, RealTimeStatus, VenueAvailability


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = ""


class HoursStatusRequest(BaseModel):
    weekday_descriptions: list[str] = Field(
        default_factory=list,
        max_length=14,
        description="Provider weekday descriptions, e.g. 'Monday: 9:00 AM – 5:00 PM'",
    )
    now: dt.datetime = Field(description="Venue-local wall-clock time")
    open_now: Optional[bool] = Field(default=None, description="Provider open-now hint, used as fallback")


HoursStatusResponse = RealTimeStatus


class OpenVenuesRequest(BaseModel):
    venues: list[Any] = Field(
        default_factory=list,
        max_length=100,
        description="Raw places payloads; entries that are not place objects are skipped",
    )
    api_version: Optional[PlacesApiVersion] = Field(default=None, description="Payload generation: v1 / legacy")
    now_utc: Optional[dt.datetime] = Field(default=None, description="Evaluation instant; defaults to now")
    origin: Optional[GeoPoint] = None
    radius_m: Optional[int] = Field(default=None, ge=1, le=50000)


class OpenVenuesResponse(BaseModel):
    venues: list[VenueAvailability] = Field(default_factory=list)
    count: int = 0
    message: str = ""
