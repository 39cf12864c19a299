"""Domain package exports."""

from venue_hours.domain.enums import BusinessStatus, PlacesApiVersion, Weekday
from venue_hours.domain.exceptions import DomainError, PlacePayloadError
from venue_hours.domain.models import (
    CurrentPeriod,
    GeoPoint,
    RealTimeStatus,
    TimeRange,
    VenueAvailability,
    VenueHours,
)

__all__ = [
    "BusinessStatus",
    "CurrentPeriod",
    "DomainError",
    "GeoPoint",
    "PlacePayloadError",
    "PlacesApiVersion",
    "RealTimeStatus",
    "TimeRange",
    "VenueAvailability",
    "VenueHours",
    "Weekday",
]
