"""Legacy Places (Place Details / Nearby Search) payload adapter.

Shape::

    {"place_id": "...", "name": "...", "business_status": "OPERATIONAL",
     "opening_hours": {"open_now": true, "weekday_text": ["Monday: ..."]},
     "geometry": {"location": {"lat": 0.0, "lng": 0.0}},
     "utc_offset_minutes": 600}

Place Details responses wrap this in ``{"result": {...}}``; both are accepted.
"""

from __future__ import annotations

from typing import Any

from venue_hours.adapters.places.common import (
    business_status,
    safe_bool,
    safe_dict,
    safe_float,
    safe_int,
    safe_str,
    text_list,
)
from venue_hours.domain.enums import PlacesApiVersion
from venue_hours.domain.exceptions import PlacePayloadError
from venue_hours.domain.models import VenueHours

_SOURCE = PlacesApiVersion.LEGACY.value


def _unwrap(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise PlacePayloadError(_SOURCE, f"expected an object, got {type(payload).__name__}")
    result = payload.get("result")
    if isinstance(result, dict):
        return result
    return payload


def to_venue_hours(payload: Any) -> VenueHours:
    raw = _unwrap(payload)
    place_id = safe_str(raw.get("place_id")).strip()
    if not place_id:
        raise PlacePayloadError(_SOURCE, "missing place_id")

    opening_hours = safe_dict(raw.get("opening_hours"))
    location = safe_dict(safe_dict(raw.get("geometry")).get("location"))
    offset = raw.get("utc_offset_minutes", raw.get("utc_offset"))

    return VenueHours(
        place_id=place_id,
        name=safe_str(raw.get("name")),
        weekday_descriptions=text_list(opening_hours.get("weekday_text")),
        open_now=safe_bool(opening_hours.get("open_now")),
        business_status=business_status(raw.get("business_status")),
        lat=safe_float(location.get("lat")),
        lon=safe_float(location.get("lng")),
        utc_offset_minutes=safe_int(offset),
        source=_SOURCE,
    )


__all__ = ["to_venue_hours"]
