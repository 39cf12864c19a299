"""Great-circle distance for radius filtering."""

from __future__ import annotations

import math

EARTH_RADIUS_KM = 6371.0


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(dlon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def within_radius(distance_km: float, radius_m: float) -> bool:
    return distance_km <= radius_m / 1000.0


__all__ = ["EARTH_RADIUS_KM", "haversine", "within_radius"]
