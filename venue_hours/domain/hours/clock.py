"""Venue-local wall clock from provider-supplied UTC offsets.

No timezone lookup happens here: callers pass the offsets a provider already
returned (Places ``utc_offset_minutes`` or Time Zone API ``rawOffset`` +
``dstOffset``).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional


def _as_naive_utc(utc_now: datetime) -> datetime:
    if utc_now.tzinfo is not None:
        utc_now = utc_now.astimezone(timezone.utc)
    return utc_now.replace(tzinfo=None)


def local_time_from_offsets(
    utc_now: datetime,
    raw_offset_seconds: int,
    dst_offset_seconds: int = 0,
) -> datetime:
    total = int(raw_offset_seconds) + int(dst_offset_seconds)
    return _as_naive_utc(utc_now) + timedelta(seconds=total)


def local_time_for_offset(utc_now: datetime, utc_offset_minutes: Optional[int]) -> datetime:
    if utc_offset_minutes is None:
        return _as_naive_utc(utc_now)
    return _as_naive_utc(utc_now) + timedelta(minutes=int(utc_offset_minutes))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


__all__ = ["local_time_for_offset", "local_time_from_offsets", "utc_now"]
