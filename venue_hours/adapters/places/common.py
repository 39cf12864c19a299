"""Coercion helpers shared by the places payload adapters.

Providers return ``[]`` or ``None`` for empty fields in places where a string
or number is expected; everything here normalises those instead of raising.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from venue_hours.domain.enums import BusinessStatus


def safe_str(val: object, default: str = "") -> str:
    if isinstance(val, str):
        return val
    if val is None or (isinstance(val, (list, dict)) and len(val) == 0):
        return default
    return str(val)


def safe_float(val: object) -> Optional[float]:
    if isinstance(val, bool) or val is None:
        return None
    try:
        number = float(val)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    # JSON allows 1e400, which parses to inf.
    return number if math.isfinite(number) else None


def safe_int(val: object) -> Optional[int]:
    number = safe_float(val)
    if number is None:
        return None
    return int(number)


def safe_bool(val: object) -> Optional[bool]:
    if isinstance(val, bool):
        return val
    return None


def safe_dict(val: object) -> dict[str, Any]:
    return val if isinstance(val, dict) else {}


def text_list(val: object) -> list[str]:
    if not isinstance(val, list):
        return []
    return [item for item in val if isinstance(item, str)]


def business_status(val: object) -> BusinessStatus:
    raw = safe_str(val).strip().upper()
    try:
        return BusinessStatus(raw)
    except ValueError:
        return BusinessStatus.UNKNOWN


__all__ = [
    "business_status",
    "safe_bool",
    "safe_dict",
    "safe_float",
    "safe_int",
    "safe_str",
    "text_list",
]
