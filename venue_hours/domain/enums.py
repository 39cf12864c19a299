"""Domain enums."""

from enum import Enum


class Weekday(int, Enum):
    """Monday-indexed weekday, matching ``datetime.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @property
    def previous(self) -> "Weekday":
        return Weekday((self.value - 1) % 7)


class BusinessStatus(str, Enum):
    OPERATIONAL = "OPERATIONAL"
    CLOSED_TEMPORARILY = "CLOSED_TEMPORARILY"
    CLOSED_PERMANENTLY = "CLOSED_PERMANENTLY"
    UNKNOWN = "UNKNOWN"


class PlacesApiVersion(str, Enum):
    LEGACY = "legacy"
    V1 = "v1"
