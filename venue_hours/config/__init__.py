"""Runtime configuration helpers."""

from venue_hours.config.settings import ServiceSettings, load_settings

__all__ = ["ServiceSettings", "load_settings"]
