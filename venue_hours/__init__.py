"""Open-now evaluation for places opening hours."""

__version__ = "1.0.0"
