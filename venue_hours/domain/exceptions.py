"""Domain semantic exceptions."""


class DomainError(Exception):
    """Base domain exception."""


class PlacePayloadError(DomainError):
    """Raised when a provider payload cannot be mapped onto VenueHours."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"[{source}] {message}")
