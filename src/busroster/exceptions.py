"""Library exceptions."""


class BusRosterError(Exception):
    """Base exception for the library."""


class NetworkError(BusRosterError):
    """Raised when network communication fails."""


class ValidationError(BusRosterError):
    """Raised when inputs fail validation."""


class ApiError(BusRosterError):
    """Raised when the bus API returns an error or an unusable response."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
