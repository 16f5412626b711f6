"""Exception hierarchy for calendar operations."""


class CalendarError(Exception):
    """Base exception for calendar operations."""

    pass


class StoreError(CalendarError):
    """Event store call failed (network or backend error)."""

    pass


class ValidationError(CalendarError):
    """Malformed event, date-key or move intent."""

    pass


class AuthRequiredError(CalendarError):
    """Write attempted without an authenticated user."""

    def __init__(self, message: str = "Sign in required to modify events"):
        super().__init__(message)


class UnsupportedFormatError(CalendarError):
    """Export format not supported."""

    pass


class ExportError(CalendarError):
    """Error during calendar export."""

    pass
