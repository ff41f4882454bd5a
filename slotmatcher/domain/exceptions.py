"""
Domain-specific exception hierarchy for the slot matcher application.
"""


class SlotMatcherError(Exception):
    """Base class for all application-level errors."""


class InvalidRequestError(SlotMatcherError):
    """Raised when a match request is missing data or has the wrong shape."""

    def __init__(self, error: str, message: str | None = None):
        super().__init__(error if message is None else f"{error}: {message}")
        self.error = error
        self.message = message


class InvalidBookingTimeError(InvalidRequestError):
    """Raised when no time-of-day can be extracted from the booking timestamp."""


class ConfigurationError(SlotMatcherError):
    """Raised when the configuration file cannot be read or validated."""
