"""
Domain exceptions - Semantic error types for the waitlist.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""


class WaitlistError(Exception):
    """Base class for waitlist domain errors."""

    pass


class InvalidEmail(WaitlistError):
    """Email is missing or does not look like local@domain."""

    def __init__(self, message: str = "Invalid email format") -> None:
        super().__init__(message)
        self.message = message


class SoldOut(WaitlistError):
    """Every unit of the campaign has already been reserved."""

    pass


class StoreUnavailable(WaitlistError):
    """The order store could not be read or written."""

    pass
