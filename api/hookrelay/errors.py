"""Error types raised while relaying an event."""

from typing import Optional


class RelayError(Exception):
    """Base class for relay errors."""


class MalformedEvent(RelayError):
    """The inbound event is missing a required field or cannot be parsed.

    Never retryable: sending the same payload again fails the same way.
    """


class DispatchFailure(RelayError):
    """The destination was unreachable or rejected the outbound request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DestinationNotConfigured(RelayError):
    """A route was hit whose destination has no credentials/URL configured."""
