"""Exceptions raised by dlp-redact.

Transport, authentication and remote-rejection errors are the Google client
library's own exceptions and are never wrapped.
"""


class DlpRedactError(Exception):
    """Base class for errors raised by this package."""


class ConfigError(DlpRedactError):
    """Settings are missing or invalid.  Raised before any remote call."""


class UnexpectedResponseError(DlpRedactError):
    """The service returned a different number of items than was sent."""

    def __init__(self, expected: int, received: int) -> None:
        super().__init__(f"expected {expected} redacted item(s), received {received}")
        self.expected = expected
        self.received = received
