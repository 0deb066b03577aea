"""
Exceptions for the Shyft SDK.

Every error raised by a client operation derives from ShyftError, so callers
can catch the whole family with one except clause.
"""
from typing import Optional


class ShyftError(Exception):
    """Base exception for all Shyft SDK errors."""
    pass


class ConfigError(ShyftError):
    """Raised when the client cannot be constructed from its configuration."""
    pass


class TransportError(ShyftError):
    """Raised when a request never produced a response (DNS, TLS, timeout, reset)."""
    pass


class StatusError(ShyftError):
    """
    Raised when the final response has a non-2xx status.

    The raw response body is attached verbatim so callers can inspect
    whatever the API reported.
    """

    def __init__(self, status_code: int, body: str, message: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"Request failed with status {status_code}: {body}")


class UnsuccessfulResponseError(StatusError):
    """Raised when a 2xx response carries an envelope with success=false."""

    def __init__(self, status_code: int, body: str, api_message: str):
        self.api_message = api_message
        super().__init__(
            status_code,
            body,
            message=f"API reported failure (status {status_code}): {api_message}",
        )


class DecodeError(ShyftError):
    """Raised when a response body does not match the expected JSON shape."""

    def __init__(self, message: str, body: str = ""):
        self.body = body
        super().__init__(message)
