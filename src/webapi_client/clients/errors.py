"""Errors raised by WebAPIClient.

Every error carries a `transient` flag. Transport failures are transient; a bad
URL, an undecodable body or a missing strict key path are terminal. The retry
loop only consults the flag when asked to (see `WebAPIClient.fetch`).
"""

from typing import Any, Optional


class WebAPIClientError(Exception):
    """Base class for client errors."""

    transient = False


class UnsupportedURLError(WebAPIClientError):
    """Raised when a resource path and base URL don't form a valid absolute URL."""

    def __init__(self, url: str, reason: Optional[str] = None):
        message = f"Unsupported URL: {url!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.url = url


class TransportError(WebAPIClientError):
    """Raised when the transport fails to produce a response."""

    transient = True

    def __init__(self, message: str, method: Optional[str] = None, url: Optional[str] = None):
        super().__init__(message)
        self.method = method
        self.url = url


class DecodingError(WebAPIClientError):
    """Raised when a response body can't be decoded into the requested type."""

    def __init__(self, message: str, value_type: Any = None):
        super().__init__(message)
        self.value_type = value_type


class KeyPathError(WebAPIClientError):
    """Raised when a strict key path is not present in the response."""

    def __init__(self, key_path: str):
        super().__init__(f"Key path {key_path!r} not found in response")
        self.key_path = key_path


def is_transient(error: BaseException) -> bool:
    return bool(getattr(error, "transient", False))
