from __future__ import annotations


class VscnixError(Exception):
    """Base class for all vscnix domain errors."""


class ProcessInvocationError(RuntimeError, VscnixError):
    """Raised when the VS Code CLI cannot list installed extensions."""


class NetworkError(ConnectionError, VscnixError):
    """Raised when a marketplace request fails at the transport level."""


class RateLimitHeaderError(ValueError, VscnixError):
    """Raised when a 429 response carries no usable Retry-After header."""


class HTTPStatusError(RuntimeError, VscnixError):
    """Raised for any non-retryable, non-success HTTP response."""

    def __init__(self, status: str, url: str = "") -> None:
        super().__init__(status)
        self.status = status
        self.url = url


class ParseError(ValueError, VscnixError):
    """Raised when extension metadata cannot be extracted from a page."""


class HashStreamError(OSError, VscnixError):
    """Raised when reading an artifact stream fails while hashing it."""
