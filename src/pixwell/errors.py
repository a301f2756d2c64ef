"""Error types raised by the Pixwell client.

Every error carries a ``kind`` discriminant so callers can branch on it
without relying on class identity:

    try:
        await client.screenshot("https://example.com")
    except PixwellError as e:
        match e.kind:
            case ErrorKind.RATE_LIMIT:
                await asyncio.sleep(e.retry_after or 1)
            case ErrorKind.NETWORK:
                ...
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Discriminant for PixwellError variants."""

    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    VALIDATION = "validation"
    CAPTURE = "capture"
    NETWORK = "network"
    OTHER = "other"


class PixwellError(Exception):
    """Base error for all Pixwell failures.

    Also raised as-is for HTTP statuses without a dedicated error type, with
    the code decoded from the error body (or ``UNKNOWN_ERROR``).
    """

    kind = ErrorKind.OTHER

    def __init__(self, message: str, code: str, status_code: int | None = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(f"{code}: {message}")


class AuthenticationError(PixwellError):
    """Invalid or missing API key (401)."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(self, message: str = "Invalid or missing API key"):
        super().__init__(message, "AUTHENTICATION_ERROR", 401)


class RateLimitError(PixwellError):
    """Quota exceeded (429).

    Attributes:
        retry_after: Seconds to wait before retrying, from the ``retry-after``
            header. None when the server did not send a numeric value.
    """

    kind = ErrorKind.RATE_LIMIT

    def __init__(self, message: str = "Rate limit exceeded", retry_after: int | None = None):
        self.retry_after = retry_after
        super().__init__(message, "RATE_LIMIT_ERROR", 429)


class ValidationError(PixwellError):
    """Invalid parameters (400) or invalid client configuration.

    Attributes:
        field: Name of the offending field, when known.
    """

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message, "VALIDATION_ERROR", 400)


class CaptureError(PixwellError):
    """Remote rendering failed (500/502/503)."""

    kind = ErrorKind.CAPTURE

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message, "CAPTURE_ERROR", status_code)


class NetworkError(PixwellError):
    """Transport failure or client-side timeout. Has no status code."""

    kind = ErrorKind.NETWORK

    def __init__(self, message: str = "Network request failed"):
        super().__init__(message, "NETWORK_ERROR")
