"""Async HTTP client for the Pixwell screenshot API."""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Literal, Self

import httpx
import pydantic

from . import __version__
from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ClientConfig, load_config
from .errors import (
    AuthenticationError,
    CaptureError,
    NetworkError,
    PixwellError,
    RateLimitError,
    ValidationError,
)
from .types import (
    BatchOptions,
    BatchResponse,
    CaptureOptions,
    ScreenshotOptions,
    ScreenshotResponse,
    UsageResponse,
)

logger = logging.getLogger(__name__)

SCREENSHOT_PATH = "/api/v1/screenshot"
BATCH_PATH = "/api/v1/batch"
USAGE_PATH = "/api/v1/usage"

USER_AGENT = f"pixwell-python/{__version__}"

ResponseType = Literal["json", "binary"]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class ApiResponse:
    """Decoded body plus the response headers (case-insensitive)."""

    data: Any
    headers: Mapping[str, str]


def _parse_int(value: str | None) -> int | None:
    """Leading integer of a header value ("512.7" -> 512), or None."""
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


class Pixwell:
    """Pixwell API client.

    Every call is an independent round trip; the client only holds its
    configuration, so one instance can serve concurrent tasks.

    Usage:
        client = Pixwell("your-api-key")
        shot = await client.screenshot("https://example.com", width=1920, height=1080)
        shot.save("example.png")

    Or from the environment (PIXWELL_API_KEY, PIXWELL_BASE_URL, PIXWELL_TIMEOUT):
        async with Pixwell.from_env() as client:
            usage = await client.usage()
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: int | None = None,
        *,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            api_key: API key for authentication
            base_url: API endpoint (default: https://api.pixwell.dev)
            timeout: Request timeout in milliseconds (default: 60000)
            config: Prebuilt configuration; replaces the three arguments above
            transport: httpx transport used for every request (tests, proxies)

        Raises:
            ValidationError: If the API key is missing or empty
        """
        if config is None:
            config = ClientConfig(
                api_key=api_key or "",
                base_url=base_url if base_url is not None else DEFAULT_BASE_URL,
                timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
            )
        self.config = config
        self._transport = transport

    @classmethod
    def from_env(cls, *, transport: httpx.AsyncBaseTransport | None = None, **overrides: Any) -> Self:
        """Create a client from PIXWELL_* environment variables."""
        return cls(config=load_config(**overrides), transport=transport)

    async def screenshot(self, options: ScreenshotOptions | str, **fields: Any) -> ScreenshotResponse:
        """Capture a screenshot of a webpage.

        Args:
            options: ScreenshotOptions, or the URL to capture
            **fields: Option fields when a URL is given (width, format, ...)

        Returns:
            ScreenshotResponse with the image data

        Raises:
            ValidationError: If parameters are invalid
            AuthenticationError: If the API key is invalid
            RateLimitError: If the rate limit is exceeded
            CaptureError: If the capture fails
            NetworkError: On transport failure or timeout
        """
        if not isinstance(options, ScreenshotOptions):
            options = ScreenshotOptions(url=options, **fields)

        response = await self._request(
            SCREENSHOT_PATH,
            method="POST",
            body=options.to_payload(),
            response_type="binary",
        )
        data: bytes = response.data

        return ScreenshotResponse(
            data=data,
            content_type=response.headers.get("content-type") or "application/octet-stream",
            size=len(data),
            duration_ms=_parse_int(response.headers.get("x-duration-ms")) or 0,
            cached=response.headers.get("x-cache") == "HIT",
        )

    async def batch(self, options: BatchOptions | list[str], **fields: Any) -> BatchResponse:
        """Capture multiple screenshots in a single request.

        Per-URL failures do not raise; check ``result.success`` on each item.

        Args:
            options: BatchOptions, or the list of URLs (max 10)
            **fields: Shared option fields when a URL list is given
        """
        if not isinstance(options, BatchOptions):
            shared = CaptureOptions(**fields) if fields else None
            options = BatchOptions(urls=list(options), options=shared)

        response = await self._request(
            BATCH_PATH,
            method="POST",
            body=options.to_payload(),
            response_type="json",
        )
        return self._validate(BatchResponse, response.data)

    async def usage(self) -> UsageResponse:
        """Get current usage statistics including daily and monthly limits."""
        response = await self._request(USAGE_PATH, method="GET", response_type="json")
        return self._validate(UsageResponse, response.data)

    @staticmethod
    def _validate(model: type[pydantic.BaseModel], data: Any) -> Any:
        try:
            return model.model_validate(data)
        except pydantic.ValidationError as e:
            raise PixwellError(
                f"Unexpected {model.__name__} body: {e.error_count()} validation error(s)",
                "INVALID_RESPONSE",
            ) from e

    async def _request(
        self,
        path: str,
        *,
        method: Literal["GET", "POST"],
        body: dict[str, Any] | None = None,
        response_type: ResponseType = "json",
    ) -> ApiResponse:
        """Make an authenticated request to the API.

        The whole round trip, including reading the body, is bounded by the
        configured timeout. PixwellErrors raised while handling the response
        propagate unchanged.
        """
        url = f"{self.config.base_url}{path}"
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "User-Agent": USER_AGENT,
        }
        if body is not None:
            headers["Content-Type"] = "application/json"

        logger.debug(f"{method} {url}")

        try:
            return await asyncio.wait_for(
                self._send(method, url, headers, body, response_type),
                timeout=self.config.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(f"{method} {url} timed out after {self.config.timeout}ms")
            raise NetworkError(f"Request timed out after {self.config.timeout}ms") from None
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise NetworkError(str(e) or "Network request failed") from e

    async def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: dict[str, Any] | None,
        response_type: ResponseType,
    ) -> ApiResponse:
        # httpx timeouts are disabled; the budget is enforced by _request.
        async with httpx.AsyncClient(transport=self._transport, timeout=None) as http:
            response = await http.request(method, url, headers=headers, json=body)

        if not response.is_success:
            self._raise_for_status(response)

        if response_type == "binary":
            data: Any = response.content
        else:
            data = response.json()
        return ApiResponse(data=data, headers=response.headers)

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Map a non-2xx response onto a PixwellError. Always raises."""
        error_body: dict[str, Any] = {}
        try:
            payload = response.json()
            if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
                error_body = payload["error"]
        except ValueError:
            # Not JSON; fall back to defaults.
            pass

        status = response.status_code
        message = error_body.get("message") or f"Request failed with status {status}"
        code = error_body.get("code") or "UNKNOWN_ERROR"

        logger.warning(f"Pixwell API error {status} ({code}): {message}")

        if status == 401:
            raise AuthenticationError(message)
        if status == 429:
            raise RateLimitError(message, _parse_int(response.headers.get("retry-after")))
        if status == 400:
            raise ValidationError(message)
        if status in (500, 502, 503):
            raise CaptureError(message, status)
        raise PixwellError(message, code, status)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Nothing to release; connections are scoped to each request."""
