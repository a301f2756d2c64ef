"""Request and response shapes for the Pixwell API.

Field names are snake_case in Python and camelCase on the wire; models accept
either when constructed.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Any, Literal

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from .errors import ValidationError

ImageFormat = Literal["png", "jpeg", "webp"]


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class _RequestModel(_WireModel):
    """Request body; unknown or mistyped fields raise pixwell's ValidationError."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except pydantic.ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or None
            raise ValidationError(f"{field}: {first['msg']}" if field else first["msg"], field) from e


class CaptureOptions(_RequestModel):
    """Capture settings shared by single and batch requests.

    Ranges (quality 1-100, delay up to 10000ms, cache_ttl up to 3600s) are
    enforced by the server, not here.
    """

    width: int = Field(default=1280, description="Viewport width in pixels")
    height: int = Field(default=720, description="Viewport height in pixels")
    full_page: bool = Field(default=False, alias="fullPage", description="Capture the full scrollable page")
    format: ImageFormat = Field(default="png", description="Image format")
    quality: int = Field(default=80, description="Image quality 1-100, jpeg/webp only")
    mobile: bool = Field(default=False, description="Emulate a mobile device")
    dark_mode: bool = Field(default=False, alias="darkMode", description="Enable dark mode")
    delay: int = Field(default=0, description="Wait time in ms before capture")
    selector: str | None = Field(default=None, description="CSS selector of the element to capture")
    cache_ttl: int = Field(default=0, alias="cacheTtl", description="Server-side cache TTL in seconds")

    def to_payload(self) -> dict[str, Any]:
        """JSON body for this request (wire names, unset optionals omitted)."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ScreenshotOptions(CaptureOptions):
    """Single screenshot request."""

    url: str = Field(description="URL to capture")


class BatchOptions(_RequestModel):
    """Batch screenshot request: up to 10 URLs sharing one set of options."""

    urls: list[str]
    options: CaptureOptions | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


@dataclass
class ScreenshotResponse:
    """Result of a single screenshot.

    Attributes:
        data: Raw image bytes
        content_type: MIME type reported by the server (e.g. "image/png")
        size: Image size in bytes
        duration_ms: Server-side capture duration
        cached: True when the server answered from its own cache
    """

    data: bytes
    content_type: str
    size: int
    duration_ms: int
    cached: bool

    def save(self, filepath: str) -> None:
        """Save the image data to a file."""
        with open(filepath, "wb") as f:
            f.write(self.data)


class BatchItemError(_WireModel):
    code: str
    message: str


class BatchResultItem(_WireModel):
    """Outcome for one URL of a batch."""

    url: str
    success: bool
    data: str | None = Field(default=None, description="Base64 encoded image (if success)")
    content_type: str | None = Field(default=None, alias="contentType")
    size: int | None = None
    duration_ms: int | None = Field(default=None, alias="durationMs")
    error: BatchItemError | None = None

    def image_bytes(self) -> bytes | None:
        """Decoded image data, or None for a failed item."""
        if self.data is None:
            return None
        return base64.b64decode(self.data)

    def save(self, filepath: str) -> None:
        image = self.image_bytes()
        if image is None:
            raise ValueError(f"No image data for {self.url}")
        with open(filepath, "wb") as f:
            f.write(image)


class BatchSummary(_WireModel):
    total: int
    succeeded: int
    failed: int
    total_duration_ms: int = Field(alias="totalDurationMs")


class BatchResponse(_WireModel):
    """Batch result exactly as reported by the server."""

    results: list[BatchResultItem]
    summary: BatchSummary


class Quota(_WireModel):
    used: int
    limit: int
    remaining: int


class Plan(_WireModel):
    name: str
    max_width: int = Field(alias="maxWidth")
    max_height: int = Field(alias="maxHeight")


class UsageResponse(_WireModel):
    """Current usage statistics and plan limits."""

    daily: Quota
    monthly: Quota
    plan: Plan
