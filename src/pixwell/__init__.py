"""
pixwell - Async client library for the Pixwell screenshot API

Usage:
    from pixwell import Pixwell

    client = Pixwell(api_key="your-api-key")

    shot = await client.screenshot("https://example.com", width=1920, height=1080)
    shot.save("example.png")

    batch = await client.batch(["https://example.com", "https://python.org"], format="jpeg")
    for i, item in enumerate(batch.results):
        if item.success:
            item.save(f"shot_{i}.jpg")

    usage = await client.usage()
    print(f"Daily: {usage.daily.used}/{usage.daily.limit}")
"""

__version__ = "0.1.0"

from .client import Pixwell
from .config import ClientConfig, load_config
from .errors import (
    AuthenticationError,
    CaptureError,
    ErrorKind,
    NetworkError,
    PixwellError,
    RateLimitError,
    ValidationError,
)
from .types import (
    BatchOptions,
    BatchResponse,
    BatchResultItem,
    CaptureOptions,
    ScreenshotOptions,
    ScreenshotResponse,
    UsageResponse,
)

__all__ = [
    "Pixwell",
    "ClientConfig",
    "load_config",
    "PixwellError",
    "ErrorKind",
    "AuthenticationError",
    "RateLimitError",
    "ValidationError",
    "CaptureError",
    "NetworkError",
    "ScreenshotOptions",
    "CaptureOptions",
    "BatchOptions",
    "ScreenshotResponse",
    "BatchResultItem",
    "BatchResponse",
    "UsageResponse",
]
