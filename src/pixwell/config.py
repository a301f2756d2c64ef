"""Client configuration.

Settings are read from environment variables by ``load_config``; no settings
library is involved.

    PIXWELL_API_KEY    bearer token (required)
    PIXWELL_BASE_URL   API endpoint (default: https://api.pixwell.dev)
    PIXWELL_TIMEOUT    request timeout in milliseconds (default: 60000)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ValidationError

DEFAULT_BASE_URL = "https://api.pixwell.dev"
DEFAULT_TIMEOUT = 60000


@dataclass(frozen=True)
class ClientConfig:
    """Immutable client settings.

    Attributes:
        api_key: Bearer token sent with every request
        base_url: API endpoint without trailing slash
        timeout: Budget for a whole request in milliseconds
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: int = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValidationError("API key is required", "api_key")
        if self.timeout <= 0:
            raise ValidationError(f"timeout must be positive: {self.timeout}", "timeout")
        if self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url[:-1])

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000


def load_config(
    api_key: str | None = None,
    base_url: str | None = None,
    timeout: int | None = None,
) -> ClientConfig:
    """Build a ClientConfig from the environment; explicit arguments win."""

    if api_key is None:
        api_key = os.environ.get("PIXWELL_API_KEY", "")
    if base_url is None:
        base_url = os.environ.get("PIXWELL_BASE_URL", DEFAULT_BASE_URL)
    if timeout is None:
        timeout_env = os.environ.get("PIXWELL_TIMEOUT")
        if timeout_env:
            try:
                timeout = int(timeout_env)
            except ValueError:
                raise ValidationError(
                    f"PIXWELL_TIMEOUT must be an integer: {timeout_env!r}", "timeout"
                ) from None
        else:
            timeout = DEFAULT_TIMEOUT

    return ClientConfig(api_key=api_key, base_url=base_url, timeout=timeout)
