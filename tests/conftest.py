from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest
from fastapi import FastAPI

from fake_service import API_KEY, create_fake_service
from pixwell import Pixwell


@pytest.fixture
def app() -> FastAPI:
    return create_fake_service()


@pytest.fixture
def client(app: FastAPI) -> Pixwell:
    """Client talking to the fake service in-process."""
    return Pixwell(API_KEY, base_url="http://testserver/", transport=httpx.ASGITransport(app=app))


@pytest.fixture
def mock_client() -> Callable[..., Pixwell]:
    """Factory for clients backed by an httpx.MockTransport handler."""

    def make(handler: Callable[[httpx.Request], Any], **kwargs: Any) -> Pixwell:
        return Pixwell(
            API_KEY,
            base_url="https://api.test",
            transport=httpx.MockTransport(handler),
            **kwargs,
        )

    return make
