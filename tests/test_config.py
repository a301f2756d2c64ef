from __future__ import annotations

import dataclasses

import pytest

from pixwell import ClientConfig, ErrorKind, Pixwell, ValidationError, load_config
from pixwell.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PIXWELL_API_KEY", "PIXWELL_BASE_URL", "PIXWELL_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.parametrize("api_key", [None, ""])
def test_missing_api_key_fails_at_construction(api_key) -> None:
    with pytest.raises(ValidationError) as exc:
        Pixwell(api_key)

    assert exc.value.field == "api_key"
    assert exc.value.kind is ErrorKind.VALIDATION
    assert exc.value.message == "API key is required"


def test_defaults() -> None:
    client = Pixwell("key")

    assert client.config.base_url == DEFAULT_BASE_URL
    assert client.config.timeout == DEFAULT_TIMEOUT == 60000
    assert client.config.timeout_seconds == 60.0


def test_trailing_slash_is_stripped() -> None:
    client = Pixwell("key", base_url="https://staging.pixwell.dev/")

    assert client.config.base_url == "https://staging.pixwell.dev"


def test_non_positive_timeout_is_rejected() -> None:
    with pytest.raises(ValidationError) as exc:
        ClientConfig(api_key="key", timeout=0)

    assert exc.value.field == "timeout"


def test_config_is_immutable() -> None:
    config = ClientConfig(api_key="key")

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.api_key = "other"  # type: ignore[misc]


def test_load_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PIXWELL_API_KEY", "env-key")
    monkeypatch.setenv("PIXWELL_BASE_URL", "http://localhost:8787/")
    monkeypatch.setenv("PIXWELL_TIMEOUT", "1500")

    config = load_config()

    assert config == ClientConfig(api_key="env-key", base_url="http://localhost:8787", timeout=1500)


def test_load_config_arguments_override_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PIXWELL_API_KEY", "env-key")
    monkeypatch.setenv("PIXWELL_TIMEOUT", "1500")

    config = load_config(api_key="explicit", timeout=250)

    assert config.api_key == "explicit"
    assert config.timeout == 250
    assert config.base_url == DEFAULT_BASE_URL


def test_load_config_rejects_non_integer_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PIXWELL_API_KEY", "env-key")
    monkeypatch.setenv("PIXWELL_TIMEOUT", "fast")

    with pytest.raises(ValidationError) as exc:
        load_config()

    assert exc.value.field == "timeout"


def test_from_env_without_key_fails() -> None:
    with pytest.raises(ValidationError):
        Pixwell.from_env()
