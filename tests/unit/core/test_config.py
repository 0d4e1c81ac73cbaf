from __future__ import annotations

import dataclasses

import pytest

from apinet.core.config import (
    DEFAULT_HEADERS,
    DEFAULT_MAX_CONNECTIONS_PER_HOST,
    DEFAULT_TIMEOUT,
    ClientConfig,
)
from apinet.core.settings import ServerDirection, ServerSettings

##################################
#     Tests for ClientConfig     #
##################################


def test_client_config_defaults() -> None:
    config = ClientConfig(base_url="https://api.example.com")
    assert config.timeout == DEFAULT_TIMEOUT == 20.0
    assert config.max_connections_per_host == DEFAULT_MAX_CONNECTIONS_PER_HOST == 3
    assert dict(config.default_headers) == {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    assert config.alert_title == "Network error"


def test_client_config_is_immutable() -> None:
    config = ClientConfig(base_url="https://api.example.com")
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.timeout = 5.0  # type: ignore[misc]


def test_client_config_default_headers_are_copied() -> None:
    headers = {"Accept": "application/json"}
    config = ClientConfig(base_url="https://api.example.com", default_headers=headers)
    headers["X-Extra"] = "1"
    assert "X-Extra" not in config.default_headers
    with pytest.raises(TypeError):
        config.default_headers["X-Extra"] = "1"  # type: ignore[index]


def test_default_headers_are_read_only() -> None:
    with pytest.raises(TypeError):
        DEFAULT_HEADERS["Accept"] = "text/plain"  # type: ignore[index]


@pytest.mark.parametrize("timeout", [0, -1.0])
def test_client_config_invalid_timeout(timeout: float) -> None:
    with pytest.raises(ValueError, match=r"timeout must be > 0"):
        ClientConfig(base_url="https://api.example.com", timeout=timeout)


def test_client_config_invalid_max_connections() -> None:
    with pytest.raises(ValueError, match=r"max_connections_per_host must be >= 1"):
        ClientConfig(base_url="https://api.example.com", max_connections_per_host=0)


@pytest.mark.parametrize("base_url", ["", "api.example.com", "ftp://api.example.com"])
def test_client_config_invalid_base_url(base_url: str) -> None:
    with pytest.raises(ValueError, match=r"base_url must be an absolute http\(s\) URL"):
        ClientConfig(base_url=base_url)


def test_client_config_from_settings() -> None:
    settings = ServerSettings(
        server=ServerDirection.PRODUCTION,
        development_url="https://dev.example.com",
        production_url="https://api.example.com",
    )
    config = ClientConfig.from_settings(settings)
    assert config.base_url == "https://api.example.com"
    assert config.timeout == 20.0


def test_client_config_from_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APINET_SERVER", "development")
    monkeypatch.setenv("APINET_DEVELOPMENT_URL", "https://dev.example.com")
    assert ClientConfig.from_settings().base_url == "https://dev.example.com"


####################################
#     Tests for ServerSettings     #
####################################


def test_server_settings_default_direction(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("APINET_SERVER", raising=False)
    assert ServerSettings().server is ServerDirection.DEVELOPMENT


def test_server_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APINET_SERVER", "production")
    monkeypatch.setenv("APINET_PRODUCTION_URL", "https://api.example.com")
    settings = ServerSettings()
    assert settings.server is ServerDirection.PRODUCTION
    assert settings.api_url == "https://api.example.com"


def test_server_settings_missing_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("APINET_PRODUCTION_URL", raising=False)
    settings = ServerSettings(server=ServerDirection.PRODUCTION)
    with pytest.raises(ValueError, match=r"APINET_PRODUCTION_URL"):
        _ = settings.api_url
