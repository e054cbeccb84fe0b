"""Tests for the environment-backed configuration service."""

import pytest
from hypothesis import given, strategies as st

from trogue.constants import (
    ENV_API_KEY,
    ENV_API_URL,
    ENV_REQUEST_TIMEOUT,
    ENV_STEAM_ID,
    STEAM_API_BASE_URL,
)
from trogue.models import AppConfig
from trogue.services import ConfigurationError, ConfigurationService

non_blank = st.text(
    min_size=1,
    max_size=40,
    alphabet=st.characters(whitelist_categories=("Lu", "Ll", "Nd")),
)


@given(api_key=non_blank, steam_id=non_blank)
def test_required_values_are_read_from_environment(api_key: str, steam_id: str) -> None:
    service = ConfigurationService({ENV_API_KEY: api_key, ENV_STEAM_ID: steam_id})

    config = service.load_config()

    assert config == AppConfig(api_key=api_key, steam_id=steam_id)
    assert config.api_base_url == STEAM_API_BASE_URL
    assert config.request_timeout is None


def test_optional_values_override_defaults() -> None:
    service = ConfigurationService({
        ENV_API_KEY: "KEY",
        ENV_STEAM_ID: "76561198000000000",
        ENV_API_URL: "https://steam.example.test",
        ENV_REQUEST_TIMEOUT: "2.5",
    })

    config = service.load_config()

    assert config.api_base_url == "https://steam.example.test"
    assert config.request_timeout == 2.5


@pytest.mark.parametrize(
    ("environ", "missing"),
    [
        ({ENV_STEAM_ID: "1"}, ENV_API_KEY),
        ({ENV_API_KEY: "KEY"}, ENV_STEAM_ID),
        ({}, ENV_API_KEY),
    ],
)
def test_missing_required_value(environ: dict[str, str], missing: str) -> None:
    service = ConfigurationService(environ)

    with pytest.raises(ConfigurationError) as exc_info:
        service.load_config()

    assert exc_info.value.message == f"Missing {missing} environment variable."
    assert exc_info.value.setting == missing
    assert exc_info.value.recoverable is False
    assert any(missing in action for action in exc_info.value.suggested_actions)


@pytest.mark.parametrize("raw", ["soon", "-1", "0"])
def test_invalid_timeout_is_rejected(raw: str) -> None:
    service = ConfigurationService({ENV_API_KEY: "KEY", ENV_STEAM_ID: "1", ENV_REQUEST_TIMEOUT: raw})

    with pytest.raises(ConfigurationError):
        service.load_config()


def test_empty_timeout_means_no_timeout() -> None:
    service = ConfigurationService({ENV_API_KEY: "KEY", ENV_STEAM_ID: "1", ENV_REQUEST_TIMEOUT: ""})

    assert service.load_config().request_timeout is None


def test_blank_credentials_fail_validation() -> None:
    service = ConfigurationService({ENV_API_KEY: "  ", ENV_STEAM_ID: ""})

    with pytest.raises(ConfigurationError) as exc_info:
        service.load_config()

    assert "api_key cannot be empty" in exc_info.value.message
    assert "steam_id cannot be empty" in exc_info.value.message


def test_validate_config_rejects_non_http_url() -> None:
    service = ConfigurationService({})
    config = AppConfig(api_key="KEY", steam_id="1", api_base_url="ftp://example.test")

    result = service.validate_config(config)

    assert result.is_valid is False
    assert result.errors == ["api_base_url must start with http:// or https://"]


def test_validate_config_accepts_valid_config() -> None:
    service = ConfigurationService({})

    result = service.validate_config(AppConfig(api_key="KEY", steam_id="1", request_timeout=10.0))

    assert result.is_valid is True
    assert result.errors == []
