"""Configuration service for loading settings from the environment."""

import os
from collections.abc import Mapping

import structlog

from ..constants import (
    ENV_API_KEY,
    ENV_API_URL,
    ENV_REQUEST_TIMEOUT,
    ENV_STEAM_ID,
    STEAM_API_BASE_URL,
)
from ..models import AppConfig
from .errors import ConfigurationError

log = structlog.stdlib.get_logger()


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Service for reading application configuration from environment variables."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ: Mapping[str, str] = os.environ if environ is None else environ

    def load_config(self) -> AppConfig:
        """Load configuration from the environment.

        Raises:
            ConfigurationError: If a required variable is missing or a value is invalid
        """
        api_key = self._read_required(ENV_API_KEY)
        steam_id = self._read_required(ENV_STEAM_ID)

        config = AppConfig(
            api_key=api_key,
            steam_id=steam_id,
            api_base_url=self._environ.get(ENV_API_URL) or STEAM_API_BASE_URL,
            request_timeout=self._read_timeout(),
        )

        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            log.error("Invalid configuration", errors=validation_result.errors)
            raise ConfigurationError(
                f"Invalid configuration: {', '.join(validation_result.errors)}",
            )

        log.info("Configuration loaded", api_base_url=config.api_base_url, steam_id=config.steam_id)
        return config

    def validate_config(self, config: AppConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        if not config.api_key.strip():
            errors.append("api_key cannot be empty")

        if not config.steam_id.strip():
            errors.append("steam_id cannot be empty")

        if not config.api_base_url.startswith(("http://", "https://")):
            errors.append("api_base_url must start with http:// or https://")

        if config.request_timeout is not None and config.request_timeout <= 0:
            errors.append("request_timeout must be a positive number")

        return ValidationResult(len(errors) == 0, errors)

    def _read_required(self, name: str) -> str:
        value = self._environ.get(name)
        if value is None:
            raise ConfigurationError(
                f"Missing {name} environment variable.",
                setting=name,
            )
        return value

    def _read_timeout(self) -> float | None:
        raw = self._environ.get(ENV_REQUEST_TIMEOUT)
        if not raw:
            return None
        try:
            return float(raw)
        except ValueError:
            raise ConfigurationError(
                f"Invalid {ENV_REQUEST_TIMEOUT} value: {raw}",
                setting=ENV_REQUEST_TIMEOUT,
                current_value=raw,
                expected="a number of seconds",
            ) from None
