"""Configuration data models."""

from dataclasses import dataclass

from ..constants import STEAM_API_BASE_URL


@dataclass(frozen=True)
class AppConfig:
    """Application configuration settings."""
    api_key: str
    steam_id: str
    api_base_url: str = STEAM_API_BASE_URL
    request_timeout: float | None = None  # None = wait indefinitely
