"""Service layer for configuration, logging, errors and the Steam Web API."""

from .config import ConfigurationService, ValidationResult
from .errors import (
    AppError,
    ConfigurationError,
    DecodeError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    NetworkError,
    UserFriendlyError,
    ValidationError,
    get_error_service,
    handle_error,
)
from .http_client import HttpClientService
from .steam_api import SteamApiService

__all__ = [
    "AppError",
    "ConfigurationError",
    "ConfigurationService",
    "DecodeError",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "HttpClientService",
    "NetworkError",
    "SteamApiService",
    "UserFriendlyError",
    "ValidationError",
    "ValidationResult",
    "get_error_service",
    "handle_error",
]
