"""Error handling module for the trogue application.

This module provides:
- Custom exception classes for the failure kinds a command can hit
  (network, payload decoding, input validation, configuration)
- User-friendly error message generation with suggested actions
- A centralized error handling service that converts and logs errors
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx
import structlog

log = structlog.stdlib.get_logger()


class ErrorCategory(Enum):
    """Categories of errors for classification and handling."""
    NETWORK = "network"
    DECODE = "decode"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    UNEXPECTED = "unexpected"


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(frozen=True)
class ErrorContext:
    """Context information for an error."""
    operation: str
    component: str
    details: dict[str, Any]


@dataclass(frozen=True)
class UserFriendlyError:
    """User-friendly error representation with suggested actions."""
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    suggested_actions: list[str]
    technical_details: str | None = None
    recoverable: bool = True


class AppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNEXPECTED,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        suggested_actions: list[str] | None = None,
        technical_details: str | None = None,
        recoverable: bool = True,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.suggested_actions = suggested_actions or []
        self.technical_details = technical_details
        self.recoverable = recoverable
        self.context = context

    def to_user_friendly(self) -> UserFriendlyError:
        """Convert to user-friendly error representation."""
        return UserFriendlyError(
            message=self.message,
            category=self.category,
            severity=self.severity,
            suggested_actions=self.suggested_actions,
            technical_details=self.technical_details,
            recoverable=self.recoverable,
        )


class NetworkError(AppError):
    """Exception for transport failures and non-success HTTP statuses."""

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        suggested_actions = [
            "Check your internet connection",
            "Verify the Steam API URL is correct",
            "Try again in a few moments",
        ]

        if status_code:
            if status_code in (401, 403):
                suggested_actions = [
                    "Check that your Steam Web API key is valid",
                    "Make sure the profile's game details are public",
                ]
            elif status_code == 429:
                suggested_actions = [
                    "Wait a few minutes before retrying",
                ]
            elif status_code == 400:
                suggested_actions = [
                    "Check that the game id is correct",
                    "The game may not have any stats",
                ]
            elif status_code >= 500:
                suggested_actions = [
                    "The Steam API is experiencing issues",
                    "Try again later",
                ]

        technical_details = None
        if original_error:
            technical_details = f"{type(original_error).__name__}: {str(original_error)}"
        if url:
            technical_details = f"URL: {url}" + (f"\n{technical_details}" if technical_details else "")
        if status_code:
            technical_details = f"Status: {status_code}" + (f"\n{technical_details}" if technical_details else "")

        super().__init__(
            message=message,
            category=ErrorCategory.NETWORK,
            severity=ErrorSeverity.ERROR,
            suggested_actions=suggested_actions,
            technical_details=technical_details,
            recoverable=True,
        )
        self.original_error = original_error
        self.url = url
        self.status_code = status_code


class DecodeError(AppError):
    """Exception for response payloads that cannot be decoded or mapped."""

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        url: str | None = None,
    ) -> None:
        technical_details = None
        if url:
            technical_details = f"URL: {url}"
        if original_error:
            technical_details = (technical_details or "") + f"\nError: {type(original_error).__name__}: {str(original_error)}"

        super().__init__(
            message=message,
            category=ErrorCategory.DECODE,
            severity=ErrorSeverity.ERROR,
            suggested_actions=[
                "The Steam API response format may have changed",
                "Check that the API URL points at the Steam Web API",
            ],
            technical_details=technical_details,
            recoverable=True,
        )
        self.original_error = original_error
        self.url = url


class ValidationError(AppError):
    """Exception for validation-related errors."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        constraints: list[str] | None = None,
    ) -> None:
        suggested_actions = ["Review the input requirements"]
        if constraints:
            suggested_actions.extend([f"Ensure: {c}" for c in constraints])

        technical_details = None
        if field:
            technical_details = f"Field: {field}"
        if value is not None:
            value_str = str(value)[:100]  # Truncate long values
            technical_details = (technical_details or "") + f"\nValue: {value_str}"

        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.WARNING,
            suggested_actions=suggested_actions,
            technical_details=technical_details,
            recoverable=True,
        )
        self.field = field
        self.value = value
        self.constraints = constraints or []


class ConfigurationError(AppError):
    """Exception for configuration-related errors."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        current_value: Any = None,
        expected: str | None = None,
    ) -> None:
        suggested_actions = []
        if setting:
            suggested_actions.append(f"Export {setting} in your shell before running trogue")
        if expected:
            suggested_actions.append(f"Expected: {expected}")

        technical_details = None
        if setting:
            technical_details = f"Setting: {setting}"
        if current_value is not None:
            technical_details = (technical_details or "") + f"\nCurrent: {current_value}"

        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            suggested_actions=suggested_actions,
            technical_details=technical_details,
            recoverable=False,
        )
        self.setting = setting
        self.current_value = current_value
        self.expected = expected


class ErrorHandlingService:
    """Centralized error handling service.

    This service provides:
    - Conversion of library exceptions into AppError subclasses
    - Error logging with technical details
    - User message formatting with suggested actions
    """

    def convert(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None = None,
    ) -> AppError:
        """Convert a standard exception to an AppError.

        Args:
            error: The exception that occurred
            operation: The operation being performed
            component: The component where the error occurred
            context: Additional context information (e.g. ``url``)

        Returns:
            The matching AppError; AppError inputs are returned unchanged
        """
        if isinstance(error, AppError):
            return error

        url = context.get("url") if context else None

        if isinstance(error, httpx.ConnectError):
            return NetworkError(
                message="Unable to connect to the Steam API. Please check your internet connection.",
                original_error=error,
                url=url,
            )
        elif isinstance(error, httpx.TimeoutException):
            return NetworkError(
                message="The request to the Steam API timed out.",
                original_error=error,
                url=url,
            )
        elif isinstance(error, httpx.HTTPStatusError):
            status_code = error.response.status_code
            return NetworkError(
                message=self._get_http_error_message(status_code),
                original_error=error,
                url=str(error.request.url),
                status_code=status_code,
            )
        elif isinstance(error, httpx.RequestError):
            return NetworkError(
                message="A network error occurred. Please check your connection.",
                original_error=error,
                url=url,
            )
        elif isinstance(error, json.JSONDecodeError):
            return DecodeError(
                message="The Steam API returned a response that is not valid JSON.",
                original_error=error,
                url=url,
            )
        elif isinstance(error, (KeyError, TypeError, ValueError, AttributeError)):
            return DecodeError(
                message=f"The Steam API returned an unexpected payload ({type(error).__name__}: {error}).",
                original_error=error,
                url=url,
            )

        return AppError(
            message="An unexpected error occurred.",
            category=ErrorCategory.UNEXPECTED,
            severity=ErrorSeverity.ERROR,
            technical_details=f"{type(error).__name__}: {str(error)}",
            recoverable=True,
            context=ErrorContext(
                operation=operation,
                component=component,
                details=context or {},
            ),
        )

    def handle_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None = None,
    ) -> UserFriendlyError:
        """Handle an error and return a user-friendly representation.

        Args:
            error: The exception that occurred
            operation: The operation being performed
            component: The component where the error occurred
            context: Additional context information

        Returns:
            User-friendly error representation
        """
        app_error = self.convert(error, operation, component, context)
        self._log_error(app_error, operation, component, context)
        return app_error.to_user_friendly()

    @staticmethod
    def _get_http_error_message(status_code: int) -> str:
        """Get a user-friendly message for HTTP status codes."""
        messages = {
            400: "The request was rejected by the Steam API (HTTP 400).",
            401: "Authentication failed. Please check your API key (HTTP 401).",
            403: "Access denied. The profile may be private (HTTP 403).",
            404: "The requested Steam API resource was not found (HTTP 404).",
            429: "Too many requests. Please wait before trying again (HTTP 429).",
            500: "The Steam API encountered an error (HTTP 500).",
            502: "The Steam API is temporarily unavailable (HTTP 502).",
            503: "The Steam API is temporarily unavailable (HTTP 503).",
            504: "The Steam API took too long to respond (HTTP 504).",
        }
        return messages.get(status_code, f"HTTP error {status_code} occurred.")

    def _log_error(
        self,
        error: AppError,
        operation: str,
        component: str,
        context: dict[str, Any] | None,
    ) -> None:
        """Log error with full technical details."""
        log_method = log.warning if error.severity == ErrorSeverity.WARNING else log.error

        log_method(
            "Error occurred",
            error_message=error.message,
            category=error.category.value,
            severity=error.severity.value,
            operation=operation,
            component=component,
            technical_details=error.technical_details,
            recoverable=error.recoverable,
            context=context,
        )

    def create_user_message(
        self,
        error: UserFriendlyError,
        include_suggestions: bool = True,
    ) -> str:
        """Create a formatted user message from an error.

        Args:
            error: The user-friendly error
            include_suggestions: Whether to include suggested actions

        Returns:
            Formatted message string
        """
        parts = [error.message]

        if include_suggestions and error.suggested_actions:
            parts.append("\nSuggested actions:")
            for action in error.suggested_actions[:3]:  # Limit to 3 suggestions
                parts.append(f"  • {action}")

        return "\n".join(parts)


# Global error handling service instance
_error_service: ErrorHandlingService | None = None


def get_error_service() -> ErrorHandlingService:
    """Get the global error handling service instance."""
    global _error_service
    if _error_service is None:
        _error_service = ErrorHandlingService()
    return _error_service


def handle_error(
    error: Exception,
    operation: str,
    component: str,
    context: dict[str, Any] | None = None,
) -> UserFriendlyError:
    """Convenience function to handle errors using the global service.

    Args:
        error: The exception that occurred
        operation: The operation being performed
        component: The component where the error occurred
        context: Additional context information

    Returns:
        User-friendly error representation
    """
    return get_error_service().handle_error(error, operation, component, context)
