"""Tests for error conversion, logging and user message formatting."""

import json

import httpx
import pytest
from hypothesis import given, strategies as st

from trogue.services.errors import (
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
)

URL = "http://api.steampowered.com/IPlayerService/GetOwnedGames/v0001/"


def _status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", URL)
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError(f"status {status_code}", request=request, response=response)


class TestConvert:
    """ErrorHandlingService.convert maps library exceptions onto AppError."""

    def setup_method(self) -> None:
        self.service = ErrorHandlingService()

    def test_connect_error_becomes_network_error(self) -> None:
        error = self.service.convert(httpx.ConnectError("refused"), "op", "test", {"url": URL})

        assert isinstance(error, NetworkError)
        assert error.category == ErrorCategory.NETWORK
        assert error.url == URL
        assert error.status_code is None
        assert "ConnectError: refused" in (error.technical_details or "")

    def test_timeout_becomes_network_error(self) -> None:
        error = self.service.convert(httpx.ReadTimeout("slow"), "op", "test")

        assert isinstance(error, NetworkError)
        assert "timed out" in error.message

    def test_other_request_error_becomes_network_error(self) -> None:
        error = self.service.convert(httpx.RemoteProtocolError("broken"), "op", "test")

        assert isinstance(error, NetworkError)
        assert error.message == "A network error occurred. Please check your connection."

    @pytest.mark.parametrize(
        ("status_code", "expected"),
        [
            (403, "Access denied. The profile may be private (HTTP 403)."),
            (500, "The Steam API encountered an error (HTTP 500)."),
            (418, "HTTP error 418 occurred."),
        ],
    )
    def test_status_error_becomes_network_error(self, status_code: int, expected: str) -> None:
        error = self.service.convert(_status_error(status_code), "op", "test")

        assert isinstance(error, NetworkError)
        assert error.status_code == status_code
        assert error.message == expected
        assert str(error) == expected
        assert error.url == URL

    def test_status_specific_suggestions(self) -> None:
        unauthorized = self.service.convert(_status_error(401), "op", "test")
        server_error = self.service.convert(_status_error(503), "op", "test")

        assert unauthorized.suggested_actions[0] == "Check that your Steam Web API key is valid"
        assert "The Steam API is experiencing issues" in server_error.suggested_actions

    def test_json_error_becomes_decode_error(self) -> None:
        try:
            json.loads("<html>")
        except json.JSONDecodeError as e:
            error = self.service.convert(e, "op", "test", {"url": URL})

        assert isinstance(error, DecodeError)
        assert error.category == ErrorCategory.DECODE
        assert error.message == "The Steam API returned a response that is not valid JSON."

    @pytest.mark.parametrize("exc", [KeyError("games"), TypeError("bad"), ValueError("nan"), AttributeError("get")])
    def test_mapping_errors_become_decode_errors(self, exc: Exception) -> None:
        error = self.service.convert(exc, "op", "test")

        assert isinstance(error, DecodeError)
        assert type(exc).__name__ in error.message

    def test_unknown_error_becomes_unexpected(self) -> None:
        error = self.service.convert(RuntimeError("boom"), "op", "steam_api", {"app_id": 10})

        assert type(error) is AppError
        assert error.category == ErrorCategory.UNEXPECTED
        assert error.technical_details == "RuntimeError: boom"
        assert error.context is not None
        assert error.context.component == "steam_api"
        assert error.context.details == {"app_id": 10}

    def test_app_errors_pass_through(self) -> None:
        original = ValidationError("bad input", field="game_id")

        assert self.service.convert(original, "op", "test") is original


class TestUserMessages:
    """User-facing error text."""

    def test_configuration_error_message(self) -> None:
        service = ErrorHandlingService()
        error = ConfigurationError("Missing TROGUE_STEAM_ID environment variable.", setting="TROGUE_STEAM_ID")

        friendly = service.handle_error(error, "load_config", "main")
        message = service.create_user_message(friendly)

        assert friendly.severity == ErrorSeverity.CRITICAL
        assert message.splitlines()[0] == "Missing TROGUE_STEAM_ID environment variable."
        assert "  • Export TROGUE_STEAM_ID in your shell before running trogue" in message

    @given(
        message=st.text(min_size=1, max_size=80).filter(lambda s: "\n" not in s),
        actions=st.lists(st.text(min_size=1, max_size=40).filter(lambda s: "\n" not in s), max_size=6),
    )
    def test_at_most_three_suggestions(self, message: str, actions: list[str]) -> None:
        friendly = UserFriendlyError(
            message=message,
            category=ErrorCategory.NETWORK,
            severity=ErrorSeverity.ERROR,
            suggested_actions=actions,
        )

        text = ErrorHandlingService().create_user_message(friendly)

        assert text.startswith(message)
        assert text.count("\n  • ") == min(3, len(actions))

    def test_suggestions_can_be_omitted(self) -> None:
        friendly = NetworkError("offline").to_user_friendly()

        assert ErrorHandlingService().create_user_message(friendly, include_suggestions=False) == "offline"

    def test_global_service_is_shared(self) -> None:
        assert get_error_service() is get_error_service()
