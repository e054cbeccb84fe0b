"""Main entry point for the trogue command-line tool.

This module provides the application entry point with:
- Command-line argument parsing through the plugin dispatcher
- Application initialization and dependency injection
- Graceful shutdown handling
"""

import argparse
import asyncio
import shutil
import sys
from collections.abc import Sequence
from typing import TextIO

import structlog

from .constants import VERSION
from .dispatcher import DEFAULT_LOG_LEVEL, Dispatcher
from .models import AppConfig
from .plugins import Plugin, PluginContext, get_plugins
from .services.config import ConfigurationService
from .services.errors import ConfigurationError, get_error_service
from .services.http_client import HttpClientService
from .services.logging import setup_logging
from .services.steam_api import SteamApiService

log = structlog.stdlib.get_logger()

FALLBACK_TERMINAL_SIZE = (80, 24)


class ApplicationContext:
    """Container for the services one command invocation needs.

    Owns the HTTP client so it is closed exactly once, after the plugin ran.
    """

    def __init__(self, config: AppConfig, terminal_width: int | None = None) -> None:
        """Initialize the application context.

        Args:
            config: Loaded and validated configuration
            terminal_width: Terminal width in columns (None to detect)
        """
        self.config: AppConfig = config
        if terminal_width is None:
            terminal_width = shutil.get_terminal_size(FALLBACK_TERMINAL_SIZE).columns
        self.terminal_width: int = terminal_width

        self._http_client: HttpClientService | None = None
        self._steam_api: SteamApiService | None = None

    @property
    def http_client(self) -> HttpClientService:
        """Get the HTTP client service (lazy initialization)."""
        if self._http_client is None:
            self._http_client = HttpClientService(
                base_url=self.config.api_base_url,
                timeout=self.config.request_timeout,
            )
        return self._http_client

    @property
    def steam_api(self) -> SteamApiService:
        """Get the Steam Web API service (lazy initialization)."""
        if self._steam_api is None:
            self._steam_api = SteamApiService(
                http_client=self.http_client,
                api_key=self.config.api_key,
                steam_id=self.config.steam_id,
            )
        return self._steam_api

    def plugin_context(self) -> PluginContext:
        return PluginContext(steam_api=self.steam_api, terminal_width=self.terminal_width)

    async def cleanup(self) -> None:
        """Close open connections."""
        if self._http_client is not None:
            await self._http_client.close()
        log.debug("Application cleanup complete")


async def run_command(
    dispatcher: Dispatcher,
    plugin: Plugin,
    args: argparse.Namespace,
    context: ApplicationContext,
    out: TextIO,
    err: TextIO,
) -> None:
    """Run one plugin and release the context's resources afterwards."""
    try:
        await dispatcher.dispatch(plugin, context.plugin_context(), args, out, err)
    finally:
        await context.cleanup()


def run(argv: Sequence[str] | None = None, out: TextIO | None = None, err: TextIO | None = None) -> int:
    """Parse ``argv``, load configuration and execute the selected command.

    Args:
        argv: Arguments without the program name (None for sys.argv)
        out: Sink for command output (default stdout)
        err: Sink for diagnostics (default stderr)

    Returns:
        Process exit code
    """
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr

    dispatcher = Dispatcher(get_plugins())
    plugin, args = dispatcher.parse(argv)

    # The terminal only gets log records when --log-level asks for them
    log_level = args.log_level or DEFAULT_LOG_LEVEL
    _ = setup_logging(log_level=log_level, log_dir=args.log_dir, console=args.log_level is not None)
    log.info("Starting trogue", version=VERSION, command=args.command, log_level=log_level)

    try:
        config = ConfigurationService().load_config()
    except ConfigurationError as e:
        error_service = get_error_service()
        friendly = error_service.handle_error(e, operation="load_config", component="main")
        print(f"Error: {error_service.create_user_message(friendly)}", file=err)
        return 1

    context = ApplicationContext(config)
    asyncio.run(run_command(dispatcher, plugin, args, context, out, err))
    return 0


def main() -> None:
    """Main entry point for the application."""
    try:
        exit_code = run()
    except KeyboardInterrupt:
        log.info("Application interrupted by user")
        exit_code = 130  # Standard exit code for SIGINT

    log.info("Application exiting", exit_code=exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
