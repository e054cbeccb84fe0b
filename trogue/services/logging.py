"""Logging configuration service for the trogue application."""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog


class LoggingService:
    """Service for configuring and managing application logging.

    Command output owns stdout, so console logs are written to stderr. With
    ``console=False`` nothing reaches the terminal and only the log files
    (when ``log_dir`` is set) receive records.
    """

    def __init__(
        self,
        log_level: str = "WARNING",
        log_dir: Path | None = None,
        console: bool = True,
    ) -> None:
        """Initialize the logging service.

        Args:
            log_level: The minimum log level to capture
            log_dir: Directory for log files (None for no files)
            console: Whether to write log records to stderr
        """
        self.log_level = log_level.upper()
        self.log_dir = log_dir
        self.console = console
        self.is_development = os.getenv("ENVIRONMENT", "development") == "development"

    def configure(self) -> None:
        """Configure structlog with appropriate processors and handlers."""
        self._configure_stdlib_logging()

        processors = self._get_processors()

        structlog.configure(
            processors=processors,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def _configure_stdlib_logging(self) -> None:
        """Configure standard library logging handlers."""
        root_logger = logging.getLogger()
        root_logger.handlers.clear()

        numeric_level = getattr(logging, self.log_level, logging.WARNING)
        root_logger.setLevel(numeric_level)

        if self.console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(numeric_level)

            if self.is_development:
                console_formatter = logging.Formatter(
                    fmt="%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
                    datefmt="%H:%M:%S"
                )
            else:
                console_formatter = logging.Formatter("%(message)s")

            console_handler.setFormatter(console_formatter)
            root_logger.addHandler(console_handler)
        else:
            # Keeps logging's last-resort stderr handler out of the way
            root_logger.addHandler(logging.NullHandler())

        if self.log_dir:
            self._setup_file_logging(root_logger, numeric_level)

    def _setup_file_logging(self, root_logger: logging.Logger, level: int) -> None:
        """Set up file-based logging with rotation."""
        if not self.log_dir:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)

        app_log_path = self.log_dir / "trogue.log"
        file_handler = logging.handlers.RotatingFileHandler(
            filename=app_log_path,
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
            encoding="utf-8"
        )
        file_handler.setLevel(level)

        file_formatter = logging.Formatter("%(message)s")
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

        # ERROR and CRITICAL only
        error_log_path = self.log_dir / "error.log"
        error_handler = logging.handlers.RotatingFileHandler(
            filename=error_log_path,
            maxBytes=1024 * 1024,  # 1MB
            backupCount=3,
            encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(file_formatter)
        root_logger.addHandler(error_handler)

    def _get_processors(self) -> list[Any]:
        """Get the appropriate structlog processors for the environment."""
        common_processors = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        if self.is_development and not self.log_dir:
            return common_processors + [
                structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
            ]
        # Files always get JSON lines
        return common_processors + [
            structlog.processors.JSONRenderer()
        ]


def setup_logging(
    log_level: str = "WARNING",
    log_dir: Path | None = None,
    environment: str | None = None,
    console: bool = True,
) -> LoggingService:
    """Set up application logging with the specified configuration.

    Args:
        log_level: Minimum log level to capture
        log_dir: Directory for log files (None for no files)
        environment: Environment name (development/production)
        console: Whether to write log records to stderr

    Returns:
        Configured LoggingService instance
    """
    if environment:
        os.environ["ENVIRONMENT"] = environment

    service = LoggingService(log_level=log_level, log_dir=log_dir, console=console)
    service.configure()
    return service
