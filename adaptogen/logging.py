"""
Structured logging for adaptogen.

Library modules log through ``logging.getLogger(__name__)`` and never
install handlers themselves. Applications (and the CLI) call
``AdaptogenLogger.configure`` to route those records through Rich.
"""
from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

PROJECT_LOGGER = "adaptogen"

# Kept at WARNING even in verbose mode
THIRD_PARTY_LOGGERS = [
    "markdown_it",  # markdown-it-py used by rich
]


def _make_handler(console: Console) -> RichHandler:
    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True
    )
    handler.setFormatter(logging.Formatter(
        fmt="%(message)s",
        datefmt="[%X]"
    ))
    return handler


class StructuredLogger:
    """Structured logger with Rich console integration."""

    def __init__(self, name: str, level: str = "INFO"):
        """
        Initialize structured logger.

        Records propagate to the root logger, so output goes wherever
        ``AdaptogenLogger.configure`` pointed it.

        Args:
            name: Logger name
            level: Logging level
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))

    def _format_message(self, message: str, extra: Optional[Dict[str, Any]] = None) -> str:
        """Format message with extra data appended as JSON."""
        if extra:
            return f"{message} | {json.dumps(extra, default=str)}"
        return message

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log debug message."""
        self.logger.debug(self._format_message(message, extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log info message."""
        self.logger.info(self._format_message(message, extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log warning message."""
        self.logger.warning(self._format_message(message, extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None,
              exc_info: bool = False) -> None:
        """Log error message."""
        self.logger.error(self._format_message(message, extra), exc_info=exc_info)

    @contextmanager
    def operation(self, operation_name: str, extra: Optional[Dict[str, Any]] = None):
        """
        Context manager for timing operations.

        Failures are logged at DEBUG and re-raised; the caller decides how
        to report them.

        Args:
            operation_name: Name of the operation
            extra: Additional data to log
        """
        start_time = time.time()
        self.debug(f"Starting operation: {operation_name}", extra)

        try:
            yield
        except Exception as e:
            duration = time.time() - start_time
            self.debug(
                f"Failed operation: {operation_name}",
                {
                    "duration_ms": round(duration * 1000, 2),
                    "error": str(e),
                    "error_type": type(e).__name__,
                    **(extra or {})
                }
            )
            raise

        duration = time.time() - start_time
        self.debug(
            f"Completed operation: {operation_name}",
            {"duration_ms": round(duration * 1000, 2), **(extra or {})}
        )


class AdaptogenLogger:
    """Centralized logger for adaptogen applications."""

    _instance: Optional[StructuredLogger] = None

    @classmethod
    def get_logger(cls, level: str = "INFO") -> StructuredLogger:
        """
        Get or create the global structured logger.

        Args:
            level: Logging level

        Returns:
            StructuredLogger instance
        """
        if cls._instance is None:
            cls._instance = StructuredLogger(PROJECT_LOGGER, level)
        return cls._instance

    @classmethod
    def configure(cls, level: str = "INFO", console: Optional[Console] = None) -> None:
        """
        Configure the project logger and the root logger.

        Args:
            level: Logging level for adaptogen loggers (INFO or DEBUG)
            console: Rich console, stderr by default
        """
        _console = console or Console(stderr=True)

        if cls._instance:
            cls._instance.logger.setLevel(getattr(logging, level.upper()))
        else:
            cls._instance = StructuredLogger(PROJECT_LOGGER, level)

        # Root stays at WARNING so third-party libraries stay quiet
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.WARNING)
        root_logger.handlers.clear()
        root_logger.addHandler(_make_handler(_console))

        project_logger = logging.getLogger(PROJECT_LOGGER)
        project_logger.setLevel(getattr(logging, level.upper()))
        project_logger.handlers.clear()
        project_logger.propagate = True

        for logger_name in THIRD_PARTY_LOGGERS:
            third_party_logger = logging.getLogger(logger_name)
            third_party_logger.setLevel(logging.WARNING)
            third_party_logger.propagate = True

    @classmethod
    def reset(cls) -> None:
        """Drop the global logger instance."""
        cls._instance = None
