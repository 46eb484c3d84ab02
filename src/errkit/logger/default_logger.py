"""
Default logger implementation with tracking ids.

A simple logger that writes to stderr with timestamps and the tracking id of
the current context. Suitable for development and tests.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

from errkit.tracking import get_tracking_id

from .interface import Logger


def resolve_level(level: str, default: int = logging.INFO) -> int:
    """Map a level name such as "warning" to its logging number."""
    number = logging.getLevelName(level.upper())
    return number if isinstance(number, int) else default


class DefaultLogger(Logger):
    """Default logger implementation with tracking ids.

    Example:
        logger = DefaultLogger()
        logger.info("Application started")
        logger.error("Something failed", error="not found")
    """

    def __init__(
        self,
        name: str = "errkit",
        output: Optional[TextIO] = None,
        include_timestamp: bool = True,
        namespace: Optional[str] = None,
        level: str = "DEBUG",
    ):
        """Initialize the default logger.

        Args:
            name: Logger name (included in output for identification)
            output: Output stream (default: stderr)
            include_timestamp: Whether to include timestamps in log messages
            namespace: Optional component name
            level: Minimum level written (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        self._name = name
        self._output = output
        self._include_timestamp = include_timestamp
        self._namespace = namespace
        self._level = resolve_level(level, logging.DEBUG)

    def with_namespace(self, namespace: str) -> "DefaultLogger":
        return DefaultLogger(
            name=self._name,
            output=self._output,
            include_timestamp=self._include_timestamp,
            namespace=namespace,
            level=logging.getLevelName(self._level),
        )

    def _format_message(self, level: str, message: str, **kwargs: Any) -> str:
        """Format a log message with tracking id and optional timestamp."""
        parts = []

        if self._include_timestamp:
            parts.append(datetime.now(timezone.utc).isoformat())

        parts.append(f"[{level}]")
        parts.append(f"[{self._name}]")
        if self._namespace:
            parts.append(f"[{self._namespace}]")

        tracking_id = get_tracking_id()
        if tracking_id:
            parts.append(f"[tracking:{tracking_id}]")
        parts.append(message)

        if kwargs:
            extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
            parts.append(f"({extra})")

        return " ".join(parts)

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        if resolve_level(level) < self._level:
            return
        formatted = self._format_message(level, message, **kwargs)
        print(formatted, file=self._output or sys.stderr, flush=True)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log("ERROR", message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log("CRITICAL", message, **kwargs)
