"""
Structured logger with JSON output and file support.

A production-ready logger that supports JSON formatting for log aggregation
systems and optional file output. Every record carries the tracking id of
the current context.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional

from errkit.tracking import get_tracking_id

from .interface import Logger

# LogRecord attributes that are not user supplied fields
_RESERVED_KEYS = {
    "args", "asctime", "created", "exc_info", "exc_text", "filename",
    "funcName", "levelname", "levelno", "lineno", "module",
    "msecs", "message", "msg", "name", "pathname", "process",
    "processName", "relativeCreated", "stack_info", "thread",
    "threadName", "taskName",
}


class JsonFormatter(logging.Formatter):
    """JSON formatter for logging records.

    Formats log records as JSON objects suitable for ingestion by
    log aggregation systems like ELK, Splunk, or CloudWatch.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "message": record.getMessage(),
            "logger": record.name,
        }

        tracking_id = getattr(record, "tracking_id", None)
        if tracking_id:
            log_data["tracking_id"] = str(tracking_id)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_KEYS and key != "tracking_id":
                log_data[key] = value

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Text formatter that appends extra kwargs to the message."""

    def format(self, record: logging.LogRecord) -> str:
        s = super().format(record)

        extra_args = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_KEYS and key != "tracking_id"
        }
        if extra_args:
            s += " " + " ".join(f"{k}={v}" for k, v in extra_args.items())

        return s


class StructuredLogger(Logger):
    """Logger implementation with structured JSON logging and file output.

    Example:
        # Development mode (text output)
        logger = StructuredLogger(name="billing")

        # Production mode (JSON output to file)
        logger = StructuredLogger(
            name="billing",
            json_format=True,
            log_file="/var/log/billing.log"
        )

        logger.error("Charge failed", **error_field(err), invoice_id="abc123")
    """

    def __init__(
        self,
        name: str = "errkit",
        level: int = logging.INFO,
        log_file: Optional[str] = None,
        json_format: bool = False,
    ):
        """Initialize the structured logger.

        Args:
            name: Logger name
            level: Logging level (logging.DEBUG, logging.INFO, etc.)
            log_file: Optional file path for log output
            json_format: If True, output logs as JSON; otherwise use text format
        """
        self._name = name
        self._namespace: Optional[str] = None
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)

        # Clear existing handlers to avoid duplication if re-initialized
        if self._logger.hasHandlers():
            self._logger.handlers.clear()

        self._logger.propagate = False

        if json_format:
            formatter: logging.Formatter = JsonFormatter()
        else:
            formatter = TextFormatter(
                "%(asctime)s [%(levelname)s] [%(name)s] [tracking:%(tracking_id)s] %(message)s"
            )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        self._logger.addHandler(console_handler)

        if log_file:
            try:
                file_handler = logging.FileHandler(log_file)
                file_handler.setFormatter(formatter)
                self._logger.addHandler(file_handler)
            except OSError as e:
                # Fallback to console if file cannot be opened
                print(f"Failed to setup log file {log_file}: {e}", file=sys.stderr)

    def with_namespace(self, namespace: str) -> "StructuredLogger":
        """Return a logger writing through the same handlers, tagged with ``namespace``."""
        child = StructuredLogger.__new__(StructuredLogger)
        child._name = self._name
        child._namespace = namespace
        child._logger = self._logger
        return child

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        """Internal logging method with extra kwargs handling."""
        extra = {"tracking_id": get_tracking_id() or "-"}
        if self._namespace:
            extra["namespace"] = self._namespace

        for k, v in kwargs.items():
            if k not in _RESERVED_KEYS and k != "tracking_id":
                extra[k] = v
            else:
                # Prefix reserved keys to preserve them but avoid collision
                extra[f"_{k}"] = v

        self._logger.log(level, message, extra=extra)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, **kwargs)
