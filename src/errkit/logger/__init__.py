"""
errkit Logger Module

Provides a logging interface with tracking-id propagation, structured output,
and optional JSON formatting.

Usage:
    from errkit.logger import get_logger, create_logger, error_field

    logger = get_logger("billing")
    logger.info("Application started")

    logger = create_logger(name="billing", level=logging.DEBUG, json_format=True)
    logger.error("Charge failed", **error_field(err))

Settings (errkit.config.LogSettings, read from the environment and .env):
    {PREFIX}_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    {PREFIX}_LOG_FILE: Optional file path for log output
    {PREFIX}_LOG_JSON: Set to "true" for JSON output format

    Where {PREFIX} is derived from the logger name (e.g., BILLING_API for "billing-api")
"""

from typing import Optional

from errkit.config.settings import LogSettings, get_settings

from .default_logger import DefaultLogger, resolve_level
from .fields import error_field, reference_id, user_id
from .interface import Logger
from .structured_logger import JsonFormatter, StructuredLogger, TextFormatter


def settings_prefix(name: str) -> str:
    """Settings prefix owning a logger name ("billing-api" -> "BILLING_API")."""
    return name.upper().replace("-", "_").replace(".", "_")


def create_logger(
    name: str = "errkit",
    level: Optional[int] = None,
    log_file: Optional[str] = None,
    json_format: Optional[bool] = None,
    settings: Optional[LogSettings] = None,
) -> Logger:
    """Create a StructuredLogger.

    Arguments left as None come from ``settings``, which default to
    ``LogSettings.from_env(settings_prefix(name))`` (environment and .env).

    Args:
        name: Logger name
        level: Logging level (logging.DEBUG, logging.INFO, ...)
        log_file: Optional file path for log output
        json_format: If True, output logs as JSON
        settings: Logging settings to fall back on
    """
    if settings is None:
        settings = LogSettings.from_env(settings_prefix(name))

    return StructuredLogger(
        name=name,
        level=level if level is not None else resolve_level(settings.level),
        log_file=log_file if log_file is not None else settings.log_file,
        json_format=json_format if json_format is not None else settings.json_format,
    )


def get_logger(name: str = "errkit") -> Logger:
    """Get a logger configured by the cached settings of its prefix.

    Settings are read once per prefix through ``errkit.config.get_settings``;
    call ``reset_settings`` to pick up changed variables.
    """
    return create_logger(name=name, settings=get_settings(settings_prefix(name)).log)


__all__ = [
    # Interface
    "Logger",
    # Implementations
    "DefaultLogger",
    "StructuredLogger",
    # Formatters (for custom use)
    "JsonFormatter",
    "TextFormatter",
    # Fields
    "error_field",
    "reference_id",
    "user_id",
    # Factory functions
    "create_logger",
    "get_logger",
    "resolve_level",
    "settings_prefix",
]
