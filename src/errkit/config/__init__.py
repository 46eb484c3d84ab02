"""Configuration Module for errkit Applications

Provides typed configuration with environment variable and .env support.

Example:
    from errkit.config import get_settings

    settings = get_settings(prefix="BILLING")
    settings.transaction.max_attempts
"""

from errkit.config.env_loader import EnvLoader
from errkit.config.settings import (
    LogSettings,
    Settings,
    TransactionSettings,
    WebSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "EnvLoader",
    "LogSettings",
    "WebSettings",
    "TransactionSettings",
    "Settings",
    "get_settings",
    "reset_settings",
]
