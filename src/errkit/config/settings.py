"""Dataclass-based Settings for errkit applications

Provides typed configuration with environment variable support.
All settings classes accept a parameterized prefix for project-specific configuration.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional

from errkit.config.env_loader import EnvLoader

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _load_env(prefix: str, env: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return env if env is not None else EnvLoader(prefix).load()


@dataclass
class LogSettings:
    """Logging configuration

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Emit JSON records instead of text
        log_file: Optional file to write records to
    """

    level: str = "INFO"
    json_format: bool = False
    log_file: Optional[str] = None

    @classmethod
    def from_env(
        cls, prefix: str = "ERRKIT", env: Optional[Mapping[str, str]] = None
    ) -> "LogSettings":
        """Load logging settings from environment variables

        Environment variables:
            {prefix}_LOG_LEVEL: Logging level
            {prefix}_LOG_JSON: "true" for JSON output
            {prefix}_LOG_FILE: Log file path
        """
        env = _load_env(prefix, env)
        return cls(
            level=env.get(f"{prefix}_LOG_LEVEL", "INFO").upper(),
            json_format=env.get(f"{prefix}_LOG_JSON", "false").lower() in _TRUE_VALUES,
            log_file=env.get(f"{prefix}_LOG_FILE") or None,
        )


@dataclass
class WebSettings:
    """HTTP boundary configuration

    Attributes:
        tracking_header: Request/response header carrying the tracking id
        default_error_status: Status used for error codes with no explicit mapping
    """

    tracking_header: str = "X-Tracking-Id"
    default_error_status: int = 500

    def __post_init__(self):
        if not 400 <= self.default_error_status <= 599:
            raise ValueError(
                f"default_error_status must be an HTTP error status, got {self.default_error_status}"
            )

    @classmethod
    def from_env(
        cls, prefix: str = "ERRKIT", env: Optional[Mapping[str, str]] = None
    ) -> "WebSettings":
        """Load web settings from environment variables

        Environment variables:
            {prefix}_TRACKING_HEADER: Tracking id header name
            {prefix}_DEFAULT_ERROR_STATUS: Fallback error status
        """
        env = _load_env(prefix, env)
        return cls(
            tracking_header=env.get(f"{prefix}_TRACKING_HEADER", "X-Tracking-Id"),
            default_error_status=int(env.get(f"{prefix}_DEFAULT_ERROR_STATUS", "500")),
        )


@dataclass
class TransactionSettings:
    """Transaction helper configuration

    Attributes:
        max_attempts: How many times a transaction runs when it fails with a
            retryable error (1 disables retries)
    """

    max_attempts: int = 1

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")

    @classmethod
    def from_env(
        cls, prefix: str = "ERRKIT", env: Optional[Mapping[str, str]] = None
    ) -> "TransactionSettings":
        """Load transaction settings from environment variables

        Environment variables:
            {prefix}_TX_MAX_ATTEMPTS: Attempts for retryable failures
        """
        env = _load_env(prefix, env)
        return cls(max_attempts=int(env.get(f"{prefix}_TX_MAX_ATTEMPTS", "1")))


@dataclass
class Settings:
    """Complete application settings

    Attributes:
        log: Logging settings
        web: HTTP boundary settings
        transaction: Transaction helper settings
        prefix: Environment variable prefix used
    """

    log: LogSettings = field(default_factory=LogSettings)
    web: WebSettings = field(default_factory=WebSettings)
    transaction: TransactionSettings = field(default_factory=TransactionSettings)
    prefix: str = "ERRKIT"

    @classmethod
    def from_env(
        cls, prefix: str = "ERRKIT", env: Optional[Mapping[str, str]] = None
    ) -> "Settings":
        """Load complete settings from environment variables (and .env)"""
        env = _load_env(prefix, env)
        return cls(
            log=LogSettings.from_env(prefix, env),
            web=WebSettings.from_env(prefix, env),
            transaction=TransactionSettings.from_env(prefix, env),
            prefix=prefix,
        )


# Global settings storage per prefix
_global_settings: dict[str, Settings] = {}


def get_settings(prefix: str = "ERRKIT", reload: bool = False) -> Settings:
    """
    Get or create settings instance for a given prefix

    Args:
        prefix: Environment variable prefix
        reload: If True, reload settings from environment

    Returns:
        Settings instance for the given prefix
    """
    if prefix not in _global_settings or reload:
        _global_settings[prefix] = Settings.from_env(prefix=prefix)

    return _global_settings[prefix]


def reset_settings(prefix: Optional[str] = None) -> None:
    """Reset settings (primarily for testing)

    Args:
        prefix: Specific prefix to reset, or None to reset all
    """
    if prefix:
        _global_settings.pop(prefix, None)
    else:
        _global_settings.clear()
