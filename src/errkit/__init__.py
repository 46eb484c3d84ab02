"""errkit - Code-tagged error chains and the glue that consumes them.

This package provides:
- errors: ChainError nodes with message, code and wrapped cause
- tracking: Correlation ids that travel beside errors
- logger: Structured logging with tracking ids and error fields
- config: Typed settings read from the environment and .env files
- web: Response rendering, error handlers and middleware for FastAPI/Starlette
- storage: Transaction helper deciding commit, abort or retry
"""

__version__ = "1.0.0"

from errkit.errors import (
    UNKNOWN,
    ChainError,
    is_error,
    is_only,
    new,
    new_with_cause,
    one_of,
    unwrap,
)

from errkit.tracking import (
    get_tracking_id,
    tracking_scope,
)

from errkit.logger import (
    Logger,
    DefaultLogger,
    StructuredLogger,
    error_field,
    get_logger,
    create_logger,
)

from errkit.config import (
    Settings,
    get_settings,
    reset_settings,
)

__all__ = [
    "__version__",
    # Errors
    "ChainError",
    "UNKNOWN",
    "new",
    "new_with_cause",
    "unwrap",
    "is_error",
    "one_of",
    "is_only",
    # Tracking
    "get_tracking_id",
    "tracking_scope",
    # Logger
    "Logger",
    "DefaultLogger",
    "StructuredLogger",
    "error_field",
    "get_logger",
    "create_logger",
    # Config
    "Settings",
    "get_settings",
    "reset_settings",
]
