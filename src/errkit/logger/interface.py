"""
Logger interface for errkit applications.

Abstract base class defining the logging contract that all logger
implementations must follow.
"""

from abc import ABC, abstractmethod
from typing import Any


class Logger(ABC):
    """Abstract base class for logging interface.

    Implementations attach the current tracking id (see errkit.tracking) to
    every message, and accept extra key-value pairs as structured fields.

    Example:
        logger.error("Could not save document", **error_field(err), doc_id=doc_id)
    """

    @abstractmethod
    def debug(self, message: str, **kwargs: Any) -> None:
        """Log a debug message.

        Args:
            message: The message to log
            **kwargs: Additional key-value pairs to include in the log
        """
        pass

    @abstractmethod
    def info(self, message: str, **kwargs: Any) -> None:
        """Log an info message."""
        pass

    @abstractmethod
    def warning(self, message: str, **kwargs: Any) -> None:
        """Log a warning message."""
        pass

    @abstractmethod
    def error(self, message: str, **kwargs: Any) -> None:
        """Log an error message."""
        pass

    @abstractmethod
    def critical(self, message: str, **kwargs: Any) -> None:
        """Log a critical message."""
        pass

    @abstractmethod
    def with_namespace(self, namespace: str) -> "Logger":
        """Return a logger sharing this one's output, tagged with ``namespace``.

        Args:
            namespace: Component name added to every record (e.g. "storage")
        """
        pass
