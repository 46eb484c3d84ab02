"""Helpers building structured log fields."""

from typing import Any, Dict, Optional


def error_field(err: Optional[BaseException]) -> Dict[str, Any]:
    """Attach an error to a log line as a single ``error`` field.

    The error is treated as opaque: only its text is used, the cause chain
    is not inspected.

    Example:
        logger.error("Transaction failed", **error_field(err))
    """
    if err is None:
        return {}
    return {"error": str(err)}


def reference_id(value: str) -> Dict[str, Any]:
    """Generic reference used to correlate a log line with a business entity."""
    return {"reference_id": value}


def user_id(value: str) -> Dict[str, Any]:
    return {"user_id": value}
