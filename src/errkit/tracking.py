"""Request tracking context.

Carries a correlation identifier across sync and async boundaries. The id
travels beside errors (in log records and response headers) and is never
stored inside an error.

Usage:
    from errkit.tracking import tracking_scope, get_tracking_id

    with tracking_scope() as tracking_id:
        handle(request)
        logger.info("done")  # record carries tracking_id
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Iterator, Optional

# Context variable for storing the tracking id across async boundaries
_tracking_id_context: ContextVar[str] = ContextVar("tracking_id", default="")


def new_tracking_id() -> str:
    """Generate a fresh tracking id."""
    return str(uuid.uuid4())


def get_tracking_id() -> str:
    """Get the tracking id of the current context.

    Returns:
        The tracking id, or empty string if none was set.
    """
    return _tracking_id_context.get()


def set_tracking_id(value: Optional[str] = None) -> Token:
    """Set the tracking id in the current context.

    Args:
        value: Tracking id to use. A new one is generated when empty.

    Returns:
        Token for resetting the context later
    """
    return _tracking_id_context.set(value or new_tracking_id())


def reset_tracking_id(token: Token) -> None:
    """Reset the tracking id to its previous value.

    Args:
        token: The token returned from set_tracking_id
    """
    _tracking_id_context.reset(token)


@contextmanager
def tracking_scope(tracking_id: Optional[str] = None) -> Iterator[str]:
    """Run a block with a tracking id, restoring the previous one afterwards.

    Args:
        tracking_id: Id to propagate (e.g. from an incoming header).
            A new one is generated when not provided.

    Yields:
        The tracking id in effect inside the block
    """
    token = set_tracking_id(tracking_id)
    try:
        yield _tracking_id_context.get()
    finally:
        reset_tracking_id(token)


__all__ = [
    "new_tracking_id",
    "get_tracking_id",
    "set_tracking_id",
    "reset_tracking_id",
    "tracking_scope",
]
