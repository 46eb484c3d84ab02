"""Transaction helper.

Runs a unit of work inside a session transaction, committing on success and
aborting on failure. Failures matching a retryable error are run again up to
``max_attempts`` times. Nested calls reuse the enclosing transaction.
"""

from contextvars import ContextVar
from typing import Callable, Optional, Protocol, Sequence, TypeVar

from errkit.config import get_settings
from errkit.errors import new, one_of
from errkit.logger import Logger, error_field

T = TypeVar("T")

ERR_START = new("could not start transaction", "transaction_start_failed")
ERR_COMMIT = new("could not commit transaction", "transaction_commit_failed")


class Session(Protocol):
    """Minimal session contract needed to drive a transaction."""

    def start_transaction(self) -> None:
        ...

    def commit_transaction(self) -> None:
        ...

    def abort_transaction(self) -> None:
        ...

    def end_session(self) -> None:
        ...


# Session of the transaction running in the current context, if any
_current_session: ContextVar[Optional[Session]] = ContextVar("current_session", default=None)


def current_session() -> Optional[Session]:
    """Return the session of the enclosing transaction, or None outside one."""
    return _current_session.get()


def _abort(session: Session, logger: Optional[Logger]) -> None:
    try:
        session.abort_transaction()
    except Exception as e:
        # Logged only; the caller re-raises the unit-of-work error
        if logger:
            logger.error("Couldn't rollback transaction", **error_field(e))


def _run_once(
    session: Session, fn: Callable[[Session], T], logger: Optional[Logger]
) -> T:
    try:
        session.start_transaction()
    except Exception as e:
        if logger:
            logger.error("Couldn't start transaction", **error_field(e))
        raise ERR_START.wrap(e) from e

    token = _current_session.set(session)
    try:
        result = fn(session)
    except BaseException as e:
        if logger and isinstance(e, Exception):
            logger.error("An error occurred while executing transaction", **error_field(e))
        _abort(session, logger)
        raise
    finally:
        _current_session.reset(token)

    try:
        session.commit_transaction()
    except Exception as e:
        if logger:
            logger.error("Couldn't commit transaction", **error_field(e))
        raise ERR_COMMIT.wrap(e) from e

    return result


def with_transaction(
    session_factory: Callable[[], Session],
    fn: Callable[[Session], T],
    logger: Optional[Logger] = None,
    retry_on: Sequence[BaseException] = (),
    max_attempts: Optional[int] = None,
) -> T:
    """Run ``fn`` inside a transaction.

    Args:
        session_factory: Creates the session used for this transaction
        fn: Unit of work, called with the session
        logger: Logger for transaction failures
        retry_on: Errors that make a failed attempt worth retrying; matched
            anywhere in the raised chain
        max_attempts: Total attempts for retryable failures; defaults to
            ``get_settings().transaction.max_attempts`` (ERRKIT_TX_MAX_ATTEMPTS)

    Returns:
        Whatever ``fn`` returns

    Raises:
        ChainError: transaction_start_failed / transaction_commit_failed,
            wrapping the driver error
        Exception: Any error raised by ``fn`` once retries are exhausted
    """
    if max_attempts is None:
        max_attempts = get_settings().transaction.max_attempts
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    outer = _current_session.get()
    if outer is not None:
        return fn(outer)

    attempt = 1
    while True:
        session = session_factory()
        try:
            return _run_once(session, fn, logger)
        except Exception as e:
            if attempt >= max_attempts or not one_of(e, *retry_on):
                raise
            if logger:
                logger.warning(
                    "Retrying transaction",
                    **error_field(e),
                    attempt=attempt,
                    max_attempts=max_attempts,
                )
            attempt += 1
        finally:
            session.end_session()
