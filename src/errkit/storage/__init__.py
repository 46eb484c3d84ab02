"""Storage helpers for errkit applications.

Example:
    from errkit.storage import with_transaction

    def transfer(session):
        accounts.debit(session, src, amount)
        accounts.credit(session, dst, amount)

    with_transaction(client.start_session, transfer, logger=logger,
                     retry_on=[ERR_WRITE_CONFLICT], max_attempts=3)
"""

from errkit.storage.transaction import (
    ERR_COMMIT,
    ERR_START,
    Session,
    current_session,
    with_transaction,
)

__all__ = [
    "ERR_COMMIT",
    "ERR_START",
    "Session",
    "current_session",
    "with_transaction",
]
