"""Code-tagged error chains for errkit applications.

Every error carries structured information:
- code: Machine-readable error identifier
- message: Human-readable error description
- cause: Optional wrapped error, forming a chain

Usage:
    from errkit.errors import new, new_with_cause, is_error, one_of, is_only

    ERR_NOT_FOUND = new("Document not found", "document_not_found")

    try:
        load(doc_id)
    except KeyError as e:
        raise new_with_cause("Could not load document", "load_failed", e)

    if one_of(err, ERR_NOT_FOUND, ERR_EXPIRED):
        ...
"""

from errkit.errors.base import (
    UNKNOWN,
    ChainError,
    Matcher,
    is_error,
    is_only,
    new,
    new_with_cause,
    one_of,
    unwrap,
)
from errkit.errors.params import (
    INVALID_CONTENT_TYPE,
    LIBRARY_ERROR,
    invalid_array_param,
    invalid_bool_param,
    invalid_number_param,
    invalid_string_param,
)

__all__ = [
    # Core
    "ChainError",
    "Matcher",
    "UNKNOWN",
    "new",
    "new_with_cause",
    "unwrap",
    "is_error",
    "one_of",
    "is_only",
    # Request parameters
    "INVALID_CONTENT_TYPE",
    "LIBRARY_ERROR",
    "invalid_string_param",
    "invalid_bool_param",
    "invalid_number_param",
    "invalid_array_param",
]
