"""Payload validation producing classified errors.

Validation is delegated to pydantic; the first reported failure is turned
into a ChainError whose code tells the client which rule was broken.
"""

from typing import Any, Dict, Sequence, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from errkit.errors import LIBRARY_ERROR, ChainError, new

ModelT = TypeVar("ModelT", bound=BaseModel)

# Leading loc entries added by FastAPI request validation
_REQUEST_SOURCES = {"body", "query", "path", "header", "cookie"}


def _field_name(loc: Sequence[Any]) -> str:
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in _REQUEST_SOURCES:
        parts = parts[1:]
    return ".".join(parts)


def error_from_pydantic(error: Dict[str, Any]) -> ChainError:
    """Translate one pydantic error entry into a ChainError.

    Args:
        error: An item of ``ValidationError.errors()`` (or FastAPI's
            ``RequestValidationError.errors()``)
    """
    field = _field_name(error.get("loc", ()))
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}

    if kind == "missing":
        return new(f"'{field}' is required", "param_is_required")
    if kind in ("string_too_short", "too_short"):
        limit = ctx.get("min_length", "")
        return new(f"'{field}' has a minimum length of {limit}", "param_length_below_minimum")
    if kind in ("string_too_long", "too_long"):
        limit = ctx.get("max_length", "")
        return new(f"'{field}' has a maximum length of {limit}", "param_length_over_maximum")
    if kind in ("literal_error", "enum"):
        return new(f"'{field}' must be one of: {ctx.get('expected', '')}", "param_is_not_present_in_enum")
    if kind == "value_error" and "email address" in str(error.get("msg", "")):
        return new(f"'{field}' must be a valid email address", "param_is_not_an_email")
    return new(f"'{field}' is invalid: {error.get('msg', kind)}", "param_is_invalid")


def validate_payload(model: Type[ModelT], data: Any) -> ModelT:
    """Validate ``data`` against a pydantic model.

    Args:
        model: Pydantic model class
        data: Decoded payload (typically a dict from JSON)

    Returns:
        The validated model instance

    Raises:
        ChainError: Describing the first validation failure
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        errors = e.errors()
        if not errors:
            raise LIBRARY_ERROR.wrap(e) from e
        raise error_from_pydantic(errors[0]) from e
