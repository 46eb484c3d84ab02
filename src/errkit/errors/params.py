"""Errors raised while reading request parameters.

Each factory returns a terminal node so handlers can classify on the code:
- invalid_param_type: the value cannot be parsed as the expected type
- invalid_param_value: the value has the right type but is not acceptable
"""

from errkit.errors.base import ChainError, new

INVALID_CONTENT_TYPE = new("invalid content type", "invalid_content_type")

# Used when a third-party library reports something we cannot classify
LIBRARY_ERROR = new("unexpected library behaviour", "internal_library_error")


def invalid_string_param(name: str) -> ChainError:
    return new(f"'{name}' must be a valid string", "invalid_param_type")


def invalid_bool_param(name: str) -> ChainError:
    return new(f"'{name}' must be a valid bool value (true or false)", "invalid_param_type")


def invalid_number_param(name: str) -> ChainError:
    return new(f"'{name}' must be a valid number", "invalid_param_type")


def invalid_array_param(name: str) -> ChainError:
    return new(f"'{name}' is not valid", "invalid_param_value")
