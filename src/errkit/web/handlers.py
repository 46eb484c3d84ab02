"""Exception handlers mapping raised errors to HTTP responses.

A ChainError raised by an endpoint is rendered from its head node with a
status looked up by code. The rest of the chain is only written to the log.
"""

from typing import Any, Dict, Mapping, Optional

from fastapi.exceptions import RequestValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse

from errkit.errors import ChainError
from errkit.logger import Logger, error_field

from .responses import error_response, internal_server_error
from .validation import error_from_pydantic

# Codes produced by errkit itself while reading requests
DEFAULT_STATUS_MAP: Dict[str, int] = {
    "invalid_param_type": 400,
    "invalid_param_value": 400,
    "invalid_content_type": 415,
    "param_is_required": 400,
    "param_length_below_minimum": 400,
    "param_length_over_maximum": 400,
    "param_is_not_present_in_enum": 400,
    "param_is_not_an_email": 400,
    "param_is_invalid": 400,
    "errors_unknown": 500,
}


def status_for(
    err: ChainError,
    status_map: Optional[Mapping[str, int]] = None,
    default_status: int = 500,
) -> int:
    """Resolve the HTTP status of an error from its head code."""
    if status_map and err.code in status_map:
        return status_map[err.code]
    return DEFAULT_STATUS_MAP.get(err.code, default_status)


def install_error_handlers(
    app: Any,
    status_map: Optional[Mapping[str, int]] = None,
    logger: Optional[Logger] = None,
    default_status: int = 500,
) -> Any:
    """Register errkit exception handlers on a Starlette or FastAPI app.

    Args:
        app: Starlette/FastAPI application
        status_map: Code to status overrides, checked before the defaults
        logger: Logger receiving the full cause chain of handled errors
        default_status: Status for codes not found in any map

    Returns:
        The same application, for chaining
    """

    async def handle_chain_error(request: Request, exc: ChainError) -> JSONResponse:
        status = status_for(exc, status_map, default_status)
        if logger:
            causes = [str(node) for node in exc.chain()][1:]
            log = logger.error if status >= 500 else logger.warning
            log(
                "Request failed",
                **error_field(exc),
                code=exc.code,
                causes=causes,
                status=status,
                path=request.url.path,
            )
        return error_response(status, exc)

    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        if not errors:
            return error_response(400, None)
        return await handle_chain_error(request, error_from_pydantic(errors[0]))

    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        if logger:
            logger.critical(
                "Unhandled exception",
                **error_field(exc),
                exception_type=type(exc).__name__,
                path=request.url.path,
            )
        return internal_server_error()

    app.add_exception_handler(ChainError, handle_chain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected)
    return app
