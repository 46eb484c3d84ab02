"""Response helpers for the HTTP boundary.

Error responses render only the head node of a chain:

    {"description": "<message>", "code": "<code>"}

Interior causes never reach the client. The status code is always chosen
by the caller.
"""

from typing import Any, Dict, Optional

from starlette.responses import JSONResponse, RedirectResponse, Response

from errkit.errors import ChainError

# Non-standard status used by some clients for an expired page/session
HTTP_PAGE_EXPIRED = 419


def error_body(err: Optional[BaseException]) -> Dict[str, str]:
    """Build the response body for an error.

    Args:
        err: Error to render. Only a ChainError contributes code and message;
            anything else renders empty fields.

    Returns:
        Dict with description and code keys
    """
    if isinstance(err, ChainError):
        return err.to_dict()
    return {"description": "", "code": ""}


def error_response(status_code: int, err: Optional[BaseException]) -> JSONResponse:
    """Create an error response with the head node of ``err``."""
    return JSONResponse(error_body(err), status_code=status_code)


def ok(data: Any) -> JSONResponse:
    return JSONResponse(data, status_code=200)


def created(data: Any) -> JSONResponse:
    return JSONResponse(data, status_code=201)


def no_content() -> Response:
    return Response(status_code=204)


def found(redirect_url: str) -> RedirectResponse:
    return RedirectResponse(redirect_url, status_code=302)


def bad_request(err: Optional[BaseException]) -> JSONResponse:
    return error_response(400, err)


def not_found(err: Optional[BaseException]) -> JSONResponse:
    return error_response(404, err)


def unauthorized(err: Optional[BaseException]) -> JSONResponse:
    """Authenticated caller lacking rights; rendered as 403 like forbidden()."""
    return error_response(403, err)


def forbidden() -> JSONResponse:
    return error_response(403, None)


def too_early(err: Optional[BaseException]) -> JSONResponse:
    return error_response(425, err)


def request_entity_too_large() -> JSONResponse:
    return error_response(413, None)


def page_expired() -> JSONResponse:
    return error_response(HTTP_PAGE_EXPIRED, None)


def internal_server_error() -> JSONResponse:
    return error_response(500, None)
