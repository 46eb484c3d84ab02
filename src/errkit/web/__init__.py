"""HTTP boundary for errkit services.

Renders error chains as responses, propagates tracking ids and parses
common request inputs into classified errors.
"""

from errkit.web.app import create_app
from errkit.web.handlers import (
    DEFAULT_STATUS_MAP,
    install_error_handlers,
    status_for,
)
from errkit.web.middleware import (
    DEFAULT_TRACKING_HEADER,
    RequestLoggingMiddleware,
    TrackingIDMiddleware,
)
from errkit.web.paging import Page, PageFilter, Paging, page_filter
from errkit.web.responses import (
    HTTP_PAGE_EXPIRED,
    bad_request,
    created,
    error_body,
    error_response,
    forbidden,
    found,
    internal_server_error,
    no_content,
    not_found,
    ok,
    page_expired,
    request_entity_too_large,
    too_early,
    unauthorized,
)
from errkit.web.validation import error_from_pydantic, validate_payload

__all__ = [
    # Responses
    "HTTP_PAGE_EXPIRED",
    "error_body",
    "error_response",
    "ok",
    "created",
    "no_content",
    "found",
    "bad_request",
    "not_found",
    "unauthorized",
    "forbidden",
    "too_early",
    "request_entity_too_large",
    "page_expired",
    "internal_server_error",
    # Handlers
    "DEFAULT_STATUS_MAP",
    "install_error_handlers",
    "status_for",
    # Middleware
    "DEFAULT_TRACKING_HEADER",
    "TrackingIDMiddleware",
    "RequestLoggingMiddleware",
    # Paging
    "PageFilter",
    "Paging",
    "Page",
    "page_filter",
    # Validation
    "validate_payload",
    "error_from_pydantic",
    # App factory
    "create_app",
]
