"""Common middleware for errkit web servers.

Provides ASGI middleware for request tracking and request logging.
"""

import time
from typing import Any, Optional

from errkit.tracking import get_tracking_id, reset_tracking_id, set_tracking_id

DEFAULT_TRACKING_HEADER = "X-Tracking-Id"


class TrackingIDMiddleware:
    """ASGI middleware that runs each request inside a tracking scope.

    The tracking id is read from the request header (a new one is generated
    when absent) and echoed back in the response headers, so that log lines
    and client reports can be correlated.

    Example:
        app = Starlette(routes=[...])
        app.add_middleware(TrackingIDMiddleware, header_name="X-Request-Id")
    """

    def __init__(self, app: Any, header_name: str = DEFAULT_TRACKING_HEADER) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application to wrap
            header_name: Header carrying the tracking id
        """
        self.app = app
        self.header_name = header_name
        self._header_key = header_name.lower().encode("latin-1")

    async def __call__(self, scope: dict, receive: Any, send: Any) -> None:
        if scope["type"] != "http":
            # Pass through non-HTTP requests (websocket, lifespan, etc.)
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        incoming = headers.get(self._header_key, b"").decode("latin-1").strip()

        token = set_tracking_id(incoming)
        tracking_id = get_tracking_id()

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                response_headers = list(message.get("headers", []))
                response_headers.append((self._header_key, tracking_id.encode("latin-1")))
                message = {**message, "headers": response_headers}
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            reset_tracking_id(token)


class RequestLoggingMiddleware:
    """Middleware to log incoming requests.

    Logs request method, path, response status and timing information.

    Example:
        from errkit.logger import get_logger

        app.add_middleware(RequestLoggingMiddleware, logger=get_logger("billing"))
    """

    def __init__(self, app: Any, logger: Optional[Any] = None) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application to wrap
            logger: Logger instance (must have info method)
        """
        self.app = app
        self.logger = logger

    async def __call__(self, scope: dict, receive: Any, send: Any) -> None:
        if scope["type"] != "http" or not self.logger:
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "/")
        start_time = time.perf_counter()
        response_status = 0

        async def send_wrapper(message: dict) -> None:
            nonlocal response_status
            if message["type"] == "http.response.start":
                response_status = message.get("status", 0)
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self.logger.info(
                f"{method} {path}",
                status=response_status,
                duration_ms=round(duration_ms, 2),
            )
