"""FastAPI application factory for errkit services.

Creates an application with tracking, request logging and error handlers
already wired.
"""

from typing import Any, Callable, List, Mapping, Optional

from fastapi import FastAPI

from errkit.config import Settings, get_settings
from errkit.logger import Logger

from .handlers import install_error_handlers
from .middleware import RequestLoggingMiddleware, TrackingIDMiddleware


def create_app(
    routes: Optional[List[Any]] = None,
    lifespan: Optional[Callable] = None,
    status_map: Optional[Mapping[str, int]] = None,
    logger: Optional[Logger] = None,
    settings: Optional[Settings] = None,
    debug: bool = False,
) -> FastAPI:
    """Create a FastAPI application with common errkit configuration.

    Args:
        routes: List of Route objects
        lifespan: Lifespan context manager for startup/shutdown
        status_map: Error code to HTTP status overrides
        logger: Logger for requests and handled errors
        settings: Settings (default: get_settings())
        debug: Enable debug mode

    Returns:
        FastAPI application with middleware and error handlers applied

    Example:
        app = create_app(
            status_map={"document_not_found": 404},
            logger=get_logger("documents"),
        )

        @app.get("/documents/{doc_id}")
        async def get_document(doc_id: str):
            raise ERR_NOT_FOUND
    """
    settings = settings or get_settings()

    app = FastAPI(debug=debug, routes=routes or None, lifespan=lifespan)

    # Added last so it runs first: the tracking id is set before logging
    if logger:
        app.add_middleware(RequestLoggingMiddleware, logger=logger)  # type: ignore[arg-type]
    app.add_middleware(
        TrackingIDMiddleware,  # type: ignore[arg-type]
        header_name=settings.web.tracking_header,
    )

    install_error_handlers(
        app,
        status_map=status_map,
        logger=logger,
        default_status=settings.web.default_error_status,
    )
    return app
