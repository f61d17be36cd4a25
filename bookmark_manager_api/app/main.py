"""
Main entrypoint for the Bookmark Manager API.

This module assembles the FastAPI application, sets up logging, CORS
and error handlers, and includes the versioned router.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Run it with uvicorn
or another ASGI server, e.g.::

    uvicorn bookmark_manager_api.app.main:app --reload

Errors are reported in the same envelope as successful responses:
``{"success": false, "error": ..., "details": [...]}``.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.errors import NotFoundError, ValidationError, details_from_pydantic
from .core.logging_config import setup_logging
from .services.bookmark_service import BookmarkService


logger = logging.getLogger(__name__)


def validation_error_response(details) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": "Validation failed", "details": details},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map service errors to JSON envelopes."""

    @app.exception_handler(ValidationError)
    async def bookmark_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return validation_error_response(exc.details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return validation_error_response(details_from_pydantic(exc.errors()))

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "error": "Bookmark not found"},
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Internal server error"},
        )


def create_app(service: Optional[BookmarkService] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    service : Optional[BookmarkService]
        Store to serve.  When omitted, a store backed by
        ``settings.data_file`` is created on application startup.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.bookmark_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    register_exception_handlers(app)
    app.include_router(v1_router)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Loading (or seeding) the backing file happens here rather than
        # at import so that importing the module has no side effects.
        if app.state.bookmark_service is None:
            app.state.bookmark_service = BookmarkService()
        logger.info("%s %s started", settings.project_name, settings.api_version)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
