"""Error Handlers — global exception handlers for the task API.

Invariants:
    - Every error response body is {"error": <message>}
    - TaskTrackerError → exc.http_status with exc.to_response()
    - RequestValidationError (body not a JSON object) → 400
    - Unknown route → 404 "Endpoint not found"; wrong method → 405
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Four-layer handler: domain (TaskTrackerError), request shape (Pydantic),
      routing (Starlette HTTPException), catch-all (Exception)
    - Validation failures logged at WARNING: caller mistakes are not server faults
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasktracker.core.errors import (
    EndpointNotFoundError, ErrorCategory, TaskTrackerError,
)

logger = logging.getLogger(__name__)

INVALID_BODY_MESSAGE = "Request body must be a JSON object"
METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed"
INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register task tracker domain/infrastructure error handler."""

    @app.exception_handler(TaskTrackerError)
    async def domain_error_handler(request: Request, exc: TaskTrackerError):
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "operation": exc.context.operation,
        }
        if exc.category == ErrorCategory.VALIDATION:
            logger.warning(f"Rejected input: {exc.message}", extra=extra)
        else:
            logger.error(
                f"TaskTrackerError: {exc.message}",
                extra=extra, exc_info=exc.__cause__,
            )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic request validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Malformed request on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": INVALID_BODY_MESSAGE},
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing error handler (404, 405)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            content = EndpointNotFoundError(request.url.path).to_response()
        elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            content = {"error": METHOD_NOT_ALLOWED_MESSAGE}
        else:
            content = {"error": str(exc.detail)}
        return JSONResponse(
            status_code=exc.status_code, content=content,
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )
