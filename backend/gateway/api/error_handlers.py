"""Error Handlers — global exception handlers producing the single error envelope.

Invariants:
    - GatewayError → its own http_status with {"error": message}
    - Framework HTTP errors (404, 405) → same envelope with their status
    - RequestValidationError (body not a JSON object / wrong types) → 400
    - Exception (catch-all) → 500, never leaks internal details
    - Every failure is logged exactly once here

Design Decisions:
    - Four-layer handler: domain (GatewayError), HTTP (routing), validation (Pydantic),
      catch-all (Exception)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from gateway.core.errors import GatewayError, ErrorSeverity

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request data"
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_gateway_error_handler(app)
    _register_http_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_gateway_error_handler(app: FastAPI) -> None:
    """Register gateway domain/upstream error handler."""

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        """Handle validation, auth and upstream errors."""
        level = (
            logging.WARNING if exc.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)
            else logging.ERROR
        )
        logger.log(
            level,
            f"GatewayError: {exc.message}",
            extra={**exc.log_extra(), "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing/HTTP error handler (unknown path, wrong method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Render framework HTTP errors in the same envelope."""
        logger.info(
            f"HTTP {exc.status_code} on {request.url.path}",
            extra={"status_code": exc.status_code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle malformed request bodies."""
        logger.warning(
            f"Validation error on {request.url.path}: {_summarize(exc)}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": INVALID_REQUEST_MESSAGE},
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all; never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )


def _summarize(exc: RequestValidationError) -> str:
    """Field paths and messages only; input values may hold personal data."""
    return "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    )
