"""JSON envelopes and exception handlers shared by all routers."""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskvault.core.errors import AppError, FieldError, Internal, Unauthenticated, ValidationFailed


logger = logging.getLogger(__name__)


def success(status_code: int = status.HTTP_200_OK, **body: Any) -> JSONResponse:
    """Build a ``{"success": true, ...}`` response."""
    return JSONResponse(content={"success": True, **body}, status_code=status_code)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Map an expected failure to its status code and body."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    logger.info(
        "request_failed",
        extra={"path": request.url.path, "code": exc.code, "status_code": exc.status_code},
    )
    return JSONResponse(content=exc.to_body(), status_code=exc.status_code, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report unparseable request bodies and parameters as a 400 field list."""
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append(FieldError(field=".".join(location) or "body", message=error.get("msg", "Invalid value")))
    return await app_error_handler(request, ValidationFailed(errors))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Keep framework errors (unknown route, wrong method) in the same envelope."""
    return JSONResponse(
        content={"success": False, "message": str(exc.detail)},
        status_code=exc.status_code,
        headers=exc.headers,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert anything unexpected into a generic 500 without leaking details."""
    logger.error(
        "unhandled_error",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
        exc_info=exc,
    )
    error = Internal()
    return JSONResponse(content=error.to_body(), status_code=error.status_code)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
