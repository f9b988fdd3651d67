"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Every failure leaves the
API as ``{"success": false, "error_code", "message", "details"}`` with a
status derived from the error kind.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from orgadmin.core.config import get_settings
from orgadmin.domain.enums import ErrorKind
from orgadmin.domain.exceptions import AdminCoreException

logger = logging.getLogger(__name__)

ERROR_KIND_STATUS: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.VALIDATION_FAILED: 422,
    ErrorKind.UNAVAILABLE: 503,
}

# Error codes whose status differs from their kind's
_ERROR_CODE_STATUS: dict[str, int] = {
    "AUTHENTICATION_ERROR": 401,
}


def error_body(
    error_code: str, message: str, details: dict[str, Any] | None = None
) -> dict[str, Any]:
    return {
        "success": False,
        "error_code": error_code,
        "message": message,
        "details": details or {},
    }


def status_for(exc: AdminCoreException) -> int:
    if exc.error_code in _ERROR_CODE_STATUS:
        return _ERROR_CODE_STATUS[exc.error_code]
    return ERROR_KIND_STATUS.get(exc.kind, 400)


def _admin_core_exception_handler(
    request: Request, exc: AdminCoreException
) -> JSONResponse:
    """Return the error body with the status mapped from the error kind."""
    headers = {"WWW-Authenticate": "Bearer"} if status_for(exc) == 401 else None
    return JSONResponse(
        status_code=status_for(exc),
        content=error_body(exc.error_code, exc.message, exc.details),
        headers=headers,
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content=error_body(
            "VALIDATION_ERROR",
            "Request validation failed",
            {"errors": _jsonable_errors(exc)},
        ),
    )


def _jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Validation errors without the raw input/context (may hold non-JSON values)."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body("HTTP_ERROR", str(exc.detail)),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content=error_body("INTERNAL_ERROR", detail),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Handlers: AdminCoreException (and subclasses, including failed service
    results), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(AdminCoreException, _admin_core_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
