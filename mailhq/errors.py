"""
MailHQ error taxonomy and exception handlers.

Every error body has the shape ``{"message": str}``, optionally with an
``error`` field carrying debug detail.
"""
import traceback
from typing import Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from .logging_config import api_logger


# ============================================================
# DOMAIN ERRORS
# ============================================================

class MailHQError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None):
        self.message = message
        self.error = error
        super().__init__(message)


class ValidationError(MailHQError):
    """Malformed or missing input."""
    status_code = 400


class NotFoundError(MailHQError):
    """Referenced entity does not exist."""
    status_code = 404


class ConflictError(MailHQError):
    """Illegal state transition, e.g. sending a campaign twice."""
    status_code = 400


class StoreError(MailHQError):
    """Persistence layer failure."""
    status_code = 500


def error_body(message: str, error: Optional[str] = None) -> dict:
    body = {"message": message}
    if error:
        body["error"] = error
    return body


# ============================================================
# EXCEPTION HANDLERS
# ============================================================

async def mailhq_error_handler(request: Request, exc: MailHQError) -> JSONResponse:
    log = api_logger.error if exc.status_code >= 500 else api_logger.warning
    log(
        f"API Error: {exc.message}",
        status_code=exc.status_code,
        error_code=type(exc).__name__,
        path=request.url.path,
    )
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.error))


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    api_logger.warning(
        f"HTTP Error: {exc.detail}",
        status_code=exc.status_code,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
        for err in exc.errors()
    )
    api_logger.warning("Request validation failed", path=request.url.path, problems=problems)
    return JSONResponse(status_code=400, content=error_body("Invalid request body", problems))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    api_logger.error(
        f"Unexpected error: {exc}",
        error=exc,
        path=request.url.path,
        traceback=traceback.format_exc(),
    )
    return JSONResponse(status_code=500, content=error_body("Internal server error"))


def register_exception_handlers(app) -> None:
    app.add_exception_handler(MailHQError, mailhq_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


# ============================================================
# VALIDATION HELPERS
# ============================================================

def require(value, field_name: str):
    """Require a field to be present and non-blank"""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required")
    return value
