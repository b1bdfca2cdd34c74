"""Error taxonomy and the handlers that turn it into HTTP responses.

Every error a route can produce is an ``AppError`` carrying its status code,
so handlers only ever raise; the mapping to a JSON body happens here.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base exception for all errors that map to an HTTP response."""

    status_code: int = 500
    default_detail: str = "Internal Server Error"

    def __init__(
        self,
        detail: str | None = None,
        *,
        status_code: int | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.detail = detail or self.default_detail
        if status_code is not None:
            self.status_code = status_code
        self.headers = headers
        super().__init__(self.detail)


class ValidationError(AppError):
    status_code = 400
    default_detail = "Invalid request"


class ConflictError(AppError):
    status_code = 409
    default_detail = "Resource already exists"


class NotFoundError(AppError):
    status_code = 404
    default_detail = "Not found"


class AuthError(AppError):
    status_code = 401
    default_detail = "Not authenticated"

    def __init__(self, detail: str | None = None, **kwargs):
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(detail, **kwargs)


class InvalidTokenError(AuthError):
    """Token is malformed, expired or carries a bad signature."""

    default_detail = "token_invalid"


class ForbiddenError(AppError):
    status_code = 403
    default_detail = "You are not allowed"


class InternalError(AppError):
    status_code = 500


class SigningError(InternalError):
    default_detail = "token_signing_failed"


class StoreError(InternalError):
    default_detail = "Server Error"


class StartupError(RuntimeError):
    """Raised from the lifespan handler when the app must not start serving."""


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return ValidationError.default_detail
    first = errors[0]
    # Drop the "body" / "query" prefix so the message names the field
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    msg = first.get("msg", ValidationError.default_detail)
    return f"{'.'.join(loc)}: {msg}" if loc else msg


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await app_error_handler(request, ValidationError(_validation_message(exc)))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
