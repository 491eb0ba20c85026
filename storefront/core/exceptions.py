"""
Auth error taxonomy and global exception handlers.

Every error leaves the API as ``{"ok": false, "error": <message>}``;
stack traces and internal details are logged, never returned.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


class AuthError(Exception):
    """Base class for errors the auth flows turn into a status + message."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    # Whether ``message`` may be shown to the caller as-is
    expose: bool = True

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AuthError):
    status_code = status.HTTP_409_CONFLICT


class AuthenticationError(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(AuthError):
    # Shares the bad-password status
    status_code = status.HTTP_401_UNAUTHORIZED


class PersistenceError(AuthError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class InfrastructureError(AuthError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    expose = False


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


async def _auth_error_handler(_request: Request, exc: AuthError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s: %s", type(exc).__name__, exc.message, exc_info=exc)
    return error_response(exc.status_code, exc.message if exc.expose else GENERIC_ERROR_MESSAGE)


async def _validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    if any(err.get("type") == "json_invalid" for err in exc.errors()):
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid JSON payload")
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request payload")


async def _http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Not found"
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = "Method not allowed"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": message},
        headers=getattr(exc, "headers", None),
    )


async def _sqlalchemy_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error: %s", exc, exc_info=True)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal database error")


async def _generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(AuthError, _auth_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _sqlalchemy_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_exception_handler)
