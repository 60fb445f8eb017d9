# /examcell/core/exceptions.py

"""
The application's error taxonomy and the FastAPI handlers that turn it into
the uniform JSON error envelope:

    {"status": 404, "error": "Not Found", "message": "...", "path": "/api/..."}

Services raise these exceptions and let them propagate; routers never
translate them by hand.
"""

import logging
from http import HTTPStatus
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

UNAUTHENTICATED_MESSAGE = "Authentication required. Please log in or provide a valid token."
FORBIDDEN_MESSAGE = "Access Denied: You do not have permission to access this resource."
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
INTERNAL_ERROR_MESSAGE = "An internal server error occurred. Please contact support if the problem persists."


class AppError(Exception):
    """Base class for every error the API reports with a fixed status code."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"


class BadInputError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad Request"


class UnknownReferenceError(BadInputError):
    """A BadInput raised because uploaded data references an entity that does not exist."""


class UnauthenticatedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"

    def __init__(self, message: str = UNAUTHENTICATED_MESSAGE):
        super().__init__(message)


class InvalidCredentialsError(UnauthenticatedError):
    def __init__(self, message: str = INVALID_CREDENTIALS_MESSAGE):
        super().__init__(message)


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"

    def __init__(self, message: str = FORBIDDEN_MESSAGE):
        super().__init__(message)


def error_body(status_code: int, error: str, message: str, path: str, errors: Optional[Dict[str, str]] = None) -> Dict:
    body = {"status": status_code, "error": error, "message": message, "path": path}
    if errors is not None:
        body["errors"] = errors
    return body


def _field_name(loc) -> str:
    # ("body", "email") -> "email"; ("query", "limit") -> "limit"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header", "form")]
    return ".".join(parts) or "request"


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    logger.warning("%s: %s (Path: %s)", exc.error, exc.message, request.url.path)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.error, exc.message, request.url.path),
        headers=headers,
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    field_errors: Dict[str, str] = {}
    for err in exc.errors():
        field = _field_name(err.get("loc", ()))
        message = err.get("msg", "Invalid value")
        field_errors[field] = f"{field_errors[field]}; {message}" if field in field_errors else message
    logger.warning("Validation failed: %s (Path: %s)", field_errors, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(
            status.HTTP_400_BAD_REQUEST,
            "Validation Failed",
            "Input validation failed. Please check the errors.",
            request.url.path,
            errors=field_errors,
        ),
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    try:
        reason = HTTPStatus(exc.status_code).phrase
    except ValueError:
        reason = "Error"
    logger.warning("HTTP %s: %s (Path: %s)", exc.status_code, exc.detail, request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, reason, str(exc.detail), request.url.path),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("An unexpected error occurred: %s (Path: %s)", exc, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            INTERNAL_ERROR_MESSAGE,
            request.url.path,
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
