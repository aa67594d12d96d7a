# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors tell the client what went wrong and how to fix it, but never carry
# raw driver messages; those are logged server-side instead.
# =============================================================================

import logging
from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class UserHubException(Exception):
    """
    Base exception for the UserHub API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "USERHUB_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# User Exceptions
# =============================================================================

class UserNotFoundError(UserHubException):
    """Raised when no user document matches a username."""

    def __init__(self, username: str):
        super().__init__(
            message=f"No user found with username {username}",
            code="USER_NOT_FOUND",
            status_code=404,
            suggestion="Check the username or create the user with POST /api/add_user",
            details={"username": username}
        )


class InvalidUsernameError(UserHubException):
    """Raised when the username path parameter is blank."""

    def __init__(self):
        super().__init__(
            message="Invalid username",
            code="INVALID_USERNAME",
            status_code=400,
            suggestion="Provide a non-empty username in the URL path",
        )


# =============================================================================
# Infrastructure Exceptions
# =============================================================================

class DatabaseError(UserHubException):
    """
    Raised when a MongoDB operation fails.

    The driver's message is logged where the failure is caught; the client
    only sees which operation failed.
    """

    def __init__(self, operation: str):
        super().__init__(
            message="Database operation failed",
            code="DATABASE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"operation": operation}
        )


class QRRenderError(UserHubException):
    """Raised when the QR renderer refuses a payload."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Could not render QR code: {reason}",
            code="QR_RENDER_FAILED",
            status_code=400,
            suggestion="Shorten the data; a QR code holds at most a few kilobytes",
        )


class UnsupportedMediaTypeError(UserHubException):
    """Raised when a JSON endpoint receives a non-JSON body."""

    def __init__(self, content_type: str | None):
        super().__init__(
            message=f"Unsupported content type: {content_type or 'none'}",
            code="UNSUPPORTED_MEDIA_TYPE",
            status_code=415,
            suggestion="Send the request body as JSON with Content-Type: application/json",
            details={"content_type": content_type}
        )


class StaticFileNotFoundError(UserHubException):
    """Raised when a page backed by a static file is missing on disk."""

    def __init__(self, filename: str):
        super().__init__(
            message=f"File not found: {filename}",
            code="FILE_NOT_FOUND",
            status_code=404,
            suggestion="Check PATH_STATIC points at the static directory",
            details={"filename": filename}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def userhub_exception_handler(
    request: Request,
    exc: UserHubException
) -> JSONResponse:
    """
    Convert UserHubException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def user_not_found_exception_handler(
    request: Request,
    exc: UserNotFoundError
) -> PlainTextResponse:
    """Unknown usernames answer with a plain-text message naming the username."""
    return PlainTextResponse(exc.message, status_code=exc.status_code)


def _validation_status(errors: list[dict[str, Any]]) -> tuple[int, str]:
    """Pick status and code for a list of pydantic/FastAPI validation errors."""
    if any(error.get("type") == "json_invalid" for error in errors):
        return 400, "INVALID_JSON"
    if errors and all(error.get("loc", ("body",))[0] in ("query", "path") for error in errors):
        return 400, "INVALID_PARAMETERS"
    return 422, "VALIDATION_ERROR"


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Malformed JSON and bad query/path parameters are client errors (400);
    a well-formed body with the wrong shape is unprocessable (422).
    """
    errors = exc.errors()
    status_code, code = _validation_status(errors)

    return JSONResponse(
        status_code=status_code,
        content={
            "detail": "Validation error",
            "code": code,
            "errors": [
                {
                    "loc": list(error.get("loc", ())),
                    "msg": error.get("msg", ""),
                    "type": error.get("type", ""),
                }
                for error in errors
            ],
        }
    )


async def not_found_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> Response:
    """
    Handle framework HTTP errors (unmatched routes, static misses).

    GET requests for unknown paths get the custom 404 page; any other method
    on an unknown path is answered with 405. Other statuses fall through to
    FastAPI's default handler.
    """
    if exc.status_code != 404:
        return await http_exception_handler(request, exc)

    if request.method != "GET":
        return Response(status_code=405)

    page = Path(request.app.state.settings.PATH_STATIC) / "404.html"
    if page.is_file():
        return FileResponse(page, status_code=404, media_type="text/html")

    return await http_exception_handler(request, exc)


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )
