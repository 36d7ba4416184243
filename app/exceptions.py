# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error response is a JSON object with an "error" string, a
# machine-readable "code", and optionally a "suggestion" on how to fix it.
#
# Categories:
#   400 - validation (bad input, duplicate email, malformed task id)
#   401 - authentication (missing/expired/invalid tokens, bad credentials)
#   404 - not found (task missing or owned by someone else)
#   500 - anything unhandled
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class TaskTrackerException(Exception):
    """
    Base exception for the TaskTracker API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "TASKTRACKER_ERROR",
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
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Validation Exceptions (400)
# =============================================================================

class ValidationFailedError(TaskTrackerException):
    """Raised when request data fails validation."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details={"errors": errors} if errors else None,
        )


class EmailAlreadyRegisteredError(TaskTrackerException):
    """Raised when registering with an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(
            message="User with this email already exists",
            code="EMAIL_ALREADY_REGISTERED",
            status_code=400,
            suggestion="Log in with this email or register with a different one",
            details={"email": email},
        )


class InvalidTaskIdError(TaskTrackerException):
    """Raised when a task id in the URL is not an integer."""

    def __init__(self, raw_id: str):
        super().__init__(
            message="Invalid task ID",
            code="INVALID_TASK_ID",
            status_code=400,
            suggestion="Task IDs are integers",
            details={"task_id": raw_id},
        )


# =============================================================================
# Authentication Exceptions (401)
# =============================================================================

class AuthenticationError(TaskTrackerException):
    """Base class for every 401 response."""

    def __init__(self, message: str, code: str = "AUTHENTICATION_ERROR", suggestion: str | None = None):
        super().__init__(
            message=message,
            code=code,
            status_code=401,
            suggestion=suggestion,
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised on login with an unknown email or a wrong password."""

    def __init__(self):
        super().__init__("Invalid email or password", code="INVALID_CREDENTIALS")


class AccessTokenMissingError(AuthenticationError):
    def __init__(self):
        super().__init__(
            "Access token required",
            code="ACCESS_TOKEN_MISSING",
            suggestion="Send the access token as 'Authorization: Bearer <token>'",
        )


class AccessTokenExpiredError(AuthenticationError):
    def __init__(self):
        super().__init__(
            "Access token expired",
            code="ACCESS_TOKEN_EXPIRED",
            suggestion="Call POST /auth/refresh to obtain a new access token",
        )


class InvalidAccessTokenError(AuthenticationError):
    def __init__(self):
        super().__init__("Invalid access token", code="INVALID_ACCESS_TOKEN")


class RefreshTokenMissingError(AuthenticationError):
    def __init__(self):
        super().__init__(
            "Refresh token required",
            code="REFRESH_TOKEN_MISSING",
            suggestion="Log in again to receive a refresh token cookie",
        )


class RefreshTokenExpiredError(AuthenticationError):
    def __init__(self):
        super().__init__(
            "Refresh token expired",
            code="REFRESH_TOKEN_EXPIRED",
            suggestion="Log in again",
        )


class InvalidRefreshTokenError(AuthenticationError):
    def __init__(self):
        super().__init__(
            "Invalid refresh token",
            code="INVALID_REFRESH_TOKEN",
            suggestion="Log in again",
        )


# =============================================================================
# Not Found Exceptions (404)
# =============================================================================

class TaskNotFoundError(TaskTrackerException):
    """Raised when a task doesn't exist or isn't owned by the caller."""

    def __init__(self, task_id: int):
        super().__init__(
            message="Task not found",
            code="TASK_NOT_FOUND",
            status_code=404,
            suggestion="Check that the task id is correct",
            details={"task_id": task_id},
        )


class UserNotFoundError(TaskTrackerException):
    """Raised when a token refers to a user that no longer exists."""

    def __init__(self, user_id: int):
        super().__init__(
            message="User not found",
            code="USER_NOT_FOUND",
            status_code=404,
            details={"user_id": user_id},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def tasktracker_exception_handler(
    request: Request,
    exc: TaskTrackerException
) -> JSONResponse:
    """Convert TaskTrackerException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def _format_validation_error(error: dict[str, Any]) -> str:
    # Drop the "body"/"query"/"path" prefix from the location
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    message = error.get("msg", "Invalid value")
    if loc:
        return f"{'.'.join(loc)}: {message}"
    return message


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Returns 400 with the first problem as the "error" string and
    every problem listed under "errors".
    """
    messages = [_format_validation_error(e) for e in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={
            "error": messages[0] if messages else "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": messages,
        }
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Render framework HTTP errors (404 route, 405 method) in the same shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "code": f"HTTP_{exc.status_code}"},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )
