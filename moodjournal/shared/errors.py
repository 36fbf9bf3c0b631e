"""
Error taxonomy and standardized error responses for the mood journal.

Domain code raises JournalError subclasses; the HTTP adapter turns them into
one consistent JSON shape carrying the correlation id.

Usage:
    from moodjournal.shared.errors import NotFound, ValidationError

    if mood is None:
        raise ValidationError("Please select a mood first", details={"field": "mood"})

    # In main.py:
    register_exception_handlers(app)

Response body:
    {"error": {"code": "NOT_FOUND", "message": "...", "correlation_id": "..."}}
"""

import logging
from enum import Enum
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger("MoodJournal.Errors")


class ErrorCode(str, Enum):
    """Error codes used across the journal."""

    # Client errors (4xx)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_REQUIRED = "AUTH_REQUIRED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # Server errors (5xx)
    TRANSIENT_ERROR = "TRANSIENT_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class JournalError(Exception):
    """Base class for every error the journal signals to its callers."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(JournalError):
    """Caller passed disallowed input (missing mood, empty text, bad tag)."""

    code = ErrorCode.VALIDATION_ERROR
    status_code = 400


class AuthRequired(JournalError):
    """Operation attempted without an authenticated identity."""

    code = ErrorCode.AUTH_REQUIRED
    status_code = 401

    def __init__(self, message: str = "Authentication required", details: Optional[dict[str, Any]] = None):
        super().__init__(message, details)


class Forbidden(JournalError):
    """Entity exists but is not owned by the caller."""

    code = ErrorCode.FORBIDDEN
    status_code = 403

    def __init__(self, message: str = "Access denied", details: Optional[dict[str, Any]] = None):
        super().__init__(message, details)


class NotFound(JournalError):
    code = ErrorCode.NOT_FOUND
    status_code = 404


class Conflict(JournalError):
    """A save or insight request is already running for this draft."""

    code = ErrorCode.CONFLICT
    status_code = 409


class TransientError(JournalError):
    """A remote call failed for infrastructure reasons (network, backend)."""

    code = ErrorCode.TRANSIENT_ERROR
    status_code = 503


class ConfigurationError(JournalError):
    code = ErrorCode.CONFIGURATION_ERROR
    status_code = 500


class ErrorDetail(BaseModel):
    """Structured error detail model."""
    code: str
    message: str
    details: Optional[dict[str, Any]] = None
    correlation_id: Optional[str] = None


def get_correlation_id(request: Optional[Request] = None) -> Optional[str]:
    """Extract the correlation id stored on the request by the middleware."""
    if request is None:
        return None
    return getattr(request.state, "correlation_id", None)


def error_response(
    code: ErrorCode,
    message: str,
    status_code: int,
    details: Optional[dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> JSONResponse:
    """
    Create a standardized JSON error response.

    Args:
        code: Error code from ErrorCode enum
        message: Human-readable error message
        status_code: HTTP status code
        details: Optional additional error details
        correlation_id: Request correlation ID for tracing

    Returns:
        JSONResponse with standardized error format
    """
    error_detail = ErrorDetail(
        code=code.value,
        message=message,
        details=details,
        correlation_id=correlation_id,
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": error_detail.model_dump(exclude_none=True)},
    )


def journal_error_response(exc: JournalError, correlation_id: Optional[str] = None) -> JSONResponse:
    return error_response(
        code=exc.code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        correlation_id=correlation_id,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map JournalError and request validation failures to JSON responses."""

    @app.exception_handler(JournalError)
    async def _journal_error_handler(request: Request, exc: JournalError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{exc.code.value}: {exc.message}")
        else:
            logger.info(f"{exc.code.value}: {exc.message}")
        return journal_error_response(exc, get_correlation_id(request))

    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(
            code=ErrorCode.VALIDATION_ERROR,
            message="Invalid request",
            status_code=400,
            details={"errors": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in exc.errors()
            ]},
            correlation_id=get_correlation_id(request),
        )
