"""
Application exceptions and the global exception handlers for the FastAPI app.
Serializes exceptions into structured logs and a uniform error body.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from typing import Any, List, Optional

from educard.utils.error_utils import (
    extract_field_errors,
    format_validation_errors,
    is_server_error,
    user_message_for_status,
)


logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""
    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class UpstreamAPIError(AppException):
    """The organization API answered with an error status or ``success: false``."""

    def __init__(
        self,
        upstream_status: Optional[int],
        payload: Any = None,
        message: Optional[str] = None,
    ):
        self.upstream_status = upstream_status
        self.payload = payload
        if upstream_status is None:
            status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        elif is_server_error(upstream_status):
            status_code = status.HTTP_502_BAD_GATEWAY
        else:
            status_code = upstream_status
        super().__init__(
            message or user_message_for_status(upstream_status, payload),
            status_code=status_code,
            details=extract_field_errors(payload) or None,
        )


class InvalidResponseError(AppException):
    """The organization API answered with a body outside the envelope format."""

    def __init__(self, message: str):
        super().__init__(message, status_code=status.HTTP_502_BAD_GATEWAY)


class NotFoundError(AppException):
    def __init__(self, message: str = "The requested resource was not found."):
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND)


class ValidationFailedError(AppException):
    """Field-level validation failure; ``errors`` is a list of ``{field, message}``."""

    def __init__(self, errors: List[dict], message: str = "Validation error"):
        super().__init__(message, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, details=errors)


class ReadOnlyHolidayError(AppException):
    def __init__(self, holiday_id: str):
        super().__init__(
            "Weekend holidays are generated from the working day policy and cannot be modified",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"holiday_id": holiday_id},
        )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"Application exception: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "details": exc.details,
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "message": exc.message,
                "details": exc.details,
                "path": request.url.path,
            }
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        f"HTTP exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "message": exc.detail,
                "status_code": exc.status_code,
                "path": request.url.path,
            }
        },
    )


def _serialize_validation_errors(errors: list) -> list:
    """Convert validation errors to JSON-serializable ``{field, message}`` entries."""
    return format_validation_errors(errors, skip_locations=("body", "query", "path"))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    serialized_errors = _serialize_validation_errors(exc.errors())

    logger.warning(
        f"Validation error: {serialized_errors}",
        extra={
            "path": request.url.path,
            "errors": serialized_errors,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": {
                "message": "Validation error",
                "details": serialized_errors,
                "path": request.url.path,
            }
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "message": "Internal server error",
                "path": request.url.path,
            }
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
