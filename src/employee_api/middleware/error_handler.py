"""Global error handlers: stable error envelope, no information disclosure."""

import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from employee_api.config import get_settings
from employee_api.exceptions import (
    ConflictError,
    EmployeeAPIError,
    EmployeeReferencedError,
    InvalidInputError,
    NotFoundError,
)
from employee_api.models.dto.error import ErrorDetailResponse, ErrorResponse
from employee_api.utils.secure_logging import log_error
from employee_api.utils.validation import ErrorDetail

logger = logging.getLogger(__name__)

# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Invalid request",
    404: "Resource not found",
    405: "Method not allowed",
    409: "Conflict with existing resource",
    500: "Internal server error",
    503: "Service temporarily unavailable",
}

# Status code for each domain error family, most specific first
DOMAIN_ERROR_STATUS: list[tuple[type[EmployeeAPIError], int]] = [
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (EmployeeReferencedError, status.HTTP_409_CONFLICT),
]


def _get_cors_headers(request: Request) -> dict[str, str]:
    """Get CORS headers for error responses.

    Handlers for unhandled exceptions run outside the CORS middleware, so
    allowed origins must be echoed here or browsers drop the error body.

    Args:
        request: The incoming request

    Returns:
        Dict of CORS headers to add to the response
    """
    origin = request.headers.get("origin")
    if not origin:
        return {}

    if origin in get_settings().cors_origins_list:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }

    return {}


def error_response(
    request: Request,
    status_code: int,
    message: str,
    errors: list[ErrorDetail] | None = None,
) -> JSONResponse:
    """Render the standard error envelope.

    Args:
        request: The failed request
        status_code: HTTP status code
        message: Human-readable, non-sensitive message
        errors: Optional per-field details

    Returns:
        JSONResponse with the error body
    """
    body = ErrorResponse(
        status=status_code,
        error=HTTPStatus(status_code).phrase,
        message=message,
        timestamp=datetime.now(timezone.utc),
        path=request.url.path,
        errors=[
            ErrorDetailResponse(
                field=error.field,
                message=error.message,
                rejected_value=error.rejected_value or None,
            )
            for error in errors
        ]
        if errors
        else None,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers=_get_cors_headers(request),
    )


def _field_name(loc: tuple[Any, ...] | list[Any]) -> str:
    """Name the offending field from a pydantic error location."""
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) if parts else "body"


def request_errors_to_details(errors: list[dict[str, Any]]) -> list[ErrorDetail]:
    """Convert FastAPI request validation errors to field details.

    Args:
        errors: ``RequestValidationError.errors()`` output

    Returns:
        One ErrorDetail per reported error
    """
    details = []
    for error in errors:
        if error.get("type") == "json_invalid":
            details.append(ErrorDetail(field="body", message="Malformed JSON"))
            continue

        raw_input = error.get("input")
        rejected = raw_input if isinstance(raw_input, str) else None
        details.append(
            ErrorDetail(
                field=_field_name(error.get("loc", ())),
                message=error.get("msg", "Invalid value"),
                rejected_value=rejected,
            )
        )
    return details


async def employee_api_exception_handler(request: Request, exc: EmployeeAPIError) -> JSONResponse:
    """Handle domain errors raised by validation, repositories and services.

    Args:
        request: FastAPI request
        exc: Domain exception

    Returns:
        JSONResponse with the mapped status code
    """
    for error_type, status_code in DOMAIN_ERROR_STATUS:
        if isinstance(exc, error_type):
            errors = exc.errors if isinstance(exc, InvalidInputError) else None
            return error_response(request, status_code, exc.message, errors)

    logger.error(f"Unmapped domain error for {request.url.path}: {type(exc).__name__}")
    return error_response(
        request, status.HTTP_500_INTERNAL_SERVER_ERROR, SAFE_ERROR_MESSAGES[500]
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions (unknown routes, wrong methods) with safe messages.

    Args:
        request: FastAPI request
        exc: HTTP exception

    Returns:
        JSONResponse with sanitized error
    """
    if get_settings().debug and isinstance(exc.detail, str):
        message = exc.detail
    else:
        message = SAFE_ERROR_MESSAGES.get(exc.status_code, "Request failed")

    response = error_response(request, exc.status_code, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle malformed bodies and parameters as invalid input.

    Args:
        request: FastAPI request
        exc: Validation exception

    Returns:
        JSONResponse listing every offending field
    """
    logger.warning(f"Validation error for {request.url.path}: {len(exc.errors())} field error(s)")

    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "Invalid request data",
        request_errors_to_details(exc.errors()),
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle storage failures without leaking database details.

    Args:
        request: FastAPI request
        exc: SQLAlchemy exception

    Returns:
        JSONResponse with a generic error
    """
    log_error(logger, f"Database error for {request.url.path}", exc)

    message = f"Database error: {type(exc).__name__}" if get_settings().debug else SAFE_ERROR_MESSAGES[500]
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, message)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information.

    Args:
        request: FastAPI request
        exc: Unexpected exception

    Returns:
        JSONResponse with a generic error
    """
    logger.error(f"Unhandled exception for {request.url.path}", exc_info=exc)

    message = str(exc) if get_settings().debug else SAFE_ERROR_MESSAGES[500]
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, message)
