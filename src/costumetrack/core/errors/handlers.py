"""RFC 7807 Problem Details exception handlers.

This module provides standardized error responses following the
RFC 7807 "Problem Details for HTTP APIs" specification.

See: https://tools.ietf.org/html/rfc7807
"""

from typing import TYPE_CHECKING, Any, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

from costumetrack.config import settings
from costumetrack.core.errors.exceptions import AppException


if TYPE_CHECKING:
    from starlette.types import ExceptionHandler


logger = structlog.get_logger()

INVALID_BODY_MESSAGE = "Invalid or missing request body"
VALUE_ERROR_PREFIX = "Value error, "


class FieldError(BaseModel):
    """Represents a single field validation error."""

    field: str
    message: str
    type: str | None = None


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details response schema.

    Attributes:
        type: URI reference identifying the problem type
        title: Short human-readable summary
        status: HTTP status code
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying this specific occurrence
        errors: List of field-level errors (for validation errors)
        trace_id: Request trace ID for debugging
    """

    type: str
    title: str
    status: int
    detail: str
    instance: str | None = None
    errors: list[FieldError] | None = None
    trace_id: str | None = None

    model_config = {"extra": "allow"}


def _get_trace_id(request: Request) -> str | None:
    """Extract trace ID from request state if available."""
    return getattr(request.state, "trace_id", None)


def _get_error_type_uri(error_code: str) -> str:
    """Generate a URI for the error type."""
    return f"{settings.api_docs_base_url}/errors/{error_code}"


def _is_body_unreadable(error: dict[str, Any]) -> bool:
    """True when the JSON body is malformed or absent altogether."""
    if error.get("type") == "json_invalid":
        return True
    return error.get("type") == "missing" and tuple(error.get("loc", ())) == ("body",)


def _field_error(error: dict[str, Any]) -> FieldError:
    loc = error.get("loc", ())
    # Skip the "body"/"query"/"path" prefix in the field path
    field_parts = [str(part) for part in loc[1:]] if len(loc) > 1 else []
    field = ".".join(field_parts) if field_parts else "unknown"

    message = error.get("msg", "Invalid value")
    if message.startswith(VALUE_ERROR_PREFIX):
        message = message[len(VALUE_ERROR_PREFIX) :]

    return FieldError(field=field, message=message, type=error.get("type"))


def _problem_response(
    request: Request,
    status_code: int,
    error_code: str,
    detail: str,
    errors: list[FieldError] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ProblemDetail(
            type=_get_error_type_uri(error_code),
            title=error_code.replace("_", " ").title(),
            status=status_code,
            detail=detail,
            instance=str(request.url.path),
            errors=errors,
            trace_id=_get_trace_id(request),
        ).model_dump(exclude_none=True),
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle application-specific exceptions.

    Converts AppException subclasses to RFC 7807 Problem Details responses.
    """
    logger.warning(
        "app_exception",
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        path=str(request.url.path),
        details=exc.details,
    )

    content: dict[str, Any] = ProblemDetail(
        type=_get_error_type_uri(exc.error_code),
        title=exc.error_code.replace("_", " ").title(),
        status=exc.status_code,
        detail=exc.message,
        instance=str(request.url.path),
        trace_id=_get_trace_id(request),
    ).model_dump(exclude_none=True)

    # Add any additional details from the exception
    if exc.details:
        for key, value in exc.details.items():
            if key not in content:
                content[key] = value

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors.

    Every failure is listed under ``errors``; ``detail`` carries the first
    failure's message so clients can show a single line. A body that is not
    JSON, or is missing entirely, gets one uniform message.
    """
    raw_errors = list(exc.errors())

    if any(_is_body_unreadable(error) for error in raw_errors):
        logger.warning("invalid_request_body", path=str(request.url.path))
        return _problem_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            "invalid_body",
            INVALID_BODY_MESSAGE,
        )

    errors = [_field_error(error) for error in raw_errors]
    first = errors[0] if errors else None
    if first is None:
        detail = "Request validation failed"
    elif first.type == "value_error" or first.field == "unknown":
        detail = first.message
    else:
        detail = f"{first.field}: {first.message}"

    logger.warning(
        "validation_error",
        path=str(request.url.path),
        error_count=len(errors),
    )

    return _problem_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "validation_error",
        detail,
        errors=errors,
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Translate store-level constraint violations that escaped a service."""
    logger.warning(
        "integrity_error",
        path=str(request.url.path),
        error=str(exc.orig),
    )

    return _problem_response(
        request,
        status.HTTP_409_CONFLICT,
        "conflict",
        "Resource conflict",
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    Catches all unhandled exceptions and returns a generic 500 error.
    The actual error details are logged but not exposed to clients.
    """
    logger.exception(
        "unhandled_exception",
        path=str(request.url.path),
        error_type=type(exc).__name__,
    )

    return _problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(
        AppException, cast("ExceptionHandler", app_exception_handler)
    )
    app.add_exception_handler(
        RequestValidationError, cast("ExceptionHandler", validation_exception_handler)
    )
    app.add_exception_handler(
        IntegrityError, cast("ExceptionHandler", integrity_error_handler)
    )
    app.add_exception_handler(Exception, generic_exception_handler)
