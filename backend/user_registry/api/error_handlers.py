"""Error Handlers - failure-kind to status mapping and global exception handlers.

Invariants:
    - status_for() is total over ErrorKind and pure
    - Failure outcomes and UserRegistryError share one JSON envelope:
      {"error": {code, message, category, severity, timestamp}}
    - RequestValidationError → 406 SHAPE_INVALID with field-level details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (UserRegistryError), validation (Pydantic), catch-all (Exception)
    - 406 for shape failures matches MISSING_INPUT: clients see one status for "bad input"
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from user_registry.core.errors import (
    KIND_CATEGORIES, ErrorKind, ErrorSeverity, UserRegistryError,
)
from user_registry.core.outcome import Failure

logger = logging.getLogger(__name__)

EMAIL_FORMAT_HINT = (
    "Incorrect email formatting. Try next pattern: 'some_information@mail.com'"
)

_KIND_STATUS: dict[ErrorKind, int] = {
    ErrorKind.MISSING_INPUT: status.HTTP_406_NOT_ACCEPTABLE,
    ErrorKind.SHAPE_INVALID: status.HTTP_406_NOT_ACCEPTABLE,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def status_for(kind: ErrorKind) -> int:
    """HTTP status for a domain failure kind."""
    return _KIND_STATUS[kind]


def error_envelope(
    kind: ErrorKind, message: str, details: list[dict] | None = None,
) -> dict:
    """Build the REST error body for a domain failure kind."""
    body = {
        "code": kind.value,
        "message": message,
        "category": KIND_CATEGORIES[kind].value,
        "severity": ErrorSeverity.ERROR.value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if details is not None:
        body["details"] = details
    return {"error": body}


def failure_response(failure: Failure) -> JSONResponse:
    """Translate a Failure outcome into its JSON response."""
    return JSONResponse(
        status_code=status_for(failure.kind),
        content=error_envelope(failure.kind, failure.message),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_registry_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_registry_error_handler(app: FastAPI) -> None:
    """Register store/infrastructure error handler."""

    @app.exception_handler(UserRegistryError)
    async def registry_error_handler(request: Request, exc: UserRegistryError):
        """Handle all user registry infrastructure errors."""
        logger.error(
            f"UserRegistryError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": ErrorKind.SHAPE_INVALID.value},
        )
        return JSONResponse(
            status_code=status_for(ErrorKind.SHAPE_INVALID),
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    errors = exc.errors()
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in errors
    ]
    message = "Invalid request data"
    if any(_is_email_format_error(e) for e in errors):
        message = EMAIL_FORMAT_HINT
    return error_envelope(ErrorKind.SHAPE_INVALID, message, details)


def _is_email_format_error(error: dict) -> bool:
    """Syntax failures only; an overlong email is a string_too_long error."""
    loc = error.get("loc") or ()
    return bool(loc) and loc[-1] == "email" and error.get("type") == "value_error"
