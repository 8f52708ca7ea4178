"""Interface layer error mapping.

Domain errors are business outcomes and map to 4xx responses carrying the
error code and message. Anything else, including ``InternalError``, is
answered with a fixed 500 body so no exception text leaks to callers.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ubos.domain.error import (
    CannotResendError,
    ConflictError,
    DomainError,
    InvalidInvitationError,
    InvitationAlreadyAcceptedError,
    InvitationExpiredError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_409_CONFLICT,
    QuotaExceededError: status.HTTP_429_TOO_MANY_REQUESTS,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidInvitationError: status.HTTP_404_NOT_FOUND,
    InvitationExpiredError: status.HTTP_410_GONE,
    InvitationAlreadyAcceptedError: status.HTTP_410_GONE,
    CannotResendError: status.HTTP_400_BAD_REQUEST,
}

INTERNAL_ERROR_BODY = {
    "error": "internal_error",
    "message": "An unexpected error occurred",
}


def status_for(error: DomainError) -> int:
    """Resolve the HTTP status for a domain error, walking its class hierarchy."""
    for cls in type(error).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a domain error as ``{"error", "message"}``.

    Anything else registered here by mistake falls back to the generic 500.
    """
    if not isinstance(exc, DomainError):
        return await internal_error_handler(request, exc)
    body: dict = {"error": exc.code, "message": exc.message}
    if isinstance(exc, ValidationError) and exc.details:
        body["details"] = exc.details
    return JSONResponse(status_code=status_for(exc), content=body)


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any unhandled exception as a generic 500."""
    logfire.error(
        "Unhandled error",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=INTERNAL_ERROR_BODY,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach error handlers to the application.

    Only ``DomainError`` gets a dedicated handler. Other exceptions,
    ``InternalError`` included, fall through to the catch-all so the
    request's unit of work sees them and rolls back.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
