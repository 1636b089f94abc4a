"""
Exception handlers.

Maps the backend's exception families to HTTP responses with a single
body shape: ``{"success": false, "error": CODE, "message": text}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PassgateError,
    ValidationError,
)
from modules.auth.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

# Checked in order; the first matching base class wins.
# Conflicts are reported as 400, matching what clients of /auth/signup expect.
STATUS_BY_ERROR: list[tuple[type[PassgateError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
]


def status_for(error: PassgateError) -> int:
    """Get the HTTP status for a backend exception (500 if unclassified)."""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def passgate_error_handler(request: Request, exc: PassgateError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}")

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report a malformed request body as INVALID_INPUT instead of FastAPI's 422."""
    logger.debug(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    error = InvalidInputError("Request body is missing or malformed")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: still answer with a well-formed body."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "INTERNAL_ERROR", "message": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PassgateError, passgate_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
