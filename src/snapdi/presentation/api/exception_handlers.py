"""Render domain exceptions as JSON error bodies.

Every error response has the shape ``{"detail": <message>, "code": <code>}``.
401 responses also carry ``WWW-Authenticate: Bearer``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from snapdi.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ForbiddenError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_CODES_BY_STATUS: dict[int, tuple[ErrorCode, ...]] = {
    status.HTTP_400_BAD_REQUEST: (
        ErrorCode.VALIDATION_ERROR,
        ErrorCode.INVALID_FORMAT,
        ErrorCode.INVALID_EMAIL,
        ErrorCode.INVALID_ROLE,
        ErrorCode.WEAK_PASSWORD,
        ErrorCode.INVALID_RESET_TOKEN,
    ),
    status.HTTP_401_UNAUTHORIZED: (
        ErrorCode.UNAUTHORIZED,
        ErrorCode.INVALID_CREDENTIALS,
        ErrorCode.ACCOUNT_INACTIVE,
        ErrorCode.EMAIL_NOT_VERIFIED,
        ErrorCode.INVALID_TOKEN,
        ErrorCode.INVALID_REFRESH_TOKEN,
    ),
    status.HTTP_403_FORBIDDEN: (ErrorCode.FORBIDDEN,),
    status.HTTP_404_NOT_FOUND: (
        ErrorCode.ENTITY_NOT_FOUND,
        ErrorCode.USER_NOT_FOUND,
        ErrorCode.BLOG_NOT_FOUND,
        ErrorCode.KEYWORD_NOT_FOUND,
    ),
    status.HTTP_409_CONFLICT: (
        ErrorCode.CONFLICT,
        ErrorCode.EMAIL_ALREADY_EXISTS,
        ErrorCode.PHONE_ALREADY_EXISTS,
        ErrorCode.DUPLICATE_KEYWORD,
    ),
    status.HTTP_500_INTERNAL_SERVER_ERROR: (ErrorCode.INTERNAL_ERROR,),
}

STATUS_BY_CODE: dict[ErrorCode, int] = {
    code: status_code
    for status_code, codes in _CODES_BY_STATUS.items()
    for code in codes
}

# Checked in order when an exception carries a code missing from the table
_STATUS_BY_TYPE: tuple[tuple[type[DomainException], int], ...] = (
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
)


def status_for(exc: DomainException) -> int:
    if exc.code in STATUS_BY_CODE:
        return STATUS_BY_CODE[exc.code]
    for exc_type, status_code in _STATUS_BY_TYPE:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def error_response(
    status_code: int,
    message: str,
    code: ErrorCode,
) -> JSONResponse:
    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=status_code,
        content={"detail": message, "code": code.value},
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Install the domain and catch-all handlers on ``app``."""

    @app.exception_handler(DomainException)
    async def handle_domain_exception(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        status_code = status_for(exc)
        logger.warning(
            "%s %s -> %s %s: %s %s",
            request.method,
            request.url.path,
            status_code,
            exc.code.value,
            exc.message,
            exc.details or "",
        )
        return error_response(status_code, exc.message, exc.code)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        # The request's unit of work has rolled back before this runs
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An internal error occurred",
            ErrorCode.INTERNAL_ERROR,
        )
