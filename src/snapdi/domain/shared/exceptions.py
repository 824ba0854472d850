"""Error codes and the exception hierarchy shared by every Snapdi domain.

Each exception carries a human readable ``message``, a stable ``code`` that
clients may branch on, and optional ``details`` that only reach the logs.
Subclasses set ``default_code`` and ``default_message`` instead of
overriding ``__init__`` where they have nothing else to record.
"""

from enum import Enum
from typing import Any, ClassVar


class ErrorCode(str, Enum):
    """Machine readable error codes returned in every error body."""

    # 400
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_ROLE = "INVALID_ROLE"
    WEAK_PASSWORD = "WEAK_PASSWORD"
    INVALID_RESET_TOKEN = "INVALID_RESET_TOKEN"

    # 401
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
    EMAIL_NOT_VERIFIED = "EMAIL_NOT_VERIFIED"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_REFRESH_TOKEN = "INVALID_REFRESH_TOKEN"

    # 403
    FORBIDDEN = "FORBIDDEN"

    # 404
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    BLOG_NOT_FOUND = "BLOG_NOT_FOUND"
    KEYWORD_NOT_FOUND = "KEYWORD_NOT_FOUND"

    # 409
    CONFLICT = "CONFLICT"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
    PHONE_ALREADY_EXISTS = "PHONE_ALREADY_EXISTS"
    DUPLICATE_KEYWORD = "DUPLICATE_KEYWORD"

    # 500
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    default_code: ClassVar[ErrorCode] = ErrorCode.INTERNAL_ERROR
    default_message: ClassVar[str] = "An internal error occurred"

    def __init__(
        self,
        message: str | None = None,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = dict(details or {})
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code.value})"


class ValidationError(DomainException):
    """Input that no amount of retrying will make acceptable."""

    default_code = ErrorCode.VALIDATION_ERROR
    default_message = "Invalid input"


class UnauthorizedError(DomainException):
    """The caller is not, or is no longer, authenticated."""

    default_code = ErrorCode.UNAUTHORIZED
    default_message = "Authentication required"


class ForbiddenError(DomainException):
    """Authenticated, but the role or ownership check failed."""

    default_code = ErrorCode.FORBIDDEN
    default_message = "You do not have permission to perform this action"


class EntityNotFoundError(DomainException):
    default_code = ErrorCode.ENTITY_NOT_FOUND
    default_message = "Entity not found"


class ConflictError(DomainException):
    """The change clashes with existing state (duplicates, double links)."""

    default_code = ErrorCode.CONFLICT
    default_message = "Conflicting state"
