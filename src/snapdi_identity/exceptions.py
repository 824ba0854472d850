"""Authentication failures raised by snapdi_identity.

All of them are ``UnauthorizedError`` subclasses (or ``ValidationError`` for
password policy) so the API renders them through the shared error table.
"""

from snapdi.domain.shared.exceptions import (
    ErrorCode,
    UnauthorizedError,
    ValidationError,
)


class AuthError(UnauthorizedError):
    default_message = "Authentication error"


class InvalidCredentialsError(AuthError):
    """Unknown identifier or wrong password; the two are not told apart."""

    default_code = ErrorCode.INVALID_CREDENTIALS
    default_message = "Invalid email/phone or password"


class AccountInactiveError(AuthError):
    default_code = ErrorCode.ACCOUNT_INACTIVE
    default_message = "Account is not active"


class EmailNotVerifiedError(AuthError):
    default_code = ErrorCode.EMAIL_NOT_VERIFIED
    default_message = "Please verify your email address before logging in"


class InvalidTokenError(AuthError):
    """Access token missing a valid signature, expired or malformed."""

    default_code = ErrorCode.INVALID_TOKEN
    default_message = "Invalid or expired token"


class InvalidRefreshTokenError(AuthError):
    """Refresh token unknown, expired, revoked or already rotated."""

    default_code = ErrorCode.INVALID_REFRESH_TOKEN
    default_message = "Invalid or expired refresh token"


class InvalidResetTokenError(AuthError):
    default_code = ErrorCode.INVALID_RESET_TOKEN
    default_message = "Invalid or expired password reset token"


class WeakPasswordError(ValidationError):
    default_code = ErrorCode.WEAK_PASSWORD
    default_message = "Password does not meet requirements"
