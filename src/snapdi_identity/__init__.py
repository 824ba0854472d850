"""Snapdi Identity - accounts, authentication and authorization.

This package handles all identity-related concerns:
- Account management (profile, roles, activation)
- Authentication (login, refresh token rotation, logout)
- Email verification and password reset
- Password hashing and access token issuance

Content concerns (blogs, keywords, photographer profiles) live in snapdi
and only reference the account id.
"""

from snapdi_identity.domain.account import (
    Account,
    AccountNotFoundError,
    AccountRepository,
    EmailAlreadyExistsError,
    PhoneAlreadyExistsError,
    UserFilter,
    UserRole,
    account_has_role,
)
from snapdi_identity.exceptions import (
    AccountInactiveError,
    AuthError,
    EmailNotVerifiedError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidResetTokenError,
    InvalidTokenError,
    WeakPasswordError,
)
from snapdi_identity.schemas import AccessTokenClaims, LoginResult
from snapdi_identity.services import JWTService, PasswordHashingService

__all__ = [
    "AccessTokenClaims",
    "Account",
    "AccountInactiveError",
    "AccountNotFoundError",
    "AccountRepository",
    "AuthError",
    "EmailAlreadyExistsError",
    "EmailNotVerifiedError",
    "InvalidCredentialsError",
    "InvalidRefreshTokenError",
    "InvalidResetTokenError",
    "InvalidTokenError",
    "JWTService",
    "LoginResult",
    "PasswordHashingService",
    "PhoneAlreadyExistsError",
    "UserFilter",
    "UserRole",
    "WeakPasswordError",
    "account_has_role",
]
