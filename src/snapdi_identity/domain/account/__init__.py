"""Account domain: identity and credentials of platform users.

This domain handles:
- Account aggregate (profile, password hash, session and verification tokens)
- Role model and the central authorization predicate
- Email/phone login identifier classification
"""

from snapdi_identity.domain.account.aggregates import Account, account_has_role
from snapdi_identity.domain.account.exceptions import (
    AccountNotFoundError,
    EmailAlreadyExistsError,
    InvalidEmailError,
    InvalidRoleError,
    PhoneAlreadyExistsError,
)
from snapdi_identity.domain.account.repositories import AccountRepository, UserFilter
from snapdi_identity.domain.account.value_objects import (
    Email,
    IdentifierKind,
    LoginIdentifier,
    UserRole,
    is_email,
    is_phone,
    normalize_phone,
)

__all__ = [
    "Account",
    "AccountNotFoundError",
    "AccountRepository",
    "Email",
    "EmailAlreadyExistsError",
    "IdentifierKind",
    "InvalidEmailError",
    "InvalidRoleError",
    "LoginIdentifier",
    "PhoneAlreadyExistsError",
    "UserFilter",
    "UserRole",
    "account_has_role",
    "is_email",
    "is_phone",
    "normalize_phone",
]
