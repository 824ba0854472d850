from snapdi_identity.domain.account.value_objects.email import Email
from snapdi_identity.domain.account.value_objects.login_identifier import (
    IdentifierKind,
    LoginIdentifier,
    is_email,
    is_phone,
    normalize_phone,
)
from snapdi_identity.domain.account.value_objects.user_role import UserRole

__all__ = [
    "Email",
    "IdentifierKind",
    "LoginIdentifier",
    "UserRole",
    "is_email",
    "is_phone",
    "normalize_phone",
]
