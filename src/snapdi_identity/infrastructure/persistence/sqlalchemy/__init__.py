"""SQLAlchemy persistence for identity data (accounts, reset tokens)."""

from snapdi_identity.infrastructure.persistence.sqlalchemy.models import (
    PasswordResetTokenModel,
    UserModel,
)
from snapdi_identity.infrastructure.persistence.sqlalchemy.repositories import (
    AccountRepositorySQLAlchemy,
    PasswordResetTokenRepositorySQLAlchemy,
)

__all__ = [
    "AccountRepositorySQLAlchemy",
    "PasswordResetTokenModel",
    "PasswordResetTokenRepositorySQLAlchemy",
    "UserModel",
]
