from snapdi_identity.infrastructure.persistence.sqlalchemy.repositories.account_repository import (  # noqa: E501
    AccountRepositorySQLAlchemy,
)
from snapdi_identity.infrastructure.persistence.sqlalchemy.repositories.password_reset_token_repository import (  # noqa: E501
    PasswordResetTokenRepositorySQLAlchemy,
)

__all__ = [
    "AccountRepositorySQLAlchemy",
    "PasswordResetTokenRepositorySQLAlchemy",
]
