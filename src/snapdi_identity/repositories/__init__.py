"""Identity repository interfaces that sit outside the account aggregate."""

from snapdi_identity.repositories.password_reset_token_repository import (
    PasswordResetTokenData,
    PasswordResetTokenRepository,
)

__all__ = [
    "PasswordResetTokenData",
    "PasswordResetTokenRepository",
]
