from snapdi_identity.infrastructure.persistence.sqlalchemy.models.password_reset_token_model import (  # noqa: E501
    PasswordResetTokenModel,
)
from snapdi_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    UserModel,
)

__all__ = [
    "PasswordResetTokenModel",
    "UserModel",
]
