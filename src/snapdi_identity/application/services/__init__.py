from snapdi_identity.application.services.authentication_service import (
    AuthenticationService,
)
from snapdi_identity.application.services.password_reset_service import (
    PasswordResetService,
)
from snapdi_identity.application.services.user_service import (
    UpdateAccount,
    UserService,
)

__all__ = [
    "AuthenticationService",
    "PasswordResetService",
    "UpdateAccount",
    "UserService",
]
