from snapdi_identity.domain.account.repositories.account_repository import (
    AccountRepository,
    UserFilter,
)

__all__ = ["AccountRepository", "UserFilter"]
