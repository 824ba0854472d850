"""Read access to accounts together with their photographer profiles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from snapdi.application.dtos import PhotographerProfileDTO, UserWithPhotographerProfile
from snapdi_identity.domain.account import AccountNotFoundError

if TYPE_CHECKING:
    from snapdi.infrastructure.persistence.sqlalchemy.repositories import (
        PhotographerProfileRepositorySQLAlchemy,
    )
    from snapdi_identity.domain.account import AccountRepository


class PhotographerService:
    def __init__(
        self,
        account_repository: AccountRepository,
        profile_repository: PhotographerProfileRepositorySQLAlchemy,
    ):
        self._account_repo = account_repository
        self._profile_repo = profile_repository

    async def get_user_with_photographer_profile(
        self,
        user_id: int,
    ) -> UserWithPhotographerProfile:
        """Load an account and, if present, its photographer profile.

        Raises
        ------
        AccountNotFoundError
            If the account does not exist
        """
        account = await self._account_repo.find_by_id(user_id)
        if account is None:
            raise AccountNotFoundError(user_id)

        profile = await self._profile_repo.find_by_user_id(user_id)
        return UserWithPhotographerProfile(
            account=account,
            profile=PhotographerProfileDTO.from_model(profile) if profile else None,
        )

    async def list_available_photographers(self) -> list[PhotographerProfileDTO]:
        profiles = await self._profile_repo.list_available()
        return [PhotographerProfileDTO.from_model(p) for p in profiles]
