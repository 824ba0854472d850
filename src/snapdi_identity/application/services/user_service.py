"""Account management: profile updates, status changes, listings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from snapdi.domain.shared.pagination import PagedResult, PageRequest
from snapdi_identity.domain.account import (
    Account,
    AccountNotFoundError,
    EmailAlreadyExistsError,
    Email,
    PhoneAlreadyExistsError,
    UserFilter,
    UserRole,
    normalize_phone,
)

if TYPE_CHECKING:
    from snapdi_identity.domain.account import AccountRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateAccount:
    """Partial profile update; ``None`` fields are left unchanged."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    location_address: str | None = None
    location_city: str | None = None
    avatar_url: str | None = None
    role: UserRole | None = None
    is_active: bool | None = None


class UserService:
    """Application service for administering accounts.

    Credential flows (login, tokens, verification) live in
    AuthenticationService.
    """

    def __init__(self, account_repository: AccountRepository):
        self._account_repo = account_repository

    async def get_user(self, account_id: int) -> Account:
        account = await self._account_repo.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def get_by_email(self, email: str) -> Account | None:
        return await self._account_repo.find_by_email(email)

    async def list_users(self, page: PageRequest) -> PagedResult[Account]:
        return await self._account_repo.list_paged(page)

    async def list_users_filtered(self, user_filter: UserFilter) -> PagedResult[Account]:
        items, total = await self._account_repo.get_users_with_filter(user_filter)
        return PagedResult.create(items, total, user_filter.page)

    async def list_by_role(self, role: UserRole) -> list[Account]:
        return await self._account_repo.list_by_role(role)

    async def list_active(self) -> list[Account]:
        return await self._account_repo.list_active()

    async def list_verified(self) -> list[Account]:
        return await self._account_repo.list_verified()

    async def update_user(self, account_id: int, changes: UpdateAccount) -> Account:
        """Apply a partial update.

        Raises
        ------
        AccountNotFoundError
            If the account does not exist
        EmailAlreadyExistsError
            If the new email belongs to another account
        PhoneAlreadyExistsError
            If the new phone number belongs to another account
        """
        account = await self.get_user(account_id)

        new_email = Email(changes.email).value if changes.email else None
        if new_email and new_email != account.email:
            if await self._account_repo.exists_by_email(new_email):
                raise EmailAlreadyExistsError(new_email)

        new_phone = normalize_phone(changes.phone) if changes.phone else None
        if new_phone and new_phone != account.phone:
            if await self._account_repo.exists_by_phone(new_phone):
                raise PhoneAlreadyExistsError(new_phone)

        account.update_profile(
            name=changes.name,
            email=new_email,
            phone=new_phone,
            location_address=changes.location_address,
            location_city=changes.location_city,
            avatar_url=changes.avatar_url,
        )
        if changes.role is not None:
            account.change_role(changes.role)
        if changes.is_active is not None:
            self._apply_status(account, changes.is_active)

        await self._account_repo.save(account)
        logger.info("Account updated: %s", account_id)
        return account

    async def update_status(self, account_id: int, is_active: bool) -> Account:
        account = await self.get_user(account_id)
        self._apply_status(account, is_active)
        await self._account_repo.save(account)
        logger.info("Account %s active=%s", account_id, is_active)
        return account

    async def delete_user(self, account_id: int) -> None:
        if not await self._account_repo.delete(account_id):
            raise AccountNotFoundError(account_id)

    async def email_exists(self, email: str) -> bool:
        return await self._account_repo.exists_by_email(email)

    async def phone_exists(self, phone: str) -> bool:
        return await self._account_repo.exists_by_phone(phone)

    @staticmethod
    def _apply_status(account: Account, is_active: bool) -> None:
        if is_active:
            account.activate()
        else:
            # Deactivation also ends any running session
            account.deactivate()
            account.end_session()
