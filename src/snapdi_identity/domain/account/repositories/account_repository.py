"""Account repository interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from snapdi.domain.shared.pagination import PageRequest, PagedResult
from snapdi_identity.domain.account.aggregates.account import Account
from snapdi_identity.domain.account.value_objects import UserRole

SORTABLE_FIELDS = ("name", "email", "created_at")


@dataclass(frozen=True)
class UserFilter:
    """Criteria for the filtered account listing.

    Every criterion is optional; unset criteria do not restrict the result.
    """

    search_term: Optional[str] = None
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None
    is_verified: Optional[bool] = None
    location_city: Optional[str] = None
    created_from: Optional[datetime] = None
    created_to: Optional[datetime] = None
    sort_by: Optional[str] = None
    sort_direction: str = "asc"
    page: PageRequest = PageRequest()

    @property
    def normalized_sort_by(self) -> Optional[str]:
        """Map the requested sort key onto a known field, or None."""
        if not self.sort_by:
            return None
        key = self.sort_by.strip().lower().replace("_", "")
        for field_name in SORTABLE_FIELDS:
            if field_name.replace("_", "") == key:
                return field_name
        return None

    @property
    def descending(self) -> bool:
        return (self.sort_direction or "").strip().lower() == "desc"


class AccountRepository(ABC):
    """Repository interface for Account aggregates."""

    @abstractmethod
    async def find_by_id(self, account_id: int) -> Optional[Account]:
        """Find an account by its ID."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Account]:
        """Find an account by email address (case-insensitive)."""

    @abstractmethod
    async def find_by_phone(self, phone: str) -> Optional[Account]:
        """Find an account by normalized phone number."""

    @abstractmethod
    async def find_by_email_or_phone(self, identifier: str) -> Optional[Account]:
        """Find an account whose email (case-insensitive) or phone equals the value."""

    @abstractmethod
    async def find_by_refresh_token(
        self,
        token_hash: str,
        now: datetime,
    ) -> Optional[Account]:
        """Find the account holding this refresh token hash, unexpired at ``now``."""

    @abstractmethod
    async def find_by_email_verification_token(
        self,
        token_hash: str,
        now: datetime,
    ) -> Optional[Account]:
        """Find the account holding this verification token hash, unexpired at ``now``."""

    @abstractmethod
    async def rotate_refresh_token(  # noqa: PLR0913
        self,
        account_id: int,
        expected_hash: str,
        new_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> bool:
        """Atomically replace a still-valid refresh token.

        Parameters
        ----------
        account_id
            The account whose token is rotated
        expected_hash
            Hash of the token presented by the caller
        new_hash
            Hash of the replacement token
        expires_at
            Expiry of the replacement token
        now
            Reference time; the stored token must expire after it

        Returns
        -------
        True if the stored token still matched and was replaced, False if
        another request rotated or revoked it first
        """

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check if an account exists with the given email."""

    @abstractmethod
    async def exists_by_phone(self, phone: str) -> bool:
        """Check if an account exists with the given phone number."""

    @abstractmethod
    async def save(self, account: Account) -> None:
        """Insert or update an account; assigns the id on first insert."""

    @abstractmethod
    async def delete(self, account_id: int) -> bool:
        """Delete an account by ID. Returns False if it did not exist."""

    @abstractmethod
    async def count(self) -> int:
        """Count total accounts."""

    @abstractmethod
    async def list_paged(self, page: PageRequest) -> PagedResult[Account]:
        """List accounts ordered by id."""

    @abstractmethod
    async def list_by_role(self, role: UserRole) -> list[Account]:
        """List accounts holding a role."""

    @abstractmethod
    async def list_active(self) -> list[Account]:
        """List active accounts."""

    @abstractmethod
    async def list_verified(self) -> list[Account]:
        """List accounts with a verified email."""

    @abstractmethod
    async def get_users_with_filter(
        self,
        user_filter: UserFilter,
    ) -> tuple[list[Account], int]:
        """Apply a UserFilter.

        Returns
        -------
        The accounts on the requested page and the total match count
        before paging
        """
