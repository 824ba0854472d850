"""Storage contract for password reset tokens."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from snapdi.domain.shared.time import ensure_tz_aware


@dataclass(frozen=True)
class PasswordResetTokenData:
    """A stored reset token. Only the digest of the emailed value is kept."""

    id: UUID
    account_id: int
    token_hash: str
    expires_at: datetime
    used_at: datetime | None
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > ensure_tz_aware(self.expires_at)

    def is_used(self) -> bool:
        return self.used_at is not None


class PasswordResetTokenRepository(ABC):
    @abstractmethod
    async def create(
        self,
        account_id: int,
        token_hash: str,
        expires_at: datetime,
    ) -> UUID:
        """Store a digest for ``account_id`` and return the new row id."""

    @abstractmethod
    async def find_valid_by_hash(
        self,
        token_hash: str,
        now: datetime,
    ) -> PasswordResetTokenData | None:
        """Return the token with this digest if it is neither used nor expired."""

    @abstractmethod
    async def mark_used(self, token_id: UUID) -> None: ...

    @abstractmethod
    async def invalidate_all_for_account(self, account_id: int) -> None:
        """Consume every open token of the account."""

    @abstractmethod
    async def count_recent_for_account(self, account_id: int, since: datetime) -> int:
        """Number of tokens issued to the account at or after ``since``.

        Used tokens count too, so the figure can drive request throttling.
        """

    @abstractmethod
    async def cleanup_expired(self, now: datetime) -> int:
        """Delete tokens that expired before ``now``; return how many went."""
