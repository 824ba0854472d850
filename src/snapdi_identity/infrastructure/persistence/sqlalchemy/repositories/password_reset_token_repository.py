"""Password reset tokens stored in SQL, one row per issued link."""

from __future__ import annotations

import logging
from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import ColumnElement, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from snapdi.domain.shared.time import ensure_tz_aware, utc_now
from snapdi_identity.infrastructure.persistence.sqlalchemy.models import (
    PasswordResetTokenModel,
)
from snapdi_identity.repositories import (
    PasswordResetTokenData,
    PasswordResetTokenRepository,
)

logger = logging.getLogger(__name__)

Token = PasswordResetTokenModel


class PasswordResetTokenRepositorySQLAlchemy(PasswordResetTokenRepository):
    """Reset token rows keyed by a random UUID.

    Only SHA-256 digests of the emailed tokens are stored. A token is
    consumed by setting ``used_at``; rows are never updated otherwise.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(
        self,
        account_id: int,
        token_hash: str,
        expires_at: datetime,
    ) -> UUID:
        token_id = uuid4()
        self._session.add(
            Token(
                id=str(token_id),
                user_id=account_id,
                token_hash=token_hash,
                expires_at=expires_at,
                created_at=utc_now(),
            ),
        )
        await self._session.flush()
        return token_id

    async def find_valid_by_hash(
        self,
        token_hash: str,
        now: datetime,
    ) -> PasswordResetTokenData | None:
        """Unused, unexpired token with this digest, or None."""
        result = await self._session.execute(
            select(Token).where(
                Token.token_hash == token_hash,
                Token.used_at.is_(None),
                Token.expires_at > now,
            ),
        )
        model = result.scalars().first()
        return self._to_data(model) if model is not None else None

    async def mark_used(self, token_id: UUID) -> None:
        await self._consume(Token.id == str(token_id))

    async def invalidate_all_for_account(self, account_id: int) -> None:
        consumed = await self._consume(Token.user_id == account_id)
        if consumed:
            logger.debug(
                "Invalidated %s reset token(s) of account %s",
                consumed,
                account_id,
            )

    async def count_recent_for_account(self, account_id: int, since: datetime) -> int:
        """Tokens issued to an account since ``since``, used or not."""
        result = await self._session.execute(
            select(func.count())
            .select_from(Token)
            .where(Token.user_id == account_id, Token.created_at >= since),
        )
        return result.scalar_one()

    async def cleanup_expired(self, now: datetime) -> int:
        result = await self._session.execute(delete(Token).where(Token.expires_at < now))
        await self._session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def _consume(self, predicate: ColumnElement[bool]) -> int:
        result = await self._session.execute(
            update(Token)
            .where(predicate, Token.used_at.is_(None))
            .values(used_at=utc_now())
            .execution_options(synchronize_session=False),
        )
        await self._session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    @staticmethod
    def _to_data(model: PasswordResetTokenModel) -> PasswordResetTokenData:
        return PasswordResetTokenData(
            id=UUID(model.id),
            account_id=model.user_id,
            token_hash=model.token_hash,
            expires_at=ensure_tz_aware(model.expires_at),
            used_at=ensure_tz_aware(model.used_at) if model.used_at else None,
            created_at=ensure_tz_aware(model.created_at),
        )
