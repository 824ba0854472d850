"""Forgot-password flow: emailed single-use tokens, then a new password."""

import logging
from datetime import datetime, timedelta

from snapdi.domain.shared.time import utc_now
from snapdi_identity.domain.account import Account, AccountRepository
from snapdi_identity.exceptions import InvalidResetTokenError
from snapdi_identity.infrastructure.email import EmailDispatcher
from snapdi_identity.repositories import (
    PasswordResetTokenData,
    PasswordResetTokenRepository,
)
from snapdi_identity.services import PasswordHashingService, generate_token, hash_token

logger = logging.getLogger(__name__)


class PasswordResetService:
    """Issue and redeem password reset tokens.

    ``request_reset`` never tells the caller whether the email is known.
    Each new request voids the account's earlier links, and at most
    ``MAX_RESETS_PER_DAY`` links are issued per account in 24 hours.
    Redeeming a token sets the password and ends the account's session.
    """

    MAX_RESETS_PER_DAY = 3
    DEFAULT_TOKEN_EXPIRY_HOURS = 1

    def __init__(  # noqa: PLR0913
        self,
        account_repository: AccountRepository,
        token_repository: PasswordResetTokenRepository,
        password_service: PasswordHashingService,
        email_dispatcher: EmailDispatcher,
        token_expiry_hours: int = DEFAULT_TOKEN_EXPIRY_HOURS,
    ):
        self._accounts = account_repository
        self._tokens = token_repository
        self._hasher = password_service
        self._mailer = email_dispatcher
        self._ttl = timedelta(hours=token_expiry_hours)

    async def request_reset(self, email: str) -> None:
        account = await self._accounts.find_by_email(email)
        if account is None or account.id is None:
            logger.debug("Reset requested for an unregistered email")
            return
        if await self._throttled(account.id):
            logger.warning("Reset request limit reached for account %s", account.id)
            return

        raw_token = generate_token()
        await self._tokens.invalidate_all_for_account(account.id)
        await self._tokens.create(
            account.id,
            hash_token(raw_token),
            utc_now() + self._ttl,
        )

        sent = self._mailer.send_password_reset(account.email, account.name, raw_token)
        if not sent:
            # The stored token stays redeemable
            logger.error("Reset email to account %s was not delivered", account.id)
            return
        logger.info("Reset email sent to account %s", account.id)

    async def reset_password(self, token: str, new_password: str) -> None:
        """Set ``new_password`` on the token's account.

        Raises
        ------
        InvalidResetTokenError
            Unknown, used or expired token, or the account is gone
        WeakPasswordError
            The new password breaks the policy; the token stays usable
        """
        now = utc_now()
        record = await self._tokens.find_valid_by_hash(hash_token(token), now)
        if record is None:
            raise InvalidResetTokenError
        account = await self._redeemable_account(record, now)

        self._hasher.validate_strength(new_password)
        account.change_password_hash(self._hasher.hash(new_password))
        account.end_session(now)
        await self._accounts.save(account)
        await self._tokens.mark_used(record.id)
        logger.info("Password reset for account %s", account.id)

    async def _throttled(self, account_id: int) -> bool:
        since = utc_now() - timedelta(days=1)
        issued = await self._tokens.count_recent_for_account(account_id, since)
        return issued >= self.MAX_RESETS_PER_DAY

    async def _redeemable_account(
        self,
        record: PasswordResetTokenData,
        now: datetime,
    ) -> Account:
        if record.is_used() or record.is_expired(now):
            raise InvalidResetTokenError
        account = await self._accounts.find_by_id(record.account_id)
        if account is None:
            raise InvalidResetTokenError
        return account
