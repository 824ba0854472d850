"""Authentication service: credentials, sessions and email verification."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from snapdi.domain.shared.time import utc_now
from snapdi_identity.domain.account import (
    Account,
    AccountNotFoundError,
    EmailAlreadyExistsError,
    LoginIdentifier,
    PhoneAlreadyExistsError,
    UserRole,
)
from snapdi_identity.exceptions import (
    AccountInactiveError,
    EmailNotVerifiedError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
)
from snapdi_identity.schemas import AccessTokenClaims, LoginResult
from snapdi_identity.services import (
    JWTService,
    PasswordHashingService,
    generate_token,
    hash_token,
)

if TYPE_CHECKING:
    from snapdi_identity.domain.account import AccountRepository
    from snapdi_identity.infrastructure.email import EmailDispatcher

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for the account credential lifecycle.

    Per account, the verification state only moves Unverified -> Verified,
    and the session state toggles between one active refresh token and none:
    - login (re)starts the session, overwriting any earlier refresh token
    - refresh rotates the token; the presented one is unusable afterwards
    - logout ends the session

    Persistence is staged through the repository; the caller's unit of work
    commits.
    """

    DEFAULT_REFRESH_TOKEN_DAYS = 7
    DEFAULT_VERIFICATION_TOKEN_HOURS = 24

    def __init__(  # noqa: PLR0913
        self,
        account_repository: AccountRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
        email_dispatcher: EmailDispatcher,
        refresh_token_expire_days: int = DEFAULT_REFRESH_TOKEN_DAYS,
        verification_token_expire_hours: int = DEFAULT_VERIFICATION_TOKEN_HOURS,
    ):
        self._account_repo = account_repository
        self._password_service = password_service
        self._jwt_service = jwt_service
        self._email = email_dispatcher
        self._refresh_lifetime = timedelta(days=refresh_token_expire_days)
        self._verification_lifetime = timedelta(hours=verification_token_expire_hours)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    async def register(  # noqa: PLR0913
        self,
        name: str,
        email: str,
        password: str,
        phone: str | None = None,
        role: UserRole = UserRole.CUSTOMER,
        location_address: str | None = None,
        location_city: str | None = None,
        avatar_url: str | None = None,
    ) -> Account:
        """Create an active, unverified account and send its verification email.

        A failed verification send is logged, not raised; the user can ask
        for a new link through ``resend_email_verification``.

        Raises
        ------
        EmailAlreadyExistsError
            If the email is already registered
        PhoneAlreadyExistsError
            If the phone number is already registered
        WeakPasswordError
            If the password doesn't meet requirements
        """
        if await self._account_repo.exists_by_email(email):
            raise EmailAlreadyExistsError(email)
        if phone and await self._account_repo.exists_by_phone(phone):
            raise PhoneAlreadyExistsError(phone)

        self._password_service.validate_strength(password)
        password_hash = self._password_service.hash(password)
        account = Account.create(
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            phone=phone,
            location_address=location_address,
            location_city=location_city,
            avatar_url=avatar_url,
        )
        await self._account_repo.save(account)
        logger.info("Account registered: %s (role: %s)", account.id, role.value)

        if not await self.send_email_verification(account.email):
            logger.warning(
                "Verification email could not be sent for account %s",
                account.id,
            )
        return account

    # ------------------------------------------------------------------
    # Credentials and sessions
    # ------------------------------------------------------------------

    async def authenticate(self, identifier: str, password: str) -> Account:
        """Check credentials and account state without starting a session.

        Raises
        ------
        InvalidCredentialsError
            If no account matches or the password is wrong
        AccountInactiveError
            If the account has been deactivated
        EmailNotVerifiedError
            If the email address has not been confirmed yet
        """
        account = await self._find_by_identifier(identifier)
        if account is None:
            raise InvalidCredentialsError

        if not self._password_service.verify(password, account.password_hash):
            logger.debug("Password mismatch for account %s", account.id)
            raise InvalidCredentialsError

        if not account.is_active:
            raise AccountInactiveError

        if not account.is_verified:
            raise EmailNotVerifiedError

        return account

    async def login(self, identifier: str, password: str) -> LoginResult:
        account = await self.authenticate(identifier, password)

        refresh_token = self._jwt_service.issue_refresh_token()
        account.start_session(
            refresh_token_hash=hash_token(refresh_token),
            expires_at=utc_now() + self._refresh_lifetime,
        )
        await self._account_repo.save(account)

        logger.info("Account logged in: %s", account.id)
        return self._build_login_result(account, refresh_token)

    async def refresh(self, refresh_token: str) -> LoginResult:
        """Exchange a refresh token for a new token pair.

        Unknown, expired, revoked and already-rotated tokens all fail the
        same way.

        Raises
        ------
        InvalidRefreshTokenError
            If the token cannot be exchanged
        """
        if not refresh_token:
            raise InvalidRefreshTokenError

        now = utc_now()
        presented_hash = hash_token(refresh_token)
        account = await self._account_repo.find_by_refresh_token(presented_hash, now)
        if account is None or account.id is None:
            raise InvalidRefreshTokenError

        new_refresh_token = self._jwt_service.issue_refresh_token()
        new_hash = hash_token(new_refresh_token)
        expires_at = now + self._refresh_lifetime

        rotated = await self._account_repo.rotate_refresh_token(
            account_id=account.id,
            expected_hash=presented_hash,
            new_hash=new_hash,
            expires_at=expires_at,
            now=now,
        )
        if not rotated:
            raise InvalidRefreshTokenError

        account.start_session(refresh_token_hash=new_hash, expires_at=expires_at)
        logger.debug("Tokens refreshed for account: %s", account.id)
        return self._build_login_result(account, new_refresh_token)

    async def logout(self, refresh_token: str | None) -> None:
        """End the session holding this refresh token, if any. Never fails."""
        if not refresh_token:
            return

        account = await self._account_repo.find_by_refresh_token(
            hash_token(refresh_token),
            utc_now(),
        )
        if account is None:
            logger.debug("Logout with unknown or expired refresh token")
            return

        account.end_session()
        await self._account_repo.save(account)
        logger.info("Account logged out: %s", account.id)

    async def change_password(
        self,
        account_id: int,
        current_password: str,
        new_password: str,
    ) -> None:
        account = await self._account_repo.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)

        if not self._password_service.verify(current_password, account.password_hash):
            msg = "Current password is incorrect"
            raise InvalidCredentialsError(msg)

        self._password_service.validate_strength(new_password)
        account.change_password_hash(self._password_service.hash(new_password))
        await self._account_repo.save(account)
        logger.info("Password changed for account: %s", account_id)

    def validate_access_token(self, token: str | None) -> AccessTokenClaims | None:
        return self._jwt_service.validate_access_token(token)

    # ------------------------------------------------------------------
    # Email verification
    # ------------------------------------------------------------------

    async def send_email_verification(self, email: str) -> bool:
        """Issue a fresh verification token and email it.

        Returns False for unknown or already verified accounts and when the
        dispatcher fails. The stored token is kept even if sending fails.
        """
        account = await self._account_repo.find_by_email(email)
        if account is None or account.is_verified:
            return False

        token = generate_token()
        account.issue_email_verification(
            token_hash=hash_token(token),
            expires_at=utc_now() + self._verification_lifetime,
        )
        await self._account_repo.save(account)

        sent = self._email.send_verification(account.email, account.name, token)
        if not sent:
            logger.warning("Verification email to account %s failed", account.id)
        return sent

    async def resend_email_verification(self, email: str) -> bool:
        return await self.send_email_verification(email)

    async def verify_email(self, token: str) -> bool:
        if not token:
            return False

        account = await self._account_repo.find_by_email_verification_token(
            hash_token(token),
            utc_now(),
        )
        if account is None or account.is_verified:
            return False

        account.mark_email_verified()
        await self._account_repo.save(account)
        logger.info("Email verified for account: %s", account.id)

        if not self._email.send_welcome(account.email, account.name):
            logger.info("Welcome email to account %s was not sent", account.id)
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _find_by_identifier(self, identifier: str) -> Account | None:
        login_id = LoginIdentifier.classify(identifier)
        if login_id.is_email:
            return await self._account_repo.find_by_email(login_id.value)
        if login_id.is_phone:
            return await self._account_repo.find_by_phone(login_id.value)
        if not login_id.value:
            return None
        return await self._account_repo.find_by_email_or_phone(login_id.value)

    def _build_login_result(self, account: Account, refresh_token: str) -> LoginResult:
        access_token = self._jwt_service.issue_access_token(
            subject_id=account.id,  # type: ignore[arg-type]
            name=account.name,
            email=account.email,
            role=account.role.value,
        )
        return LoginResult(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=int(self._jwt_service.access_token_lifetime.total_seconds()),
            account=account,
        )
