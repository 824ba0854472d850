"""
End-to-end account lifecycle over SQLite with the real services.

Covers registration through logout, password reset and content ownership.
"""

from contextlib import asynccontextmanager
from datetime import timedelta

import pytest

from snapdi.application.services import BlogService
from snapdi.domain.shared.pagination import PageRequest
from snapdi.domain.shared.time import utc_now
from snapdi.infrastructure.persistence.sqlalchemy import SQLAlchemyUnitOfWork
from snapdi.infrastructure.persistence.sqlalchemy.repositories import (
    BlogRepositorySQLAlchemy,
    KeywordRepositorySQLAlchemy,
)
from snapdi_identity import (
    EmailNotVerifiedError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidResetTokenError,
    JWTService,
    PasswordHashingService,
    UserRole,
)
from snapdi_identity.application.services import (
    AuthenticationService,
    PasswordResetService,
    UserService,
)
from snapdi_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
    PasswordResetTokenRepositorySQLAlchemy,
)
from snapdi_identity.services import hash_token
from tests.shared.fixtures.email import RecordingEmailDispatcher

EMAIL = "u@x.com"
PASSWORD = "first-password-1"
NEW_PASSWORD = "second-password-2"


class Services:
    """Services bound to one unit of work."""

    def __init__(self, uow, email, jwt_service, password_service):
        accounts = AccountRepositorySQLAlchemy(uow.session)
        self.uow = uow
        self.accounts = accounts
        self.auth = AuthenticationService(
            account_repository=accounts,
            password_service=password_service,
            jwt_service=jwt_service,
            email_dispatcher=email,
        )
        self.reset = PasswordResetService(
            account_repository=accounts,
            token_repository=PasswordResetTokenRepositorySQLAlchemy(uow.session),
            password_service=password_service,
            email_dispatcher=email,
        )
        self.users = UserService(accounts)
        self.blogs = BlogService(
            BlogRepositorySQLAlchemy(uow.session),
            KeywordRepositorySQLAlchemy(uow.session),
            accounts,
        )


@pytest.fixture
def email():
    return RecordingEmailDispatcher()


@pytest.fixture
def request_scope(session_maker, email):
    """Open a committed unit of work per step, like one request each."""
    jwt_service = JWTService(
        secret_key="e2e-test-secret-key-0123456789abcdef",
        issuer="snapdi",
        audience="snapdi-clients",
    )
    password_service = PasswordHashingService(rounds=10)

    @asynccontextmanager
    async def scope():
        async with SQLAlchemyUnitOfWork(session_maker) as uow:
            yield Services(uow, email, jwt_service, password_service)
            await uow.commit()

    return scope


async def _register(request_scope, role=UserRole.CUSTOMER):
    async with request_scope() as s:
        return await s.auth.register(
            name="U",
            email=EMAIL,
            password=PASSWORD,
            role=role,
        )


@pytest.mark.integration
class TestSessionLifecycle:
    @pytest.mark.asyncio
    async def test_register_verify_login_refresh_logout(self, request_scope, email):
        await _register(request_scope)

        with pytest.raises(EmailNotVerifiedError):
            async with request_scope() as s:
                await s.auth.login(EMAIL, PASSWORD)

        async with request_scope() as s:
            assert await s.auth.verify_email(email.last_token("verification", EMAIL))

        async with request_scope() as s:
            login = await s.auth.login(EMAIL, PASSWORD)
        assert login.account.is_verified

        async with request_scope() as s:
            refreshed = await s.auth.refresh(login.refresh_token)
        assert refreshed.refresh_token != login.refresh_token

        async with request_scope() as s:
            await s.auth.logout(refreshed.refresh_token)

        with pytest.raises(InvalidRefreshTokenError):
            async with request_scope() as s:
                await s.auth.refresh(refreshed.refresh_token)

    @pytest.mark.asyncio
    async def test_rotated_token_cannot_be_reused(self, request_scope, email):
        await _register(request_scope)
        async with request_scope() as s:
            await s.auth.verify_email(email.last_token("verification"))
        async with request_scope() as s:
            login = await s.auth.login(EMAIL, PASSWORD)
        async with request_scope() as s:
            await s.auth.refresh(login.refresh_token)

        with pytest.raises(InvalidRefreshTokenError):
            async with request_scope() as s:
                await s.auth.refresh(login.refresh_token)

    @pytest.mark.asyncio
    async def test_new_login_replaces_previous_session(self, request_scope, email):
        await _register(request_scope)
        async with request_scope() as s:
            await s.auth.verify_email(email.last_token("verification"))
        async with request_scope() as s:
            first = await s.auth.login(EMAIL, PASSWORD)
        async with request_scope() as s:
            second = await s.auth.login(EMAIL, PASSWORD)

        with pytest.raises(InvalidRefreshTokenError):
            async with request_scope() as s:
                await s.auth.refresh(first.refresh_token)
        async with request_scope() as s:
            assert await s.auth.refresh(second.refresh_token)

    @pytest.mark.asyncio
    async def test_expired_refresh_token_fails_like_unknown(self, request_scope, email):
        account = await _register(request_scope)
        async with request_scope() as s:
            await s.auth.verify_email(email.last_token("verification"))
        async with request_scope() as s:
            login = await s.auth.login(EMAIL, PASSWORD)

        async with request_scope() as s:
            stored = await s.accounts.find_by_id(account.id)
            stored.start_session(
                refresh_token_hash=hash_token(login.refresh_token),
                expires_at=utc_now() - timedelta(seconds=1),
            )
            await s.accounts.save(stored)

        with pytest.raises(InvalidRefreshTokenError) as expired:
            async with request_scope() as s:
                await s.auth.refresh(login.refresh_token)
        with pytest.raises(InvalidRefreshTokenError) as unknown:
            async with request_scope() as s:
                await s.auth.refresh("never-issued")

        assert str(expired.value) == str(unknown.value)

    @pytest.mark.asyncio
    async def test_access_token_carries_account_claims(self, request_scope, email):
        account = await _register(request_scope, role=UserRole.PHOTOGRAPHER)
        async with request_scope() as s:
            await s.auth.verify_email(email.last_token("verification"))
        async with request_scope() as s:
            login = await s.auth.login(EMAIL, PASSWORD)

        async with request_scope() as s:
            claims = s.auth.validate_access_token(login.access_token)

        assert claims is not None
        assert claims.account_id == account.id
        assert claims.email == EMAIL
        assert claims.role == UserRole.PHOTOGRAPHER.value


@pytest.mark.integration
class TestVerificationFlow:
    @pytest.mark.asyncio
    async def test_verification_token_is_single_use(self, request_scope, email):
        await _register(request_scope)
        token = email.last_token("verification")

        async with request_scope() as s:
            assert await s.auth.verify_email(token)
        async with request_scope() as s:
            assert not await s.auth.verify_email(token)

        assert [e.kind for e in email.sent] == ["verification", "welcome"]

    @pytest.mark.asyncio
    async def test_resend_invalidates_earlier_link(self, request_scope, email):
        await _register(request_scope)
        first = email.last_token("verification")

        async with request_scope() as s:
            assert await s.auth.resend_email_verification(EMAIL)
        second = email.last_token("verification")

        async with request_scope() as s:
            assert not await s.auth.verify_email(first)
        async with request_scope() as s:
            assert await s.auth.verify_email(second)

    @pytest.mark.asyncio
    async def test_failed_send_keeps_token(self, request_scope, email):
        await _register(request_scope)
        email.fail = True

        async with request_scope() as s:
            assert not await s.auth.send_email_verification(EMAIL)

        email.fail = False
        async with request_scope() as s:
            assert await s.auth.verify_email(email.last_token("verification"))


@pytest.mark.integration
class TestPasswordResetFlow:
    @pytest.mark.asyncio
    async def test_reset_changes_password_and_ends_session(self, request_scope, email):
        await _register(request_scope)
        async with request_scope() as s:
            await s.auth.verify_email(email.last_token("verification"))
        async with request_scope() as s:
            login = await s.auth.login(EMAIL, PASSWORD)

        async with request_scope() as s:
            await s.reset.request_reset(EMAIL)
        reset_token = email.last_token("password_reset", EMAIL)

        async with request_scope() as s:
            await s.reset.reset_password(reset_token, NEW_PASSWORD)

        with pytest.raises(InvalidRefreshTokenError):
            async with request_scope() as s:
                await s.auth.refresh(login.refresh_token)
        with pytest.raises(InvalidCredentialsError):
            async with request_scope() as s:
                await s.auth.login(EMAIL, PASSWORD)
        async with request_scope() as s:
            assert await s.auth.login(EMAIL, NEW_PASSWORD)

        # The link works once
        with pytest.raises(InvalidResetTokenError):
            async with request_scope() as s:
                await s.reset.reset_password(reset_token, "third-password-3")

    @pytest.mark.asyncio
    async def test_unknown_email_sends_nothing(self, request_scope, email):
        async with request_scope() as s:
            await s.reset.request_reset("nobody@example.com")

        assert email.sent == []


@pytest.mark.integration
class TestAccountContent:
    @pytest.mark.asyncio
    async def test_registered_photographer_publishes_then_is_deleted(
        self,
        request_scope,
    ):
        account = await _register(request_scope, role=UserRole.PHOTOGRAPHER)
        async with request_scope() as s:
            blog = await s.blogs.create_blog(
                author_id=account.id,
                title="Portfolio",
                content="Selected work",
                keyword_names=["portfolio"],
            )
            page = await s.blogs.list_blogs_by_author(account.id, PageRequest())
        assert [b.id for b in page.data] == [blog.id]

        async with request_scope() as s:
            await s.users.delete_user(account.id)

        async with request_scope() as s:
            assert not await s.users.email_exists(EMAIL)
