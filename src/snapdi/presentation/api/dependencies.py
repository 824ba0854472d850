"""FastAPI dependency injection for the Snapdi API.

Provides dependencies for:
- The request-scoped unit of work (one session, one transaction)
- Authentication (current account from JWT) and role checks
- Service instances
"""

import logging
from typing import Annotated, AsyncGenerator, Callable

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from snapdi.application.services import (
    BlogService,
    KeywordService,
    PhotographerService,
)
from snapdi.domain.shared.exceptions import ForbiddenError
from snapdi.infrastructure.persistence.sqlalchemy import SQLAlchemyUnitOfWork
from snapdi.infrastructure.persistence.sqlalchemy.repositories import (
    BlogRepositorySQLAlchemy,
    KeywordRepositorySQLAlchemy,
    PhotographerProfileRepositorySQLAlchemy,
)
from snapdi.presentation.api.config import get_api_settings
from snapdi_config.settings import Settings
from snapdi_identity import (
    Account,
    InvalidTokenError,
    JWTService,
    PasswordHashingService,
    UserRole,
    account_has_role,
)
from snapdi_identity.application.services import (
    AuthenticationService,
    PasswordResetService,
    UserService,
)
from snapdi_identity.infrastructure.email import EmailDispatcher, SmtpEmailDispatcher
from snapdi_identity.infrastructure.persistence.sqlalchemy import (
    AccountRepositorySQLAlchemy,
    PasswordResetTokenRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


# -----------------------------------------------------------------------------
# Unit of Work
# -----------------------------------------------------------------------------


async def get_unit_of_work(
    request: Request,
) -> AsyncGenerator[SQLAlchemyUnitOfWork, None]:
    """
    Request-scoped unit of work.

    Commits when the endpoint returns normally. Any exception (including
    HTTPException) leaves the context without a commit, which rolls back.

    Yields
    ------
    An active SQLAlchemyUnitOfWork
    """
    async with SQLAlchemyUnitOfWork(request.app.state.session_maker) as uow:
        yield uow
        await uow.commit()


UoW = Annotated[SQLAlchemyUnitOfWork, Depends(get_unit_of_work)]


def get_account_repository(uow: UoW) -> AccountRepositorySQLAlchemy:
    return AccountRepositorySQLAlchemy(uow.session)


AccountRepo = Annotated[AccountRepositorySQLAlchemy, Depends(get_account_repository)]


# -----------------------------------------------------------------------------
# Infrastructure Services
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        access_token_expire_hours=settings.jwt_access_token_expire_hours,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    return PasswordHashingService(rounds=settings.bcrypt_rounds)


def get_email_dispatcher(settings: SettingsDep) -> EmailDispatcher:
    """SMTP dispatcher; tests swap it through ``app.dependency_overrides``."""
    return SmtpEmailDispatcher(settings)


JWTServiceDep = Annotated[JWTService, Depends(get_jwt_service)]
PasswordServiceDep = Annotated[PasswordHashingService, Depends(get_password_service)]
EmailDispatcherDep = Annotated[EmailDispatcher, Depends(get_email_dispatcher)]


# -----------------------------------------------------------------------------
# Application Services
# -----------------------------------------------------------------------------


def get_authentication_service(  # noqa: PLR0913
    account_repo: AccountRepo,
    password_service: PasswordServiceDep,
    jwt_service: JWTServiceDep,
    email_dispatcher: EmailDispatcherDep,
    settings: SettingsDep,
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    This service orchestrates registration, login, token rotation and
    email verification.
    """
    return AuthenticationService(
        account_repository=account_repo,
        password_service=password_service,
        jwt_service=jwt_service,
        email_dispatcher=email_dispatcher,
        refresh_token_expire_days=settings.jwt_refresh_token_expire_days,
        verification_token_expire_hours=settings.email_verification_token_expire_hours,
    )


def get_password_reset_service(
    uow: UoW,
    account_repo: AccountRepo,
    password_service: PasswordServiceDep,
    email_dispatcher: EmailDispatcherDep,
    settings: SettingsDep,
) -> PasswordResetService:
    return PasswordResetService(
        account_repository=account_repo,
        token_repository=PasswordResetTokenRepositorySQLAlchemy(uow.session),
        password_service=password_service,
        email_dispatcher=email_dispatcher,
        token_expiry_hours=settings.password_reset_token_expire_hours,
    )


def get_user_service(account_repo: AccountRepo) -> UserService:
    return UserService(account_repo)


def get_keyword_service(uow: UoW) -> KeywordService:
    return KeywordService(KeywordRepositorySQLAlchemy(uow.session))


def get_blog_service(uow: UoW, account_repo: AccountRepo) -> BlogService:
    return BlogService(
        blog_repository=BlogRepositorySQLAlchemy(uow.session),
        keyword_repository=KeywordRepositorySQLAlchemy(uow.session),
        account_repository=account_repo,
    )


def get_photographer_service(
    uow: UoW,
    account_repo: AccountRepo,
) -> PhotographerService:
    return PhotographerService(
        account_repository=account_repo,
        profile_repository=PhotographerProfileRepositorySQLAlchemy(uow.session),
    )


AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]
ResetService = Annotated[PasswordResetService, Depends(get_password_reset_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
KeywordServiceDep = Annotated[KeywordService, Depends(get_keyword_service)]
BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]
PhotographerServiceDep = Annotated[
    PhotographerService,
    Depends(get_photographer_service),
]


# -----------------------------------------------------------------------------
# Current Account (JWT Authentication)
# -----------------------------------------------------------------------------


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_account(
    account_repo: AccountRepo,
    jwt_service: JWTServiceDep,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Account:
    """
    FastAPI dependency to get the current authenticated account from JWT.

    Raises
    ------
    HTTPException
        401 if the token is missing or invalid, or the account is gone
        or deactivated
    """
    if credentials is None:
        raise _unauthorized("Authentication required")

    try:
        claims = jwt_service.decode_access_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.debug("Rejected access token: %s", e.message)
        raise _unauthorized("Invalid or expired token") from e

    account = await account_repo.find_by_id(claims.account_id)
    if account is None:
        logger.warning("Account not found for token: %s", claims.account_id)
        raise _unauthorized("User not found")
    if not account.is_active:
        raise _unauthorized("Account is not active")

    return account


CurrentAccount = Annotated[Account, Depends(get_current_account)]


def require_role(role: UserRole) -> Callable:
    """Build a dependency that only admits accounts holding ``role``."""

    async def _require_role(account: CurrentAccount) -> Account:
        if not account_has_role(account, role):
            msg = f"{role.value.capitalize()} access required"
            raise ForbiddenError(msg)
        return account

    return _require_role


AdminAccount = Annotated[Account, Depends(require_role(UserRole.ADMIN))]


def ensure_self_or_admin(account: Account, target_id: int) -> None:
    """Raise ForbiddenError unless ``account`` is ``target_id`` or an admin."""
    if account.id != target_id and not account_has_role(account, UserRole.ADMIN):
        msg = "You can only access your own account"
        raise ForbiddenError(msg)
