"""SQLAlchemy implementation of AccountRepository."""

import logging
from datetime import datetime

from sqlalchemy import Select, asc, desc, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from snapdi.domain.shared.pagination import PagedResult, PageRequest
from snapdi.infrastructure.persistence.sqlalchemy.repositories.base_repository import (
    SQLAlchemyRepository,
)
from snapdi_identity.domain.account import (
    Account,
    AccountRepository,
    EmailAlreadyExistsError,
    PhoneAlreadyExistsError,
    UserFilter,
    UserRole,
    normalize_phone,
)
from snapdi_identity.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    "name": UserModel.name,
    "email": UserModel.email,
    "created_at": UserModel.created_at,
}


class AccountRepositorySQLAlchemy(AccountRepository):
    """SQLAlchemy implementation of the AccountRepository interface.

    Generic CRUD and paging are delegated to SQLAlchemyRepository; this class
    adds the credential lookups and maps rows to Account aggregates.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._users: SQLAlchemyRepository[UserModel] = SQLAlchemyRepository(
            session,
            UserModel,
        )

    async def find_by_id(self, account_id: int) -> Account | None:
        return await self._find_one(UserModel.id == account_id)

    async def find_by_email(self, email: str) -> Account | None:
        return await self._find_one(
            func.lower(UserModel.email) == email.strip().lower(),
        )

    async def find_by_phone(self, phone: str) -> Account | None:
        normalized = normalize_phone(phone)
        if not normalized:
            return None
        return await self._find_one(UserModel.phone == normalized)

    async def find_by_email_or_phone(self, identifier: str) -> Account | None:
        value = identifier.strip()
        return await self._find_one(
            or_(
                func.lower(UserModel.email) == value.lower(),
                UserModel.phone == value,
            ),
        )

    async def find_by_refresh_token(
        self,
        token_hash: str,
        now: datetime,
    ) -> Account | None:
        if not token_hash:
            return None
        return await self._find_one(
            UserModel.refresh_token_hash == token_hash,
            UserModel.refresh_token_expires_at > now,
        )

    async def find_by_email_verification_token(
        self,
        token_hash: str,
        now: datetime,
    ) -> Account | None:
        if not token_hash:
            return None
        return await self._find_one(
            UserModel.email_verification_token_hash == token_hash,
            UserModel.email_verification_token_expires_at > now,
        )

    async def rotate_refresh_token(  # noqa: PLR0913
        self,
        account_id: int,
        expected_hash: str,
        new_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> bool:
        stmt = (
            update(UserModel)
            .where(
                UserModel.id == account_id,
                UserModel.refresh_token_hash == expected_hash,
                UserModel.refresh_token_expires_at > now,
            )
            .values(
                refresh_token_hash=new_hash,
                refresh_token_expires_at=expires_at,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        rotated = result.rowcount == 1  # type: ignore[attr-defined]
        if not rotated:
            logger.info("Refresh token rotation lost a race for account %s", account_id)
        return rotated

    async def exists_by_email(self, email: str) -> bool:
        return await self._users.exists(
            func.lower(UserModel.email) == email.strip().lower(),
        )

    async def exists_by_phone(self, phone: str) -> bool:
        normalized = normalize_phone(phone)
        if not normalized:
            return False
        return await self._users.exists(UserModel.phone == normalized)

    async def save(self, account: Account) -> None:
        existing = (
            await self._find_model(UserModel.id == account.id)
            if account.id is not None
            else None
        )

        try:
            if existing:
                self._update_model(existing, account)
                await self._users.save_changes()
                logger.debug("Updated account: %s", account.id)
            else:
                model = self._map_to_model(account)
                await self._users.add(model)
                await self._users.save_changes()
                account.assign_id(model.id)
                logger.info("Created account: %s (email: %s)", model.id, account.email)
        except IntegrityError as e:
            # Only the driver message; the statement text names every column
            message = str(e.orig).lower()
            if "phone" in message:
                raise PhoneAlreadyExistsError(account.phone or "") from e
            if "unique" in message or "duplicate" in message:
                raise EmailAlreadyExistsError(account.email) from e
            raise

    async def delete(self, account_id: int) -> bool:
        deleted = await self._users.delete_by_id(account_id)
        if deleted:
            await self._users.save_changes()
            logger.info("Deleted account: %s", account_id)
        return deleted

    async def count(self) -> int:
        return await self._users.count()

    async def list_paged(self, page: PageRequest) -> PagedResult[Account]:
        result = await self._users.page(page)
        return result.map(self._map_to_domain)

    async def list_by_role(self, role: UserRole) -> list[Account]:
        models = await self._users.find(UserModel.role == role.value)
        return [self._map_to_domain(model) for model in models]

    async def list_active(self) -> list[Account]:
        models = await self._users.find(UserModel.is_active.is_(True))
        return [self._map_to_domain(model) for model in models]

    async def list_verified(self) -> list[Account]:
        models = await self._users.find(UserModel.is_verified.is_(True))
        return [self._map_to_domain(model) for model in models]

    async def get_users_with_filter(
        self,
        user_filter: UserFilter,
    ) -> tuple[list[Account], int]:
        stmt = select(UserModel)
        stmt = self._apply_search_filter(stmt, user_filter.search_term)
        stmt = self._apply_exact_filters(stmt, user_filter)
        stmt = self._apply_created_range_filter(
            stmt,
            user_filter.created_from,
            user_filter.created_to,
        )

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await self._session.execute(count_stmt)).scalar_one()

        stmt = self._apply_sorting(stmt, user_filter)
        page = user_filter.page
        stmt = stmt.offset(page.offset).limit(page.limit)

        result = await self._session.execute(stmt)
        models = result.scalars().all()
        return [self._map_to_domain(model) for model in models], total

    @staticmethod
    def _apply_search_filter(stmt: Select, search_term: str | None) -> Select:
        if not search_term or not search_term.strip():
            return stmt
        term = search_term.strip().lower()
        return stmt.where(
            or_(
                func.lower(UserModel.name).contains(term, autoescape=True),
                func.lower(UserModel.email).contains(term, autoescape=True),
            ),
        )

    @staticmethod
    def _apply_exact_filters(stmt: Select, user_filter: UserFilter) -> Select:
        if user_filter.role is not None:
            stmt = stmt.where(UserModel.role == user_filter.role.value)
        if user_filter.is_active is not None:
            stmt = stmt.where(UserModel.is_active.is_(user_filter.is_active))
        if user_filter.is_verified is not None:
            stmt = stmt.where(UserModel.is_verified.is_(user_filter.is_verified))
        if user_filter.location_city and user_filter.location_city.strip():
            city = user_filter.location_city.strip().lower()
            stmt = stmt.where(func.lower(UserModel.location_city) == city)
        return stmt

    @staticmethod
    def _apply_created_range_filter(
        stmt: Select,
        created_from: datetime | None,
        created_to: datetime | None,
    ) -> Select:
        if created_from is not None:
            stmt = stmt.where(UserModel.created_at >= created_from)
        if created_to is not None:
            stmt = stmt.where(UserModel.created_at <= created_to)
        return stmt

    @staticmethod
    def _apply_sorting(stmt: Select, user_filter: UserFilter) -> Select:
        sort_by = user_filter.normalized_sort_by
        if sort_by is None:
            return stmt.order_by(UserModel.id)
        direction = desc if user_filter.descending else asc
        return stmt.order_by(direction(_SORT_COLUMNS[sort_by]), UserModel.id)

    async def _find_one(self, *criteria) -> Account | None:
        model = await self._find_model(*criteria)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def _find_model(self, *criteria) -> UserModel | None:
        # populate_existing: token rotation updates rows behind the identity map
        stmt = (
            select(UserModel)
            .where(*criteria)
            .limit(1)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalars().first()

    def _map_to_domain(self, model: UserModel) -> Account:
        return Account.reconstitute(
            id=model.id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            password_hash=model.password_hash,
            role=model.role,
            is_active=model.is_active,
            is_verified=model.is_verified,
            location_address=model.location_address,
            location_city=model.location_city,
            avatar_url=model.avatar_url,
            refresh_token_hash=model.refresh_token_hash,
            refresh_token_expires_at=model.refresh_token_expires_at,
            email_verification_token_hash=model.email_verification_token_hash,
            email_verification_token_expires_at=(
                model.email_verification_token_expires_at
            ),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _map_to_model(self, account: Account) -> UserModel:
        model = UserModel()
        self._update_model(model, account)
        model.created_at = account.created_at
        return model

    def _update_model(self, model: UserModel, account: Account) -> None:
        model.name = account.name
        model.email = account.email
        model.phone = account.phone
        model.password_hash = account.password_hash
        model.role = account.role.value
        model.is_active = account.is_active
        model.is_verified = account.is_verified
        model.location_address = account.location_address
        model.location_city = account.location_city
        model.avatar_url = account.avatar_url
        model.refresh_token_hash = account.refresh_token_hash
        model.refresh_token_expires_at = account.refresh_token_expires_at
        model.email_verification_token_hash = account.email_verification_token_hash
        model.email_verification_token_expires_at = (
            account.email_verification_token_expires_at
        )
        model.updated_at = account.updated_at
