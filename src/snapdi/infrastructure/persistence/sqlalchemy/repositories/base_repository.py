"""Generic paged repository over a single SQLAlchemy model.

Mutating methods only stage changes in the session; ``save_changes`` flushes
them, and the surrounding unit of work decides whether they are committed.
This lets a service stage several writes (a blog plus its keyword links)
and have them land in one transaction.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Generic, Iterable, Sequence, TypeVar

from sqlalchemy import ColumnElement, Select, exists, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from snapdi.domain.shared.pagination import PagedResult, PageRequest
from snapdi.infrastructure.persistence.sqlalchemy.models.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

Predicate = ColumnElement[bool]


class SQLAlchemyRepository(Generic[ModelT]):
    """CRUD, filtering and offset pagination for one model class.

    Subclasses set ``model``; ad-hoc use passes it to the constructor::

        repo = SQLAlchemyRepository(session, KeywordModel)
        page = await repo.find_paged(KeywordModel.keyword.ilike("s%"), 1, 10)
    """

    model: ClassVar[type[Any] | None] = None

    def __init__(self, session: AsyncSession, model: type[ModelT] | None = None):
        self._session = session
        self._model: type[ModelT] = model or self.model  # type: ignore[assignment]
        if self._model is None:
            msg = f"{type(self).__name__} requires a model class"
            raise TypeError(msg)

    @property
    def session(self) -> AsyncSession:
        return self._session

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: Any) -> ModelT | None:
        return await self._session.get(self._model, entity_id)

    async def get_all(self) -> list[ModelT]:
        stmt = select(self._model).order_by(*self._default_order())
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_paged(self, page_number: int, page_size: int) -> list[ModelT]:
        """Return one page of all rows, ordered by primary key."""
        stmt = self._paginate(
            select(self._model).order_by(*self._default_order()),
            page_number,
            page_size,
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def find(
        self,
        predicate: Predicate,
        order_by: Sequence[Any] | None = None,
    ) -> list[ModelT]:
        stmt = select(self._model).where(predicate)
        stmt = stmt.order_by(*(order_by or self._default_order()))
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def find_paged(
        self,
        predicate: Predicate,
        page_number: int,
        page_size: int,
        order_by: Sequence[Any] | None = None,
    ) -> list[ModelT]:
        """Return one page of the rows matching ``predicate``.

        Parameters
        ----------
        predicate
            SQLAlchemy boolean expression, e.g. ``BlogModel.is_active.is_(True)``
        page_number
            1-based page; callers are expected to have clamped it
        page_size
            Rows per page; callers are expected to have clamped it
        order_by
            Sort columns (defaults to the primary key)
        """
        stmt = select(self._model).where(predicate)
        stmt = stmt.order_by(*(order_by or self._default_order()))
        result = await self._session.execute(
            self._paginate(stmt, page_number, page_size),
        )
        return list(result.scalars().all())

    async def page(
        self,
        page: PageRequest,
        predicate: Predicate | None = None,
        order_by: Sequence[Any] | None = None,
    ) -> PagedResult[ModelT]:
        """Fetch a page together with the total match count."""
        stmt = select(self._model)
        if predicate is not None:
            stmt = stmt.where(predicate)
        stmt = stmt.order_by(*(order_by or self._default_order()))
        result = await self._session.execute(
            self._paginate(stmt, page.page_number, page.page_size),
        )
        items = list(result.scalars().all())
        total = await self.count(predicate)
        return PagedResult.create(items, total, page)

    async def first_or_default(self, predicate: Predicate) -> ModelT | None:
        stmt = select(self._model).where(predicate).limit(1)
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def exists(self, predicate: Predicate) -> bool:
        stmt = select(exists().where(predicate))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def count(self, predicate: Predicate | None = None) -> int:
        stmt = select(func.count()).select_from(self._model)
        if predicate is not None:
            stmt = stmt.where(predicate)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    # ------------------------------------------------------------------
    # Mutations (staged until save_changes / commit)
    # ------------------------------------------------------------------

    async def add(self, entity: ModelT) -> ModelT:
        self._session.add(entity)
        return entity

    async def add_range(self, entities: Iterable[ModelT]) -> list[ModelT]:
        staged = list(entities)
        self._session.add_all(staged)
        return staged

    async def update(self, entity: ModelT) -> ModelT:
        """Stage changes of an entity; detached instances are merged in."""
        if entity in self._session:
            return entity
        return await self._session.merge(entity)

    async def delete(self, entity: ModelT) -> None:
        await self._session.delete(entity)

    async def delete_by_id(self, entity_id: Any) -> bool:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self._session.delete(entity)
        return True

    async def save_changes(self) -> None:
        """Flush staged mutations to the database (does not commit)."""
        await self._session.flush()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _default_order(self) -> list[Any]:
        return list(inspect(self._model).primary_key)

    @staticmethod
    def _paginate(stmt: Select, page_number: int, page_size: int) -> Select:
        skip = (page_number - 1) * page_size
        return stmt.offset(skip).limit(page_size)
