"""SQLAlchemy repository for blogs."""

from __future__ import annotations

from typing import Any

from snapdi.domain.shared.pagination import PagedResult, PageRequest
from snapdi.infrastructure.persistence.sqlalchemy.models import BlogModel, KeywordModel
from snapdi.infrastructure.persistence.sqlalchemy.repositories.base_repository import (
    SQLAlchemyRepository,
)


class BlogRepositorySQLAlchemy(SQLAlchemyRepository[BlogModel]):
    """Blog listings, newest first.

    Keywords are loaded eagerly (selectin) with every blog, so associations
    can be inspected and modified without further IO.
    """

    model = BlogModel

    async def page_all(self, page: PageRequest) -> PagedResult[BlogModel]:
        return await self.page(page, order_by=self._newest_first())

    async def page_active(self, page: PageRequest) -> PagedResult[BlogModel]:
        return await self.page(
            page,
            BlogModel.is_active.is_(True),
            order_by=self._newest_first(),
        )

    async def page_by_author(
        self,
        author_id: int,
        page: PageRequest,
    ) -> PagedResult[BlogModel]:
        return await self.page(
            page,
            BlogModel.author_id == author_id,
            order_by=self._newest_first(),
        )

    async def page_by_keyword(
        self,
        keyword_id: int,
        page: PageRequest,
    ) -> PagedResult[BlogModel]:
        return await self.page(
            page,
            BlogModel.keywords.any(KeywordModel.id == keyword_id),
            order_by=self._newest_first(),
        )

    async def count_by_author(self, author_id: int) -> int:
        return await self.count(BlogModel.author_id == author_id)

    @staticmethod
    def _newest_first() -> list[Any]:
        return [BlogModel.created_at.desc(), BlogModel.id.desc()]
