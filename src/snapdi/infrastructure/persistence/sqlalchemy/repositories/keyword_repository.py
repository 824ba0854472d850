"""SQLAlchemy repository for keywords."""

from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy import delete, func

from snapdi.infrastructure.persistence.sqlalchemy.models import (
    KeywordModel,
    blog_keywords,
)
from snapdi.infrastructure.persistence.sqlalchemy.repositories.base_repository import (
    SQLAlchemyRepository,
)

logger = logging.getLogger(__name__)


class KeywordRepositorySQLAlchemy(SQLAlchemyRepository[KeywordModel]):
    """Keyword lookups on top of the generic repository.

    Keyword names are compared case-insensitively.
    """

    model = KeywordModel

    async def find_by_name(self, name: str) -> KeywordModel | None:
        return await self.first_or_default(self._name_matches(name))

    async def exists_by_name(self, name: str, exclude_id: int | None = None) -> bool:
        predicate = self._name_matches(name)
        if exclude_id is not None:
            predicate = predicate & (KeywordModel.id != exclude_id)
        return await self.exists(predicate)

    async def find_by_ids(self, keyword_ids: Iterable[int]) -> list[KeywordModel]:
        ids = list(dict.fromkeys(keyword_ids))
        if not ids:
            return []
        return await self.find(KeywordModel.id.in_(ids))

    async def delete_with_links(self, keyword: KeywordModel) -> None:
        """Delete a keyword and detach it from every blog."""
        await self.session.execute(
            delete(blog_keywords).where(blog_keywords.c.keyword_id == keyword.id),
        )
        await self.delete(keyword)
        logger.debug("Keyword %s deleted with its blog links", keyword.id)

    @staticmethod
    def _name_matches(name: str):
        return func.lower(KeywordModel.keyword) == name.strip().lower()
