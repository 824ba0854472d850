"""Keyword management."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from snapdi.application.dtos import KeywordDTO
from snapdi.domain.content import DuplicateKeywordError, KeywordNotFoundError
from snapdi.domain.shared.exceptions import ValidationError
from snapdi.domain.shared.pagination import PagedResult, PageRequest
from snapdi.infrastructure.persistence.sqlalchemy.models import KeywordModel
from snapdi.infrastructure.persistence.sqlalchemy.repositories import (
    KeywordRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

MAX_KEYWORD_LENGTH = 100


def normalize_keyword(name: str | None) -> str:
    """Strip a keyword name and check its length.

    Raises
    ------
    ValidationError
        If the name is empty or longer than MAX_KEYWORD_LENGTH
    """
    value = (name or "").strip()
    if not value:
        msg = "Keyword cannot be empty"
        raise ValidationError(msg)
    if len(value) > MAX_KEYWORD_LENGTH:
        msg = f"Keyword cannot exceed {MAX_KEYWORD_LENGTH} characters"
        raise ValidationError(msg)
    return value


class KeywordService:
    """CRUD over keywords; names are unique case-insensitively."""

    def __init__(self, keyword_repository: KeywordRepositorySQLAlchemy):
        self._keyword_repo = keyword_repository

    async def create_keyword(
        self,
        keyword: str,
        description: str | None = None,
    ) -> KeywordDTO:
        name = normalize_keyword(keyword)
        if await self._keyword_repo.exists_by_name(name):
            raise DuplicateKeywordError(name)

        model = KeywordModel(keyword=name, description=description)
        await self._keyword_repo.add(model)
        await self._flush(name)
        logger.info("Keyword created: %s", model.id)
        return KeywordDTO.from_model(model)

    async def get_keyword(self, keyword_id: int) -> KeywordDTO:
        return KeywordDTO.from_model(await self._get_model(keyword_id))

    async def get_by_name(self, name: str) -> KeywordDTO | None:
        model = await self._keyword_repo.find_by_name(name)
        return KeywordDTO.from_model(model) if model else None

    async def list_keywords(self) -> list[KeywordDTO]:
        return [KeywordDTO.from_model(m) for m in await self._keyword_repo.get_all()]

    async def list_keywords_paged(self, page: PageRequest) -> PagedResult[KeywordDTO]:
        result = await self._keyword_repo.page(page)
        return result.map(KeywordDTO.from_model)

    async def update_keyword(
        self,
        keyword_id: int,
        keyword: str | None = None,
        description: str | None = None,
    ) -> KeywordDTO:
        """Rename a keyword and/or change its description.

        Raises
        ------
        KeywordNotFoundError
            If the keyword does not exist
        DuplicateKeywordError
            If another keyword already uses the new name
        """
        model = await self._get_model(keyword_id)

        if keyword is not None:
            name = normalize_keyword(keyword)
            if await self._keyword_repo.exists_by_name(name, exclude_id=keyword_id):
                raise DuplicateKeywordError(name)
            model.keyword = name
        if description is not None:
            model.description = description

        await self._keyword_repo.update(model)
        await self._flush(model.keyword)
        return KeywordDTO.from_model(model)

    async def delete_keyword(self, keyword_id: int) -> None:
        model = await self._get_model(keyword_id)
        await self._keyword_repo.delete_with_links(model)
        await self._keyword_repo.save_changes()
        logger.info("Keyword deleted: %s", keyword_id)

    async def get_or_create(self, name: str) -> KeywordDTO:
        normalized = normalize_keyword(name)
        existing = await self._keyword_repo.find_by_name(normalized)
        if existing is not None:
            return KeywordDTO.from_model(existing)
        return await self.create_keyword(normalized)

    async def keyword_exists(self, name: str) -> bool:
        return await self._keyword_repo.exists_by_name(name)

    async def _get_model(self, keyword_id: int) -> KeywordModel:
        model = await self._keyword_repo.get_by_id(keyword_id)
        if model is None:
            raise KeywordNotFoundError(keyword_id)
        return model

    async def _flush(self, name: str) -> None:
        # A concurrent insert of the same name surfaces as a unique violation
        try:
            await self._keyword_repo.save_changes()
        except IntegrityError as e:
            raise DuplicateKeywordError(name) from e
