"""Blog posts and their keyword associations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from snapdi.application.dtos import BlogDTO
from snapdi.application.services.keyword_service import normalize_keyword
from snapdi.domain.content import BlogNotFoundError, KeywordNotFoundError
from snapdi.domain.shared.exceptions import ValidationError
from snapdi.domain.shared.pagination import PagedResult, PageRequest
from snapdi.domain.shared.results import AssociationResult
from snapdi.infrastructure.persistence.sqlalchemy.models import BlogModel, KeywordModel
from snapdi_identity.domain.account import AccountNotFoundError

if TYPE_CHECKING:
    from snapdi.infrastructure.persistence.sqlalchemy.repositories import (
        BlogRepositorySQLAlchemy,
        KeywordRepositorySQLAlchemy,
    )
    from snapdi_identity.domain.account import AccountRepository

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 255


@dataclass(frozen=True)
class UpdateBlog:
    """Partial blog update.

    ``None`` leaves a field unchanged. When ``keyword_ids`` or
    ``keyword_names`` is given, the keyword set is replaced by their union;
    an empty list clears it.
    """

    title: Optional[str] = None
    content: Optional[str] = None
    thumbnail_url: Optional[str] = None
    is_active: Optional[bool] = None
    keyword_ids: Optional[Sequence[int]] = None
    keyword_names: Optional[Sequence[str]] = None

    @property
    def replaces_keywords(self) -> bool:
        return self.keyword_ids is not None or self.keyword_names is not None


class BlogService:
    """Application service for blog posts.

    Every write is staged and flushed; the caller's unit of work commits, so
    a blog and its keyword links are persisted together or not at all.
    """

    def __init__(
        self,
        blog_repository: BlogRepositorySQLAlchemy,
        keyword_repository: KeywordRepositorySQLAlchemy,
        account_repository: AccountRepository,
    ):
        self._blog_repo = blog_repository
        self._keyword_repo = keyword_repository
        self._account_repo = account_repository

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def create_blog(  # noqa: PLR0913
        self,
        author_id: int,
        title: str,
        content: str,
        thumbnail_url: str | None = None,
        keyword_ids: Sequence[int] = (),
        keyword_names: Sequence[str] = (),
        is_active: bool = True,
    ) -> BlogDTO:
        """Create a blog post with its keywords.

        Keyword ids must all exist; keyword names are created on demand.

        Raises
        ------
        AccountNotFoundError
            If the author does not exist
        KeywordNotFoundError
            If any keyword id is unknown (nothing is created)
        ValidationError
            If title or content is blank
        """
        if await self._account_repo.find_by_id(author_id) is None:
            raise AccountNotFoundError(author_id)

        keywords = await self._resolve_keywords(keyword_ids, keyword_names)
        blog = BlogModel(
            author_id=author_id,
            title=self._validate_title(title),
            content=self._validate_content(content),
            thumbnail_url=thumbnail_url,
            is_active=is_active,
            keywords=keywords,
        )
        await self._blog_repo.add(blog)
        await self._blog_repo.save_changes()

        logger.info("Blog created: %s (author: %s)", blog.id, author_id)
        return BlogDTO.from_model(blog)

    async def get_blog(self, blog_id: int) -> BlogDTO:
        return BlogDTO.from_model(await self._get_model(blog_id))

    async def update_blog(self, blog_id: int, changes: UpdateBlog) -> BlogDTO:
        blog = await self._get_model(blog_id)

        if changes.replaces_keywords:
            blog.keywords = await self._resolve_keywords(
                changes.keyword_ids or (),
                changes.keyword_names or (),
            )
        if changes.title is not None:
            blog.title = self._validate_title(changes.title)
        if changes.content is not None:
            blog.content = self._validate_content(changes.content)
        if changes.thumbnail_url is not None:
            blog.thumbnail_url = changes.thumbnail_url
        if changes.is_active is not None:
            blog.is_active = changes.is_active

        await self._blog_repo.update(blog)
        await self._blog_repo.save_changes()
        logger.info("Blog updated: %s", blog_id)
        return BlogDTO.from_model(blog)

    async def delete_blog(self, blog_id: int) -> None:
        blog = await self._get_model(blog_id)
        await self._blog_repo.delete(blog)
        await self._blog_repo.save_changes()
        logger.info("Blog deleted: %s", blog_id)

    async def blog_exists(self, blog_id: int) -> bool:
        return await self._blog_repo.exists(BlogModel.id == blog_id)

    async def get_author_id(self, blog_id: int) -> int:
        return (await self._get_model(blog_id)).author_id

    # ------------------------------------------------------------------
    # Listings (newest first)
    # ------------------------------------------------------------------

    async def list_blogs(self, page: PageRequest) -> PagedResult[BlogDTO]:
        return (await self._blog_repo.page_all(page)).map(BlogDTO.from_model)

    async def list_active_blogs(self, page: PageRequest) -> PagedResult[BlogDTO]:
        return (await self._blog_repo.page_active(page)).map(BlogDTO.from_model)

    async def list_blogs_by_author(
        self,
        author_id: int,
        page: PageRequest,
    ) -> PagedResult[BlogDTO]:
        result = await self._blog_repo.page_by_author(author_id, page)
        return result.map(BlogDTO.from_model)

    async def list_blogs_by_keyword(
        self,
        keyword_id: int,
        page: PageRequest,
    ) -> PagedResult[BlogDTO]:
        result = await self._blog_repo.page_by_keyword(keyword_id, page)
        return result.map(BlogDTO.from_model)

    # ------------------------------------------------------------------
    # Keyword associations
    # ------------------------------------------------------------------

    async def add_keyword(self, blog_id: int, keyword_id: int) -> AssociationResult:
        """Link a single keyword; linking it twice is a CONFLICT."""
        blog = await self._blog_repo.get_by_id(blog_id)
        if blog is None:
            return AssociationResult.not_found(f"Blog not found: {blog_id}")

        if keyword_id in {k.id for k in blog.keywords}:
            return AssociationResult.conflict(
                f"Keyword {keyword_id} is already linked to blog {blog_id}",
            )
        return await self.add_keywords(blog_id, [keyword_id])

    async def add_keywords(
        self,
        blog_id: int,
        keyword_ids: Iterable[int],
    ) -> AssociationResult:
        """Link several keywords at once.

        All ids are checked before anything is linked. Ids that are already
        linked are skipped and not reported in ``applied``.
        """
        blog = await self._blog_repo.get_by_id(blog_id)
        if blog is None:
            return AssociationResult.not_found(f"Blog not found: {blog_id}")

        requested = list(dict.fromkeys(keyword_ids))
        found = await self._keyword_repo.find_by_ids(requested)
        missing = self._missing_ids(requested, found)
        if missing:
            return AssociationResult.not_found(
                KeywordNotFoundError(missing).message,
                missing=missing,
            )

        linked = {k.id for k in blog.keywords}
        new = [k for k in found if k.id not in linked]
        blog.keywords.extend(new)
        await self._blog_repo.save_changes()
        return AssociationResult.success(tuple(k.id for k in new))

    async def add_keywords_by_name(
        self,
        blog_id: int,
        keyword_names: Iterable[str],
    ) -> AssociationResult:
        """Link keywords by name, creating the ones that do not exist yet."""
        blog = await self._blog_repo.get_by_id(blog_id)
        if blog is None:
            return AssociationResult.not_found(f"Blog not found: {blog_id}")

        keywords = await self._resolve_keywords((), list(keyword_names))
        linked = {k.id for k in blog.keywords}
        new = [k for k in keywords if k.id not in linked]
        blog.keywords.extend(new)
        await self._blog_repo.save_changes()
        return AssociationResult.success(tuple(k.id for k in new))

    async def remove_keyword(self, blog_id: int, keyword_id: int) -> AssociationResult:
        blog = await self._blog_repo.get_by_id(blog_id)
        if blog is None:
            return AssociationResult.not_found(f"Blog not found: {blog_id}")

        keyword = next((k for k in blog.keywords if k.id == keyword_id), None)
        if keyword is None:
            return AssociationResult.not_found(
                f"Keyword {keyword_id} is not linked to blog {blog_id}",
                missing=(keyword_id,),
            )

        blog.keywords.remove(keyword)
        await self._blog_repo.save_changes()
        return AssociationResult.success((keyword_id,))

    async def replace_keywords(
        self,
        blog_id: int,
        keyword_ids: Iterable[int],
    ) -> AssociationResult:
        """Make ``keyword_ids`` the blog's exact keyword set."""
        blog = await self._blog_repo.get_by_id(blog_id)
        if blog is None:
            return AssociationResult.not_found(f"Blog not found: {blog_id}")

        requested = list(dict.fromkeys(keyword_ids))
        found = await self._keyword_repo.find_by_ids(requested)
        missing = self._missing_ids(requested, found)
        if missing:
            return AssociationResult.not_found(
                KeywordNotFoundError(missing).message,
                missing=missing,
            )

        blog.keywords = found
        await self._blog_repo.save_changes()
        return AssociationResult.success(tuple(k.id for k in found))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get_model(self, blog_id: int) -> BlogModel:
        blog = await self._blog_repo.get_by_id(blog_id)
        if blog is None:
            raise BlogNotFoundError(blog_id)
        return blog

    async def _resolve_keywords(
        self,
        keyword_ids: Sequence[int],
        keyword_names: Sequence[str],
    ) -> list[KeywordModel]:
        ids = list(dict.fromkeys(keyword_ids))
        keywords = await self._keyword_repo.find_by_ids(ids)
        missing = self._missing_ids(ids, keywords)
        if missing:
            raise KeywordNotFoundError(missing)

        seen = {k.id for k in keywords}
        for raw_name in keyword_names:
            name = normalize_keyword(raw_name)
            keyword = await self._keyword_repo.find_by_name(name)
            if keyword is None:
                keyword = KeywordModel(keyword=name)
                await self._keyword_repo.add(keyword)
                await self._keyword_repo.save_changes()
                logger.debug("Keyword created on demand: %s", keyword.id)
            if keyword.id not in seen:
                seen.add(keyword.id)
                keywords.append(keyword)
        return keywords

    @staticmethod
    def _missing_ids(
        requested: Sequence[int],
        found: Sequence[KeywordModel],
    ) -> tuple[int, ...]:
        found_ids = {k.id for k in found}
        return tuple(i for i in requested if i not in found_ids)

    @staticmethod
    def _validate_title(title: str) -> str:
        value = (title or "").strip()
        if not value:
            msg = "Title cannot be empty"
            raise ValidationError(msg)
        if len(value) > MAX_TITLE_LENGTH:
            msg = f"Title cannot exceed {MAX_TITLE_LENGTH} characters"
            raise ValidationError(msg)
        return value

    @staticmethod
    def _validate_content(content: str) -> str:
        if not (content or "").strip():
            msg = "Content cannot be empty"
            raise ValidationError(msg)
        return content
