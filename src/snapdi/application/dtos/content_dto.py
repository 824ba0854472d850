"""DTOs for blogs, keywords and photographer profiles."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from snapdi.domain.shared.time import ensure_tz_aware

if TYPE_CHECKING:
    from snapdi.infrastructure.persistence.sqlalchemy.models import (
        BlogModel,
        KeywordModel,
        PhotographerProfileModel,
    )
    from snapdi_identity.domain.account import Account


@dataclass(frozen=True)
class KeywordDTO:
    id: int
    keyword: str
    description: Optional[str] = None

    @classmethod
    def from_model(cls, model: KeywordModel) -> KeywordDTO:
        return cls(id=model.id, keyword=model.keyword, description=model.description)


@dataclass(frozen=True)
class BlogDTO:
    """A blog post with its keywords, detached from the session."""

    id: int
    author_id: int
    title: str
    content: str
    thumbnail_url: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime
    keywords: tuple[KeywordDTO, ...] = field(default_factory=tuple)

    @property
    def keyword_ids(self) -> list[int]:
        return [k.id for k in self.keywords]

    @classmethod
    def from_model(cls, model: BlogModel) -> BlogDTO:
        return cls(
            id=model.id,
            author_id=model.author_id,
            title=model.title,
            content=model.content,
            thumbnail_url=model.thumbnail_url,
            is_active=model.is_active,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
            keywords=tuple(KeywordDTO.from_model(k) for k in model.keywords),
        )


@dataclass(frozen=True)
class PhotographerProfileDTO:
    user_id: int
    years_of_experience: Optional[int]
    avg_rating: Optional[Decimal]
    is_available: bool
    description: Optional[str]

    @classmethod
    def from_model(cls, model: PhotographerProfileModel) -> PhotographerProfileDTO:
        return cls(
            user_id=model.user_id,
            years_of_experience=model.years_of_experience,
            avg_rating=model.avg_rating,
            is_available=model.is_available,
            description=model.description,
        )


@dataclass(frozen=True)
class UserWithPhotographerProfile:
    """An account together with its photographer profile, if it has one."""

    account: Account
    profile: Optional[PhotographerProfileDTO] = None

    @property
    def is_photographer(self) -> bool:
        return self.profile is not None
