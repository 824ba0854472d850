"""Blog schemas for request/response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from snapdi.application.dtos import BlogDTO
from snapdi.presentation.api.schemas.keywords import KeywordResponse


class CreateBlogRequest(BaseModel):
    """Request schema for creating a blog post.

    ``author_id`` defaults to the caller; only admins may post for others.
    """

    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    thumbnail_url: str | None = Field(default=None, max_length=500)
    author_id: int | None = None
    is_active: bool = True
    keyword_ids: list[int] = Field(default_factory=list)
    keyword_names: list[str] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Golden hour in Hoi An",
                "content": "Tips for shooting at sunset...",
                "keyword_ids": [1, 4],
                "keyword_names": ["travel"],
            },
        },
    )


class UpdateBlogRequest(BaseModel):
    """Partial update; keyword lists, when present, replace the current set."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    content: str | None = Field(default=None, min_length=1)
    thumbnail_url: str | None = Field(default=None, max_length=500)
    is_active: bool | None = None
    keyword_ids: list[int] | None = None
    keyword_names: list[str] | None = None


class KeywordIdsRequest(BaseModel):
    keyword_ids: list[int] = Field(..., description="Keyword ids to link")


class KeywordNamesRequest(BaseModel):
    keyword_names: list[str] = Field(..., min_length=1)


class BlogResponse(BaseModel):
    id: int
    author_id: int
    title: str
    content: str
    thumbnail_url: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    keywords: list[KeywordResponse] = Field(default_factory=list)

    @classmethod
    def from_dto(cls, dto: BlogDTO) -> "BlogResponse":
        return cls(
            id=dto.id,
            author_id=dto.author_id,
            title=dto.title,
            content=dto.content,
            thumbnail_url=dto.thumbnail_url,
            is_active=dto.is_active,
            created_at=dto.created_at,
            updated_at=dto.updated_at,
            keywords=[KeywordResponse.from_dto(k) for k in dto.keywords],
        )
