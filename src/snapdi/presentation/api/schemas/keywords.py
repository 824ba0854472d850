"""Keyword schemas for request/response models."""

from pydantic import BaseModel, Field

from snapdi.application.dtos import KeywordDTO


class CreateKeywordRequest(BaseModel):
    keyword: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)


class UpdateKeywordRequest(BaseModel):
    keyword: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)


class KeywordResponse(BaseModel):
    id: int
    keyword: str
    description: str | None = None

    @classmethod
    def from_dto(cls, dto: KeywordDTO) -> "KeywordResponse":
        return cls(id=dto.id, keyword=dto.keyword, description=dto.description)
