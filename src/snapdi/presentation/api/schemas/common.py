"""Common schemas shared across API endpoints."""

from datetime import datetime, timezone
from typing import Callable, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from snapdi.domain.shared.pagination import PagedResult
from snapdi.domain.shared.results import AssociationResult

T = TypeVar("T")
ItemT = TypeVar("ItemT")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    detail: str = Field(..., description="Error message")
    code: str | None = Field(None, description="Error code for programmatic handling")
    timestamp: datetime = Field(
        default_factory=_utc_now,
        description="When the error occurred",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"detail": "Blog not found: 42", "code": "BLOG_NOT_FOUND"},
        },
    )


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class HealthResponse(BaseModel):
    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    api_versions: list[str] = Field(default_factory=lambda: ["v1"])


class PagedResponse(BaseModel, Generic[T]):
    """One page of items with navigation metadata."""

    data: list[T] = Field(..., description="Items on this page")
    total_records: int = Field(..., description="Matches before paging")
    page_number: int = Field(..., description="1-based page number")
    page_size: int = Field(..., description="Items per page")
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def from_result(
        cls,
        result: PagedResult[ItemT],
        to_item: Callable[[ItemT], T],
    ) -> "PagedResponse[T]":
        return cls(
            data=[to_item(item) for item in result.data],
            total_records=result.total_records,
            page_number=result.page_number,
            page_size=result.page_size,
            total_pages=result.total_pages,
            has_next_page=result.has_next_page,
            has_previous_page=result.has_previous_page,
        )


class AssociationResponse(BaseModel):
    """Outcome of a keyword association update."""

    outcome: str
    applied: list[int] = Field(default_factory=list)
    missing: list[int] = Field(default_factory=list)
    message: str = ""

    @classmethod
    def from_result(cls, result: AssociationResult) -> "AssociationResponse":
        return cls(
            outcome=result.outcome.value,
            applied=list(result.applied),
            missing=list(result.missing),
            message=result.message,
        )
