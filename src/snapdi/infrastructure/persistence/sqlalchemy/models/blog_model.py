"""SQLAlchemy models for blogs and their keyword associations."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from snapdi.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from snapdi.infrastructure.persistence.sqlalchemy.models.keyword_model import (
    KeywordModel,
)

blog_keywords = Table(
    "blog_keywords",
    Base.metadata,
    Column(
        "blog_id",
        Integer,
        ForeignKey("blogs.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "keyword_id",
        Integer,
        ForeignKey("keywords.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class BlogModel(Base, TimestampMixin):
    """A blog post written by a platform user."""

    __tablename__ = "blogs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    thumbnail_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    keywords: Mapped[list[KeywordModel]] = relationship(
        KeywordModel,
        secondary=blog_keywords,
        lazy="selectin",
        order_by=KeywordModel.id,
    )

    def __repr__(self) -> str:
        return f"<BlogModel(id={self.id}, title={self.title!r})>"
