"""SQLAlchemy model for blog keywords."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from snapdi.infrastructure.persistence.sqlalchemy.models.base import Base


class KeywordModel(Base):
    """A tag that can be attached to any number of blogs."""

    __tablename__ = "keywords"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    keyword: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<KeywordModel(id={self.id}, keyword={self.keyword})>"
