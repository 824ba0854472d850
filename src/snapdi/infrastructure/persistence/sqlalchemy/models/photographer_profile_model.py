"""SQLAlchemy model for photographer profiles."""

from decimal import Decimal

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from snapdi.infrastructure.persistence.sqlalchemy.models.base import Base


class PhotographerProfileModel(Base):
    """Professional details of an account holding the photographer role.

    Keyed by the owning user's id (one profile per user).
    """

    __tablename__ = "photographer_profiles"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    years_of_experience: Mapped[int | None] = mapped_column(Integer, nullable=True)
    avg_rating: Mapped[Decimal | None] = mapped_column(Numeric(3, 2), nullable=True)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<PhotographerProfileModel(user_id={self.user_id})>"
