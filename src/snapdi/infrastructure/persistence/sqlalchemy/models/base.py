"""Declarative base shared by content and identity tables."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from snapdi.domain.shared.time import utc_now


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    """``created_at`` set on insert, ``updated_at`` refreshed on every update."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )
