"""SQLAlchemy persistence: models, repositories and the unit of work."""

from snapdi.infrastructure.persistence.sqlalchemy.unit_of_work import (
    SQLAlchemyUnitOfWork,
    create_engine_from_url,
    create_session_maker,
)

__all__ = [
    "SQLAlchemyUnitOfWork",
    "create_engine_from_url",
    "create_session_maker",
]
