"""SQLAlchemy repositories for the content domain."""

from snapdi.infrastructure.persistence.sqlalchemy.repositories.base_repository import (
    Predicate,
    SQLAlchemyRepository,
)
from snapdi.infrastructure.persistence.sqlalchemy.repositories.blog_repository import (
    BlogRepositorySQLAlchemy,
)
from snapdi.infrastructure.persistence.sqlalchemy.repositories.keyword_repository import (  # noqa: E501
    KeywordRepositorySQLAlchemy,
)
from snapdi.infrastructure.persistence.sqlalchemy.repositories.photographer_profile_repository import (  # noqa: E501
    PhotographerProfileRepositorySQLAlchemy,
)

__all__ = [
    "BlogRepositorySQLAlchemy",
    "KeywordRepositorySQLAlchemy",
    "PhotographerProfileRepositorySQLAlchemy",
    "Predicate",
    "SQLAlchemyRepository",
]
