"""SQLAlchemy models for the Snapdi content domain.

Account tables are defined in snapdi_identity and share this Base.
"""

from snapdi.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from snapdi.infrastructure.persistence.sqlalchemy.models.blog_model import (
    BlogModel,
    blog_keywords,
)
from snapdi.infrastructure.persistence.sqlalchemy.models.keyword_model import (
    KeywordModel,
)
from snapdi.infrastructure.persistence.sqlalchemy.models.photographer_profile_model import (  # noqa: E501
    PhotographerProfileModel,
)

__all__ = [
    "Base",
    "BlogModel",
    "KeywordModel",
    "PhotographerProfileModel",
    "TimestampMixin",
    "blog_keywords",
]
