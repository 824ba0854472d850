"""SQLAlchemy declarative base for snapdi_identity models.

Uses the same metadata as snapdi's Base to allow cross-module foreign keys.
"""

from snapdi.infrastructure.persistence.sqlalchemy.models.base import Base

# Use the same metadata as snapdi's Base to allow FK references across modules
IdentityBase = Base
