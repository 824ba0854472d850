"""Shared domain primitives: time, errors, paging and result types."""

from snapdi.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ForbiddenError,
    UnauthorizedError,
    ValidationError,
)
from snapdi.domain.shared.pagination import PagedResult, PageRequest
from snapdi.domain.shared.results import AssociationResult, Outcome
from snapdi.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    "AssociationResult",
    "ConflictError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "ForbiddenError",
    "Outcome",
    "PageRequest",
    "PagedResult",
    "UnauthorizedError",
    "ValidationError",
    "ensure_tz_aware",
    "utc_now",
]
