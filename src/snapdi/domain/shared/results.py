"""Explicit outcomes for multi-step association updates."""

from dataclasses import dataclass, field
from enum import Enum


class Outcome(str, Enum):
    """How an association update ended."""

    OK = "ok"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class AssociationResult:
    """Result of linking or unlinking related entities.

    ``applied`` lists the ids that were actually changed, ``missing`` the ids
    that could not be resolved. A NOT_FOUND result never carries applied ids:
    batch updates are validated before anything is written.
    """

    outcome: Outcome
    applied: tuple[int, ...] = field(default_factory=tuple)
    missing: tuple[int, ...] = field(default_factory=tuple)
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    @classmethod
    def success(cls, applied: tuple[int, ...] = ()) -> "AssociationResult":
        return cls(outcome=Outcome.OK, applied=applied)

    @classmethod
    def not_found(
        cls,
        message: str,
        missing: tuple[int, ...] = (),
    ) -> "AssociationResult":
        return cls(outcome=Outcome.NOT_FOUND, missing=missing, message=message)

    @classmethod
    def conflict(cls, message: str) -> "AssociationResult":
        return cls(outcome=Outcome.CONFLICT, message=message)
