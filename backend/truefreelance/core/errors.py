"""
Error taxonomy for the project engine.

  • ProjectValidationError — caller-correctable, reported field by field.
  • ProjectNotFoundError   — the target id is not in the collection.
  • StorageError           — the persistence adapter failed (disk, network,
                             capacity, or a row missing at the store layer).

None of these are retried by the engine; the caller decides.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ValidationErrorKind(str, enum.Enum):
    """One kind per editable field."""

    EMPTY_NAME = "EmptyName"
    INVALID_HOURS = "InvalidHours"
    INVALID_MONEY = "InvalidMoney"
    MISSING_DATE = "MissingDate"


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single problem with one input field."""

    kind: ValidationErrorKind
    field: str
    message: str


class ProjectValidationError(Exception):
    """Raised when project input fails validation.

    Carries every issue found, not just the first one.
    """

    def __init__(self, issues: tuple[ValidationIssue, ...]) -> None:
        self.issues = issues
        super().__init__("; ".join(issue.message for issue in issues))

    @property
    def kinds(self) -> set[ValidationErrorKind]:
        return {issue.kind for issue in self.issues}


class ProjectNotFoundError(Exception):
    """Raised when a project id is absent from the collection."""

    def __init__(self, project_id: str) -> None:
        self.project_id = project_id
        super().__init__(f"Project '{project_id}' not found")


class StorageError(Exception):
    """Raised when the persistence adapter cannot complete an operation."""


class StorageNotFoundError(StorageError):
    """The store itself has no row for the given id."""
