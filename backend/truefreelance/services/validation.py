"""
Input validation for project add/update.

Every field is checked and every problem is reported, so a client can
show all errors at once. Nothing is written when any field is invalid.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from truefreelance.core.errors import (
    ProjectValidationError,
    ValidationErrorKind,
    ValidationIssue,
)
from truefreelance.schemas.project import ProjectFields

# field -> (kind, user-facing message), in display order
FIELD_RULES: dict[str, tuple[ValidationErrorKind, str]] = {
    "name": (ValidationErrorKind.EMPTY_NAME, "Project name is required"),
    "hours_worked": (
        ValidationErrorKind.INVALID_HOURS,
        "Hours must be 0 or greater, with at most 2 decimal places",
    ),
    "money_received": (
        ValidationErrorKind.INVALID_MONEY,
        "Money must be 0 or greater, with at most 2 decimal places",
    ),
    "completion_date": (ValidationErrorKind.MISSING_DATE, "Completion date is required"),
}


def validate_project_fields(data: Mapping[str, Any] | ProjectFields) -> ProjectFields:
    """
    Validate raw input into ProjectFields.

    Only the four editable keys are read; anything else (id, hourly_rate,
    timestamps) is ignored.

    Raises:
        ProjectValidationError: with one issue per invalid field.
    """
    if isinstance(data, ProjectFields):
        return data

    candidate = {key: data.get(key) for key in FIELD_RULES}

    try:
        return ProjectFields.model_validate(candidate)
    except ValidationError as exc:
        failed = {str(error["loc"][0]) for error in exc.errors() if error["loc"]}
        issues = tuple(
            ValidationIssue(kind=kind, field=field, message=message)
            for field, (kind, message) in FIELD_RULES.items()
            if field in failed
        )
        raise ProjectValidationError(issues) from exc
