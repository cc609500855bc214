"""
Pydantic v2 schemas for freelance projects.

Separation:
  • ProjectFields  — the four user-editable fields, already validated.
  • ProjectPayload — what the CLIENT sends (loosely typed, validated later
                     so every field problem is reported at once).
  • Project        — a confirmed, stored record with derived fields.

hourly_rate is never part of the input. The backend DECIDES it.
"""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
)

NonEmptyName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
# Bounds mirror the Numeric(10, 2) / Numeric(12, 2) columns, so whatever
# passes validation is stored exactly.
HoursAmount = Annotated[
    Decimal, Field(ge=0, max_digits=10, decimal_places=2, allow_inf_nan=False)
]
MoneyAmount = Annotated[
    Decimal, Field(ge=0, max_digits=12, decimal_places=2, allow_inf_nan=False)
]


# ── Editable fields ─────────────────────────────────────────
class ProjectFields(BaseModel):
    """
    The full set of editable fields for one project.

    Used both for inserts and for updates: an update always replaces all
    four fields, it never merges a partial set.
    """

    model_config = ConfigDict(frozen=True)

    name: NonEmptyName
    hours_worked: HoursAmount
    money_received: MoneyAmount
    completion_date: datetime.date


# ── Request schema ──────────────────────────────────────────
class ProjectPayload(BaseModel):
    """
    Body accepted by POST /projects and PUT /projects/{id}.

    Fields are typed loosely on purpose: the store validates them and
    reports every problem with a stable error kind.

    extra="forbid" ensures unknown fields (e.g. a fake hourly_rate)
    are rejected with 422, not silently ignored.
    """

    model_config = ConfigDict(extra="forbid")

    name: Any = Field(default=None, examples=["Logo redesign"])
    hours_worked: Any = Field(default=None, examples=[12.5])
    money_received: Any = Field(default=None, examples=[750])
    completion_date: Any = Field(default=None, examples=["2024-02-05"])


# ── Stored record ───────────────────────────────────────────
class Project(BaseModel):
    """
    One freelance engagement as confirmed by the persistence layer.

    hourly_rate may be None only on records fresh out of an adapter whose
    store does not compute it; ProjectStore fills it before exposing them.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    name: str
    hours_worked: Decimal
    money_received: Decimal
    completion_date: datetime.date | None = None
    hourly_rate: Decimal | None = None
    created_at: datetime.datetime
    updated_at: datetime.datetime

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        # Remote stores may hand back integers or UUIDs.
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime.datetime) -> datetime.datetime:
        # SQLite drops tzinfo on the way back.
        if value.tzinfo is None:
            return value.replace(tzinfo=datetime.timezone.utc)
        return value

    def editable_fields(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "hours_worked": self.hours_worked,
            "money_received": self.money_received,
            "completion_date": self.completion_date,
        }


# ── Error schema ────────────────────────────────────────────
class ValidationIssueOut(BaseModel):
    """One field problem as returned to the client."""

    kind: str
    field: str
    message: str


class DeleteConfirmationOut(BaseModel):
    """Prompt the client shows before calling DELETE."""

    project_id: str
    prompt: str
