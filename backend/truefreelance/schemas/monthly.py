"""
Pydantic v2 response schemas for the monthly view.

All monetary fields use Decimal — no floats anywhere.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel

from truefreelance.schemas.project import Project


class MonthRef(BaseModel):
    """A (year, month) pair, month 1-based."""

    year: int
    month: int


class MonthlyStats(BaseModel):
    """Aggregates for one calendar month."""

    year: int
    month: int
    label: str
    projects: list[Project]
    total_earnings: Decimal
    total_hours: Decimal
    average_rate: Decimal
    project_count: int
    previous: MonthRef
    next: MonthRef
