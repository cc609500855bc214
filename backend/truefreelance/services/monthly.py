"""
Monthly aggregation over the project collection.

Pure functions plus a small cursor object — no I/O. A project belongs to
a month by the calendar month of its completion_date, not a 30-day
window. Projects without a completion_date are left out of every month.

The average rate is total earnings / total hours for the month, i.e.
weighted by hours, never a mean of per-project rates.
"""

from __future__ import annotations

import calendar
import datetime
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from truefreelance.schemas.monthly import MonthlyStats, MonthRef
from truefreelance.schemas.project import Project
from truefreelance.services.project_store import ProjectStore
from truefreelance.services.rates import compute_average_rate

_ZERO = Decimal("0")


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")


@dataclass(frozen=True, slots=True)
class MonthCursor:
    """A calendar month, pinned to day 1 so shifting never overflows."""

    year: int
    month: int

    def __post_init__(self) -> None:
        _check_month(self.month)

    @classmethod
    def from_date(cls, value: datetime.date) -> MonthCursor:
        return cls(value.year, value.month)

    @classmethod
    def today(cls) -> MonthCursor:
        return cls.from_date(datetime.date.today())

    def shift(self, months: int) -> MonthCursor:
        index = self.year * 12 + (self.month - 1) + months
        year, month_index = divmod(index, 12)
        return MonthCursor(year, month_index + 1)

    def next(self) -> MonthCursor:
        return self.shift(1)

    def previous(self) -> MonthCursor:
        return self.shift(-1)

    @property
    def label(self) -> str:
        """e.g. 'February 2024'."""
        return f"{calendar.month_name[self.month]} {self.year}"

    def as_ref(self) -> MonthRef:
        return MonthRef(year=self.year, month=self.month)


def projects_for_month(
    projects: Iterable[Project],
    year: int,
    month: int,
) -> list[Project]:
    """Projects completed in the given month, in input order."""
    _check_month(month)
    return [
        project
        for project in projects
        if project.completion_date is not None
        and project.completion_date.year == year
        and project.completion_date.month == month
    ]


def compute_monthly_stats(
    projects: Iterable[Project],
    year: int,
    month: int,
) -> MonthlyStats:
    """
    Totals for one calendar month.

    Args:
        projects: The full collection (any order).
        year:     Calendar year.
        month:    1-12.
    """
    cursor = MonthCursor(year, month)
    filtered = projects_for_month(projects, year, month)

    total_earnings = sum((p.money_received for p in filtered), _ZERO)
    total_hours = sum((p.hours_worked for p in filtered), _ZERO)

    return MonthlyStats(
        year=year,
        month=month,
        label=cursor.label,
        projects=filtered,
        total_earnings=total_earnings,
        total_hours=total_hours,
        average_rate=compute_average_rate(total_earnings, total_hours),
        project_count=len(filtered),
        previous=cursor.previous().as_ref(),
        next=cursor.next().as_ref(),
    )


class MonthlyAggregator:
    """Monthly view over a ProjectStore, with a movable month cursor."""

    def __init__(self, store: ProjectStore, cursor: MonthCursor | None = None) -> None:
        self._store = store
        self.cursor = cursor or MonthCursor.today()

    def compute(self, year: int, month: int) -> MonthlyStats:
        return compute_monthly_stats(self._store.projects, year, month)

    def current(self) -> MonthlyStats:
        return self.compute(self.cursor.year, self.cursor.month)

    def go_to(self, year: int, month: int) -> MonthlyStats:
        self.cursor = MonthCursor(year, month)
        return self.current()

    def next_month(self) -> MonthlyStats:
        self.cursor = self.cursor.next()
        return self.current()

    def previous_month(self) -> MonthlyStats:
        self.cursor = self.cursor.previous()
        return self.current()
