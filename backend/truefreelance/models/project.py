"""
SQLAlchemy model for the `projects` table.

Each row is one freelance engagement. Money is stored as NUMERIC — exact
decimal arithmetic, no float rounding.

Design notes:
  • hourly_rate is NOT a column. It is derived on read from hours_worked
    and money_received, so it can never go stale.
  • id is an opaque string so rows written by other stores (uuid, integer)
    can be imported without reshaping.
  • Timestamps are set by the application, not the server, so SQLite and
    Postgres behave the same.
"""

import datetime
import secrets
import time
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, DateTime, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from truefreelance.core.database import Base

_ID_PREFIX = "project_"
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def generate_project_id() -> str:
    """
    Locally generated id: creation time plus a random suffix.

    Format: project_<epoch-ms>_<9 base-36 chars>
    """
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"{_ID_PREFIX}{int(time.time() * 1000)}_{suffix}"


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class ProjectRecord(Base):
    """One stored project row."""

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=generate_project_id,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)

    # ── Work / payment (exact decimal — financial data) ─────
    hours_worked: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    money_received: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    # Nullable so legacy rows can still be read; writes always set it.
    completion_date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        CheckConstraint("hours_worked >= 0", name="ck_hours_worked_non_neg"),
        CheckConstraint("money_received >= 0", name="ck_money_received_non_neg"),
        Index("ix_projects_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<ProjectRecord id={self.id} name={self.name!r}>"
