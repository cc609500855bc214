"""
Monthly router — earnings, hours and rate for one calendar month.

GET /monthly?year=2024&month=2

Aggregation runs in Python over the store's in-memory collection; the
response carries previous/next month refs so clients can page through
months without doing calendar arithmetic themselves.
"""

from fastapi import APIRouter, Depends, Query

from truefreelance.auth.dependencies import require_session
from truefreelance.routers.deps import Store
from truefreelance.schemas.monthly import MonthlyStats
from truefreelance.services.monthly import MonthCursor, compute_monthly_stats

router = APIRouter(tags=["Monthly"], dependencies=[Depends(require_session)])


@router.get(
    "",
    response_model=MonthlyStats,
    summary="Statistics for one calendar month",
    description=(
        "Projects completed in the month, total earnings, total hours, "
        "hours-weighted average rate and project count. "
        "Defaults to the current month."
    ),
)
async def get_monthly_stats(
    store: Store,
    year: int | None = Query(default=None, ge=1, le=9999, examples=[2024]),
    month: int | None = Query(default=None, ge=1, le=12, examples=[2]),
) -> MonthlyStats:
    today = MonthCursor.today()
    return compute_monthly_stats(
        store.projects,
        year if year is not None else today.year,
        month if month is not None else today.month,
    )
