"""
Hourly-rate calculation for freelance projects.

WHY THIS IS A SERVICE AND NOT INLINE:
  • The rate is financial data — it deserves its own testable module.
  • The same rule is used per project and per aggregate period.
  • Using Decimal everywhere avoids floating-point rounding on money.

Zero hours never divides: the rate is defined as 0, not an error.
"""

from decimal import Decimal

_ZERO = Decimal("0")


def compute_hourly_rate(hours_worked: Decimal, money_received: Decimal) -> Decimal:
    """
    Money received per hour worked.

    Args:
        hours_worked:   Hours spent (>= 0).
        money_received: Amount paid (>= 0).

    Returns:
        Exact Decimal rate, or 0 when no hours were logged.
    """
    if hours_worked <= _ZERO:
        return _ZERO
    return money_received / hours_worked


def compute_average_rate(total_earnings: Decimal, total_hours: Decimal) -> Decimal:
    """
    Aggregate rate for a period, weighted by hours.

    Computed from the totals rather than by averaging per-project rates,
    so a short, well-paid job cannot skew the result.
    """
    return compute_hourly_rate(total_hours, total_earnings)
