"""Unit tests for hourly-rate calculation."""

from decimal import Decimal

from truefreelance.services.rates import compute_average_rate, compute_hourly_rate


def test_rate_is_money_over_hours():
    assert compute_hourly_rate(Decimal("10"), Decimal("500")) == Decimal("50")


def test_fractional_hours():
    assert compute_hourly_rate(Decimal("2.5"), Decimal("100")) == Decimal("40")


def test_zero_hours_gives_zero_rate():
    """Zero hours never divides — rate is 0, not an error."""
    assert compute_hourly_rate(Decimal("0"), Decimal("250")) == Decimal("0")


def test_zero_money_gives_zero_rate():
    assert compute_hourly_rate(Decimal("8"), Decimal("0")) == Decimal("0")


def test_average_rate_weights_by_hours():
    # 10h @ 50 and 5h @ 20: mean of rates would be 35, weighted is 40
    assert compute_average_rate(Decimal("600"), Decimal("15")) == Decimal("40")


def test_average_rate_with_no_hours():
    assert compute_average_rate(Decimal("0"), Decimal("0")) == Decimal("0")
