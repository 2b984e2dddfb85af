"""Time-value-of-money building blocks."""

from __future__ import annotations


def monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100.0 / 12.0


def future_value_lump_sum(amount: float, annual_rate_percent: float, years: float) -> float:
    """Grow a single amount with annual compounding."""
    return amount * (1.0 + annual_rate_percent / 100.0) ** years


def future_value_annuity(payment: float, rate_per_period: float, periods: int) -> float:
    """Future value of an ordinary annuity (end-of-period payments).

    A zero periodic rate collapses the geometric series to ``payment * periods``.
    """
    if rate_per_period == 0:
        return payment * periods
    return payment * ((1.0 + rate_per_period) ** periods - 1.0) / rate_per_period
