"""Conversion of amounts between pay periods.

Bi-weekly is the Mexican "quincena": two pay runs per month, 24 per year
(not 26). Daily salary uses calendar days (365).
"""

from decimal import Decimal
from enum import Enum

from nominamx.mexico.payroll.arithmetic import to_precision


class Period(str, Enum):
    """Payroll cadence."""

    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"
    ANNUAL = "annual"


PERIODS_PER_YEAR: dict[Period, int] = {
    Period.WEEKLY: 52,
    Period.BI_WEEKLY: 24,
    Period.MONTHLY: 12,
    Period.ANNUAL: 1,
}

DAYS_PER_YEAR = 365


def to_annual(amount: Decimal, period: Period) -> Decimal:
    """Annualizes an amount stated in the given period."""
    return amount * PERIODS_PER_YEAR[Period(period)]


def from_annual(amount: Decimal, period: Period) -> Decimal:
    """Projects an annual amount onto the given period.

    No rounding: from_annual(to_annual(x, p), p) == x.
    """
    return amount / PERIODS_PER_YEAR[Period(period)]


def daily_salary(annual_salary: Decimal) -> Decimal:
    """Daily salary over calendar days."""
    return to_precision(annual_salary / DAYS_PER_YEAR)
