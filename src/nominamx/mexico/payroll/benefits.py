"""Mandatory benefits: aguinaldo, vacation premium and PTU.

Aguinaldo and vacation premium are accrued from the daily salary and
prorated onto the requested period. PTU is an externally determined
profit share: the engine only changes its period framing.
"""

from decimal import Decimal
from typing import Sequence

from nominamx.mexico.payroll.arithmetic import ZERO, to_precision
from nominamx.mexico.payroll.periods import Period, from_annual, to_annual
from nominamx.mexico.rates import DEFAULT_VACATION_DAYS, BenefitRates, VacationStep


def vacation_days(tenure_years: Decimal, steps: Sequence[VacationStep]) -> int:
    """Vacation days for a tenure: the highest step reached.

    Tenure below the first step (e.g. under one year) gets
    DEFAULT_VACATION_DAYS.
    """
    for step in reversed(steps):
        if tenure_years >= step.years:
            return step.days
    return DEFAULT_VACATION_DAYS


def aguinaldo(
    daily_salary: Decimal,
    aguinaldo_days: Decimal,
    period: Period,
) -> Decimal:
    """Aguinaldo (days of salary per year) prorated onto the period."""
    return to_precision(from_annual(daily_salary * aguinaldo_days, period))


def vacation_premium(
    daily_salary: Decimal,
    tenure_years: Decimal,
    benefits: BenefitRates,
    period: Period,
) -> Decimal:
    """Vacation premium prorated onto the period.

    Premium = daily salary * vacation days for the tenure * premium rate (25%).
    """
    days = vacation_days(tenure_years, benefits.vacation_days_by_tenure)
    annual = daily_salary * days * benefits.vacation_premium_rate
    return to_precision(from_annual(annual, period))


def ptu(
    ptu_amount: Decimal | None,
    source_period: Period,
    target_period: Period,
) -> Decimal:
    """Reprojects a PTU stated in source_period onto target_period."""
    if ptu_amount is None:
        return ZERO
    return to_precision(from_annual(to_annual(ptu_amount, source_period), target_period))
