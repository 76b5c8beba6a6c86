"""Result model of a salary cost calculation.

Every cost line exists twice: for the pay period and for the year. Totals
are the exact sum of their lines (no rounding before display); the
validators refuse any record where that does not hold, including records
reloaded from the history file.
"""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, model_validator

from nominamx.mexico.payroll.arithmetic import decimal_sum
from nominamx.mexico.payroll.periods import Period
from nominamx.models.calculation import CalculationInput


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class _Totalled(_Record):
    """Flat record of named lines plus their total."""

    LINES: ClassVar[tuple[str, ...]] = ()

    total: Decimal

    @classmethod
    def from_lines(cls, **lines: Decimal):
        """Builds the record, computing total from the lines."""
        total = decimal_sum(lines[name] for name in cls.LINES)
        return cls(**lines, total=total)

    def lines(self) -> dict[str, Decimal]:
        return {name: getattr(self, name) for name in self.LINES}

    @model_validator(mode="after")
    def _total_is_sum(self):
        expected = decimal_sum(self.lines().values())
        if self.total != expected:
            raise ValueError(
                f"{type(self).__name__}.total ({self.total}) is not the sum "
                f"of its lines ({expected})"
            )
        return self


class EmployerCosts(_Totalled):
    """Employer contributions and benefits on top of the gross salary."""

    LINES: ClassVar[tuple[str, ...]] = (
        "imss",
        "sar",
        "infonavit",
        "payroll_tax",
        "aguinaldo",
        "vacation_premium",
        "ptu",
        "additional_benefits",
    )

    imss: Decimal
    sar: Decimal
    infonavit: Decimal
    payroll_tax: Decimal
    aguinaldo: Decimal
    vacation_premium: Decimal
    ptu: Decimal
    additional_benefits: Decimal


class EmployeeDeductions(_Totalled):
    """Amounts withheld from the employee's gross salary."""

    LINES: ClassVar[tuple[str, ...]] = ("isr", "imss", "sar")

    isr: Decimal
    imss: Decimal
    sar: Decimal


class BenefitAmounts(_Record):
    period: Decimal
    annual: Decimal


class NamedBenefitAmounts(_Record):
    name: str
    breakdown: BenefitAmounts


class AdditionalBenefitsBreakdown(_Record):
    """Itemized benefits.

    The mandatory benefits are always present; the optional ones only when
    their contribution is strictly positive.
    """

    aguinaldo: BenefitAmounts
    vacation_premium: BenefitAmounts
    ptu: BenefitAmounts

    performance_bonus: BenefitAmounts | None = None
    signing_bonus: BenefitAmounts | None = None
    retention_bonus: BenefitAmounts | None = None
    meal_vouchers: BenefitAmounts | None = None
    transportation: BenefitAmounts | None = None
    health_insurance: BenefitAmounts | None = None
    life_insurance: BenefitAmounts | None = None
    other: tuple[NamedBenefitAmounts, ...] = ()

    def items(self) -> list[tuple[str, BenefitAmounts]]:
        """(name, amounts) pairs of every present entry, in display order."""
        entries = []
        for name in type(self).model_fields:
            if name == "other":
                continue
            amounts = getattr(self, name)
            if amounts is not None:
                entries.append((name, amounts))
        entries.extend((item.name, item.breakdown) for item in self.other)
        return entries


class CalculationResult(_Record):
    """Immutable snapshot of one calculation."""

    id: str
    timestamp: datetime.datetime
    input: CalculationInput
    period: Period

    gross_salary: Decimal
    gross_salary_annual: Decimal

    employer_costs: EmployerCosts
    employer_costs_annual: EmployerCosts
    employee_deductions: EmployeeDeductions
    employee_deductions_annual: EmployeeDeductions

    net_salary: Decimal
    net_salary_annual: Decimal
    total_company_cost: Decimal
    total_company_cost_annual: Decimal

    additional_benefits_breakdown: AdditionalBenefitsBreakdown | None = None

    @model_validator(mode="after")
    def _cross_totals(self):
        checks = (
            ("net_salary", self.net_salary,
             self.gross_salary - self.employee_deductions.total),
            ("net_salary_annual", self.net_salary_annual,
             self.gross_salary_annual - self.employee_deductions_annual.total),
            ("total_company_cost", self.total_company_cost,
             self.gross_salary + self.employer_costs.total),
            ("total_company_cost_annual", self.total_company_cost_annual,
             self.gross_salary_annual + self.employer_costs_annual.total),
        )
        for name, value, expected in checks:
            if value != expected:
                raise ValueError(f"{name} ({value}) does not match its components ({expected})")
        return self
