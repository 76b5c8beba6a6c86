"""Rates and tables for Mexican payroll contributions.

All values are Decimal -- never float. The tables themselves live in YAML
documents (see nominamx/mexico/data/) and are turned into these frozen
structures by nominamx.mexico.config.

Scales:
    ISR bracket rates and the vacation premium rate are fractions (0.1792).
    IMSS, SAR, INFONAVIT and payroll tax rates are percentages (17.206).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Mapping

DEFAULT_PAYROLL_TAX_RATE = Decimal("2.0")  # Unlisted jurisdiction
DEFAULT_VACATION_DAYS = 12  # Tenure below the first step of the table


class RiskClass(str, Enum):
    """IMSS workplace risk classification (I lowest .. V highest)."""

    I = "I"  # noqa: E741
    II = "II"
    III = "III"
    IV = "IV"
    V = "V"


@dataclass(frozen=True)
class IsrBracket:
    """ISR bracket: tax = (salary - lower_limit) * rate + fixed_amount."""

    lower_limit: Decimal
    upper_limit: Decimal | None  # None = unbounded (last bracket)
    rate: Decimal
    fixed_amount: Decimal


@dataclass(frozen=True)
class ImssRates:
    """IMSS rates: employer rate per risk class, flat employee rate."""

    risk_classes: Mapping[RiskClass, Decimal]  # 17.206 for class III
    employee_rate: Decimal

    def employer_rate(self, risk_class: RiskClass) -> Decimal:
        return self.risk_classes[RiskClass(risk_class)]


@dataclass(frozen=True)
class SarRates:
    """SAR retirement savings rates."""

    employer_rate: Decimal
    employee_rate: Decimal


@dataclass(frozen=True)
class InfonavitRates:
    """INFONAVIT housing fund (employer only)."""

    rate: Decimal


@dataclass(frozen=True)
class VacationStep:
    """Vacation days granted from `years` of tenure onwards."""

    years: Decimal
    days: int


@dataclass(frozen=True)
class BenefitRates:
    """Statutory benefits: aguinaldo and vacation premium."""

    aguinaldo_days: Decimal  # 15
    vacation_premium_rate: Decimal  # 0.25
    vacation_days_by_tenure: tuple[VacationStep, ...]  # Sorted by years


@dataclass(frozen=True)
class Jurisdiction:
    """State (entidad federativa) with its payroll tax rate."""

    code: str
    name: str
    payroll_tax_rate: Decimal


@dataclass(frozen=True)
class TaxConfig:
    """Complete, validated tax configuration for one version of the tables."""

    version: str
    last_updated: str
    isr_brackets: tuple[IsrBracket, ...]
    imss: ImssRates
    sar: SarRates
    infonavit: InfonavitRates
    benefits: BenefitRates
    jurisdictions: tuple[Jurisdiction, ...]

    def jurisdiction(self, code: str) -> Jurisdiction | None:
        """Returns the jurisdiction with this code, or None."""
        for jurisdiction in self.jurisdictions:
            if jurisdiction.code == code:
                return jurisdiction
        return None
