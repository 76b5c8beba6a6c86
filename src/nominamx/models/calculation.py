"""Input model of a salary cost calculation.

This is the input boundary: a CalculationInput that exists is valid
(salary > 0, tenure >= 0, PTU and benefits >= 0). Amounts are Decimal;
floats are refused outright.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from nominamx.mexico.payroll.periods import Period
from nominamx.mexico.rates import RiskClass


def _reject_float(v: Any) -> Any:
    """Refuses floats to force Decimal or str amounts."""
    if isinstance(v, float):
        raise ValueError(
            "Amounts must be Decimal or str, never float. "
            "Use Decimal('100.00') or '100.00'."
        )
    return v


AmountDecimal = Annotated[Decimal, BeforeValidator(_reject_float)]

# Keeps every annualized amount well inside the 28-digit decimal context
MAX_AMOUNT = Decimal("1E12")
NonNegativeAmount = Annotated[AmountDecimal, Field(ge=0, lt=MAX_AMOUNT)]


class CustomBenefit(BaseModel):
    """User-defined bonus, stated per period or per year."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    amount: NonNegativeAmount
    is_annual: bool = False


class AdditionalBenefits(BaseModel):
    """Optional bonuses and allowances paid by the employer.

    Bonuses are annual amounts; vouchers, transportation and insurance are
    amounts per pay period. Absent means zero.
    """

    model_config = ConfigDict(frozen=True)

    # Annual
    performance_bonus: NonNegativeAmount | None = None
    signing_bonus: NonNegativeAmount | None = None
    retention_bonus: NonNegativeAmount | None = None

    # Per period
    meal_vouchers: NonNegativeAmount | None = None
    transportation: NonNegativeAmount | None = None
    health_insurance: NonNegativeAmount | None = None
    life_insurance: NonNegativeAmount | None = None

    other: tuple[CustomBenefit, ...] = ()


class CalculationInput(BaseModel):
    """Everything needed to cost one employee."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "gross_salary": "15000",
                    "period": "monthly",
                    "jurisdiction": "CDMX",
                    "risk_class": "III",
                    "tenure_years": "1",
                }
            ]
        },
    )

    gross_salary: AmountDecimal = Field(
        gt=0, lt=MAX_AMOUNT, description="Gross salary for one period"
    )
    period: Period
    jurisdiction: str = Field(min_length=1, description="State code (e.g. CDMX)")
    risk_class: RiskClass
    ptu_amount: NonNegativeAmount | None = Field(
        default=None, description="Profit share, stated in the same period"
    )
    tenure_years: AmountDecimal = Field(ge=0)
    additional_benefits: AdditionalBenefits | None = None
