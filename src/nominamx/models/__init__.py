"""Input and result models of a salary cost calculation."""

from nominamx.models.calculation import (
    AdditionalBenefits,
    CalculationInput,
    CustomBenefit,
)
from nominamx.models.result import (
    AdditionalBenefitsBreakdown,
    BenefitAmounts,
    CalculationResult,
    EmployeeDeductions,
    EmployerCosts,
    NamedBenefitAmounts,
)

__all__ = [
    "AdditionalBenefits",
    "CalculationInput",
    "CustomBenefit",
    "AdditionalBenefitsBreakdown",
    "BenefitAmounts",
    "CalculationResult",
    "EmployeeDeductions",
    "EmployerCosts",
    "NamedBenefitAmounts",
]
