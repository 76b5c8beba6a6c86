"""Salary cost engine: orchestration of every calculation for one employee.

Combines contributions (contributions.py), ISR (isr.py), mandatory benefits
(benefits.py) and additional benefits (additional.py) into a complete
CalculationResult, for the pay period and for the year.

Each cost line is computed fresh from the annual salary for its target
period (the period of the calculation, then the year); the annual form is
never rebuilt from the period form.
"""

from __future__ import annotations

import datetime
import logging
import uuid
from decimal import Decimal
from typing import Any, Callable, Mapping

from nominamx.mexico.payroll.additional import (
    AggregatedBenefits,
    aggregate_benefits,
    build_breakdown,
)
from nominamx.mexico.payroll.arithmetic import to_precision
from nominamx.mexico.payroll.benefits import aguinaldo, ptu, vacation_premium
from nominamx.mexico.payroll.contributions import (
    imss_employee,
    imss_employer,
    infonavit,
    jurisdiction_payroll_tax,
    sar_employee,
    sar_employer,
)
from nominamx.mexico.payroll.isr import calculate_isr
from nominamx.mexico.payroll.periods import Period, daily_salary, from_annual, to_annual
from nominamx.mexico.rates import TaxConfig
from nominamx.models.calculation import CalculationInput
from nominamx.models.result import (
    BenefitAmounts,
    CalculationResult,
    EmployeeDeductions,
    EmployerCosts,
)

logger = logging.getLogger(__name__)


def _in_period(annual_amount: Decimal, target: Period) -> Decimal:
    return to_precision(from_annual(annual_amount, target))


def _employer_costs(
    calc_input: CalculationInput,
    config: TaxConfig,
    annual_salary: Decimal,
    daily: Decimal,
    benefits: AggregatedBenefits,
    target: Period,
) -> EmployerCosts:
    """Employer cost lines expressed in the target period."""
    return EmployerCosts.from_lines(
        imss=_in_period(
            imss_employer(annual_salary, calc_input.risk_class, config.imss), target
        ),
        sar=_in_period(sar_employer(annual_salary, config.sar), target),
        infonavit=_in_period(infonavit(annual_salary, config.infonavit), target),
        payroll_tax=_in_period(
            jurisdiction_payroll_tax(annual_salary, calc_input.jurisdiction, config), target
        ),
        aguinaldo=aguinaldo(daily, config.benefits.aguinaldo_days, target),
        vacation_premium=vacation_premium(
            daily, calc_input.tenure_years, config.benefits, target
        ),
        ptu=ptu(calc_input.ptu_amount, calc_input.period, target),
        additional_benefits=benefits.total_in(target),
    )


def _employee_deductions(
    config: TaxConfig,
    annual_salary: Decimal,
    target: Period,
) -> EmployeeDeductions:
    """Employee deductions expressed in the target period."""
    return EmployeeDeductions.from_lines(
        isr=_in_period(calculate_isr(annual_salary, config.isr_brackets), target),
        imss=_in_period(imss_employee(annual_salary, config.imss), target),
        sar=_in_period(sar_employee(annual_salary, config.sar), target),
    )


def calculate_salary_costs(
    calculation_input: CalculationInput | Mapping[str, Any],
    config: TaxConfig,
    *,
    now: Callable[[], datetime.datetime] | None = None,
    id_factory: Callable[[], str] | None = None,
) -> CalculationResult:
    """Calculates the total employer cost and the net salary of an employee.

    Args:
        calculation_input: Validated input, or a mapping validated here.
        config: Loaded tax configuration.
        now: Clock for the result timestamp (default: current UTC time).
        id_factory: Generator of result ids (default: uuid4).

    Returns:
        New CalculationResult, sharing no object with the input.

    Raises:
        pydantic.ValidationError: If a mapping does not describe a valid input.
    """
    if isinstance(calculation_input, CalculationInput):
        calc_input = calculation_input.model_copy(deep=True)
    else:
        calc_input = CalculationInput.model_validate(calculation_input)

    period = calc_input.period
    gross = calc_input.gross_salary

    annual_salary = to_annual(gross, period)
    daily = daily_salary(annual_salary)

    benefits = aggregate_benefits(calc_input.additional_benefits, period)

    # --- Employer costs ---
    employer_costs = _employer_costs(
        calc_input, config, annual_salary, daily, benefits, period,
    )
    employer_costs_annual = _employer_costs(
        calc_input, config, annual_salary, daily, benefits, Period.ANNUAL,
    )

    # --- Employee deductions ---
    employee_deductions = _employee_deductions(config, annual_salary, period)
    employee_deductions_annual = _employee_deductions(
        config, annual_salary, Period.ANNUAL,
    )

    breakdown = build_breakdown(
        benefits,
        aguinaldo=BenefitAmounts(
            period=employer_costs.aguinaldo, annual=employer_costs_annual.aguinaldo,
        ),
        vacation_premium=BenefitAmounts(
            period=employer_costs.vacation_premium,
            annual=employer_costs_annual.vacation_premium,
        ),
        ptu=BenefitAmounts(period=employer_costs.ptu, annual=employer_costs_annual.ptu),
    )

    timestamp = now() if now else datetime.datetime.now(datetime.timezone.utc)
    result_id = id_factory() if id_factory else str(uuid.uuid4())

    result = CalculationResult(
        id=result_id,
        timestamp=timestamp,
        input=calc_input,
        period=period,
        gross_salary=gross,
        gross_salary_annual=annual_salary,
        employer_costs=employer_costs,
        employer_costs_annual=employer_costs_annual,
        employee_deductions=employee_deductions,
        employee_deductions_annual=employee_deductions_annual,
        net_salary=gross - employee_deductions.total,
        net_salary_annual=annual_salary - employee_deductions_annual.total,
        total_company_cost=gross + employer_costs.total,
        total_company_cost_annual=annual_salary + employer_costs_annual.total,
        additional_benefits_breakdown=breakdown,
    )

    logger.debug(
        "Calculation %s: %s %s in %s (class %s) -> net %s, company cost %s",
        result.id, gross, period.value, calc_input.jurisdiction,
        calc_input.risk_class.value, result.net_salary, result.total_company_cost,
    )
    return result
