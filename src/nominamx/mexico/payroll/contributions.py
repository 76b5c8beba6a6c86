"""Social security contributions and state payroll tax.

All functions are pure, take the annual salary and return the annual
contribution at internal precision. Rates are percentages (rate / 100).
Projection onto a pay period is the caller's job (see periods.from_annual).
"""

import logging
from decimal import Decimal

from nominamx.mexico.payroll.arithmetic import HUNDRED, to_precision
from nominamx.mexico.rates import (
    DEFAULT_PAYROLL_TAX_RATE,
    ImssRates,
    InfonavitRates,
    RiskClass,
    SarRates,
    TaxConfig,
)

logger = logging.getLogger(__name__)


def _percent(annual_salary: Decimal, rate: Decimal) -> Decimal:
    return to_precision(annual_salary * rate / HUNDRED)


# =============================================================================
# IMSS
# =============================================================================
def imss_employer(
    annual_salary: Decimal,
    risk_class: RiskClass,
    imss: ImssRates,
) -> Decimal:
    """IMSS employer quota; the rate depends on the workplace risk class."""
    return _percent(annual_salary, imss.employer_rate(risk_class))


def imss_employee(annual_salary: Decimal, imss: ImssRates) -> Decimal:
    """IMSS employee quota (flat rate)."""
    return _percent(annual_salary, imss.employee_rate)


# =============================================================================
# SAR (retirement savings)
# =============================================================================
def sar_employer(annual_salary: Decimal, sar: SarRates) -> Decimal:
    return _percent(annual_salary, sar.employer_rate)


def sar_employee(annual_salary: Decimal, sar: SarRates) -> Decimal:
    return _percent(annual_salary, sar.employee_rate)


# =============================================================================
# INFONAVIT (housing fund, employer only)
# =============================================================================
def infonavit(annual_salary: Decimal, rates: InfonavitRates) -> Decimal:
    return _percent(annual_salary, rates.rate)


# =============================================================================
# State payroll tax (impuesto sobre nomina)
# =============================================================================
def payroll_tax_rate(code: str, config: TaxConfig) -> Decimal:
    """Payroll tax rate of a state.

    An unlisted code gets DEFAULT_PAYROLL_TAX_RATE (2.0%) instead of an
    error, so new or renamed jurisdictions still calculate.
    """
    jurisdiction = config.jurisdiction(code)
    if jurisdiction is None:
        logger.debug(
            "Unknown jurisdiction %r, using default payroll tax rate %s%%",
            code, DEFAULT_PAYROLL_TAX_RATE,
        )
        return DEFAULT_PAYROLL_TAX_RATE
    return jurisdiction.payroll_tax_rate


def jurisdiction_payroll_tax(
    annual_salary: Decimal,
    code: str,
    config: TaxConfig,
) -> Decimal:
    """Annual state payroll tax for the jurisdiction."""
    return _percent(annual_salary, payroll_tax_rate(code, config))
