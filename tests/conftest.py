"""Shared fixtures: bundled and synthetic tax configurations."""

from __future__ import annotations

from decimal import Decimal

import pytest

from nominamx.mexico.config import get_tax_config
from nominamx.mexico.rates import TaxConfig
from nominamx.models.calculation import CalculationInput


@pytest.fixture
def config() -> TaxConfig:
    """Bundled 2024 tables."""
    return get_tax_config("2024")


@pytest.fixture
def document() -> dict:
    """Small valid configuration document, rebuilt for every test."""
    return {
        "version": "test",
        "last_updated": "2024-01-01",
        "isr": {
            "tax_brackets": [
                {"lower_limit": "0", "upper_limit": "10000.00", "rate": "0.10", "fixed_amount": "0"},
                {"lower_limit": "10000.01", "upper_limit": None, "rate": "0.20", "fixed_amount": "1000.001"},
            ]
        },
        "imss": {
            "risk_classifications": {rc: "10" for rc in ("I", "II", "III", "IV", "V")},
            "employee_rate": "2",
        },
        "sar": {"employer_rate": "2", "employee_rate": "1"},
        "infonavit": {"rate": "5"},
        "benefits": {
            "aguinaldo_days": "15",
            "vacation_premium_rate": "0.25",
            "vacation_days_by_tenure": [
                {"years": "1", "days": 12},
                {"years": "2", "days": 14},
            ],
        },
        "states": [
            {"code": "AAA", "name": "Estado A", "payroll_tax_rate": "3.0"},
        ],
    }


@pytest.fixture
def scenario_input() -> CalculationInput:
    """15,000 monthly in CDMX, risk class III, one year of tenure."""
    return CalculationInput(
        gross_salary=Decimal("15000"),
        period="monthly",
        jurisdiction="CDMX",
        risk_class="III",
        tenure_years=Decimal("1"),
    )
