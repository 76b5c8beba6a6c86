"""Tests for the input and result models."""

from __future__ import annotations

import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from nominamx.models import (
    AdditionalBenefits,
    CalculationInput,
    CustomBenefit,
    EmployeeDeductions,
    EmployerCosts,
)


def _input(**overrides) -> dict:
    data = {
        "gross_salary": "15000",
        "period": "monthly",
        "jurisdiction": "CDMX",
        "risk_class": "III",
        "tenure_years": "1",
    }
    data.update(overrides)
    return data


class TestCalculationInput:
    def test_valid(self) -> None:
        calc_input = CalculationInput.model_validate(_input())
        assert calc_input.gross_salary == Decimal("15000")
        assert calc_input.period.value == "monthly"
        assert calc_input.risk_class.value == "III"
        assert calc_input.ptu_amount is None
        assert calc_input.additional_benefits is None

    @pytest.mark.parametrize("salary", ["0", "-100"])
    def test_salary_must_be_positive(self, salary: str) -> None:
        with pytest.raises(ValidationError):
            CalculationInput.model_validate(_input(gross_salary=salary))

    def test_salary_upper_bound(self) -> None:
        with pytest.raises(ValidationError):
            CalculationInput.model_validate(_input(gross_salary="1000000000000000000"))
        with pytest.raises(ValidationError):
            CalculationInput.model_validate(_input(gross_salary="1E12"))

    def test_largest_salary_calculates(self, config) -> None:
        from nominamx.mexico.payroll.engine import calculate_salary_costs

        result = calculate_salary_costs(
            _input(gross_salary="999999999999.99", period="weekly", ptu_amount="999999999999"),
            config,
        )
        assert result.net_salary + result.employee_deductions.total == result.gross_salary

    def test_ptu_upper_bound(self) -> None:
        with pytest.raises(ValidationError):
            CalculationInput.model_validate(_input(ptu_amount="1E12"))

    def test_float_rejected(self) -> None:
        with pytest.raises(ValidationError, match="never float"):
            CalculationInput.model_validate(_input(gross_salary=15000.0))

    def test_negative_tenure(self) -> None:
        with pytest.raises(ValidationError):
            CalculationInput.model_validate(_input(tenure_years="-1"))

    def test_tenure_required(self) -> None:
        data = _input()
        del data["tenure_years"]
        with pytest.raises(ValidationError):
            CalculationInput.model_validate(data)

    def test_negative_ptu(self) -> None:
        with pytest.raises(ValidationError):
            CalculationInput.model_validate(_input(ptu_amount="-1"))

    def test_unknown_period(self) -> None:
        with pytest.raises(ValidationError):
            CalculationInput.model_validate(_input(period="daily"))

    def test_unknown_risk_class(self) -> None:
        with pytest.raises(ValidationError):
            CalculationInput.model_validate(_input(risk_class="VI"))

    def test_empty_jurisdiction(self) -> None:
        with pytest.raises(ValidationError):
            CalculationInput.model_validate(_input(jurisdiction=""))

    def test_frozen(self) -> None:
        calc_input = CalculationInput.model_validate(_input())
        with pytest.raises(ValidationError):
            calc_input.gross_salary = Decimal("1")


class TestAdditionalBenefits:
    def test_all_optional(self) -> None:
        benefits = AdditionalBenefits()
        assert benefits.transportation is None
        assert benefits.other == ()

    def test_negative_amount(self) -> None:
        with pytest.raises(ValidationError):
            AdditionalBenefits(meal_vouchers=Decimal("-1"))

    def test_benefit_upper_bound(self) -> None:
        with pytest.raises(ValidationError):
            AdditionalBenefits(performance_bonus=Decimal("1E18"))
        with pytest.raises(ValidationError):
            CustomBenefit(name="Bono", amount=Decimal("1E12"))

    def test_custom_benefit_needs_name(self) -> None:
        with pytest.raises(ValidationError):
            CustomBenefit(name="", amount=Decimal("10"))

    def test_custom_benefit_default_period(self) -> None:
        assert CustomBenefit(name="Gimnasio", amount=Decimal("10")).is_annual is False

    def test_nested_validation(self) -> None:
        calc_input = CalculationInput.model_validate(
            _input(
                additional_benefits={
                    "transportation": "500",
                    "other": [{"name": "Navidad", "amount": "3000", "is_annual": True}],
                }
            )
        )
        assert calc_input.additional_benefits.transportation == Decimal("500")
        assert calc_input.additional_benefits.other[0].is_annual is True


class TestTotals:
    def test_from_lines(self) -> None:
        deductions = EmployeeDeductions.from_lines(
            isr=Decimal("100"), imss=Decimal("20"), sar=Decimal("5")
        )
        assert deductions.total == Decimal("125")
        assert deductions.lines() == {
            "isr": Decimal("100"),
            "imss": Decimal("20"),
            "sar": Decimal("5"),
        }

    def test_inconsistent_total_rejected(self) -> None:
        with pytest.raises(ValidationError, match="not the sum"):
            EmployeeDeductions(
                isr=Decimal("100"), imss=Decimal("20"), sar=Decimal("5"), total=Decimal("126")
            )

    def test_employer_lines(self) -> None:
        assert EmployerCosts.LINES == (
            "imss",
            "sar",
            "infonavit",
            "payroll_tax",
            "aguinaldo",
            "vacation_premium",
            "ptu",
            "additional_benefits",
        )


class TestCalculationResult:
    def test_cross_totals(self, config, scenario_input) -> None:
        from nominamx.mexico.payroll.engine import calculate_salary_costs

        result = calculate_salary_costs(
            scenario_input,
            config,
            now=lambda: datetime.datetime(2026, 1, 1, tzinfo=datetime.timezone.utc),
        )
        data = result.model_dump()
        data["net_salary"] = result.net_salary + 1
        with pytest.raises(ValidationError, match="net_salary"):
            type(result).model_validate(data)
