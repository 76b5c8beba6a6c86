"""Tests for the mandatory benefits: aguinaldo, vacation premium and PTU.

Main case: 180,000 annual -> daily salary 493.1506849315, tenure 1 year
(12 vacation days).
"""

from decimal import Decimal

import pytest

from nominamx.mexico.payroll.arithmetic import round_cents
from nominamx.mexico.payroll.benefits import aguinaldo, ptu, vacation_days, vacation_premium
from nominamx.mexico.payroll.periods import Period

DAILY = Decimal("493.1506849315")


class TestVacationDays:
    @pytest.mark.parametrize(
        "tenure, days",
        [
            ("1", 12), ("1.5", 12), ("2", 14), ("3", 16), ("4", 18), ("5", 20),
            ("6", 22), ("10", 22), ("11", 24), ("16", 26), ("21", 28),
            ("26", 30), ("31", 32), ("45", 32),
        ],
    )
    def test_table(self, config, tenure: str, days: int) -> None:
        steps = config.benefits.vacation_days_by_tenure
        assert vacation_days(Decimal(tenure), steps) == days

    @pytest.mark.parametrize("tenure", ["0", "0.5", "0.99"])
    def test_below_first_step(self, config, tenure: str) -> None:
        assert vacation_days(Decimal(tenure), config.benefits.vacation_days_by_tenure) == 12

    def test_non_decreasing(self, config) -> None:
        steps = config.benefits.vacation_days_by_tenure
        days = [vacation_days(Decimal(t), steps) for t in range(0, 50)]
        assert days == sorted(days)


class TestAguinaldo:
    def test_scenario_monthly(self, config) -> None:
        result = aguinaldo(DAILY, config.benefits.aguinaldo_days, Period.MONTHLY)
        assert result == Decimal("616.4383561644")
        assert round_cents(result) == Decimal("616.44")

    def test_annual(self, config) -> None:
        assert aguinaldo(DAILY, Decimal("15"), Period.ANNUAL) == Decimal("7397.2602739725")

    def test_bi_weekly(self) -> None:
        assert round_cents(aguinaldo(DAILY, Decimal("15"), Period.BI_WEEKLY)) == Decimal("308.22")


class TestVacationPremium:
    def test_scenario_monthly(self, config) -> None:
        result = vacation_premium(DAILY, Decimal("1"), config.benefits, Period.MONTHLY)
        assert result == Decimal("123.2876712329")
        assert round_cents(result) == Decimal("123.29")

    def test_grows_with_tenure(self, config) -> None:
        junior = vacation_premium(DAILY, Decimal("1"), config.benefits, Period.ANNUAL)
        senior = vacation_premium(DAILY, Decimal("11"), config.benefits, Period.ANNUAL)
        # 12 days vs 24 days
        assert senior == junior * 2

    def test_new_hire_gets_minimum(self, config) -> None:
        new_hire = vacation_premium(DAILY, Decimal("0"), config.benefits, Period.ANNUAL)
        one_year = vacation_premium(DAILY, Decimal("1"), config.benefits, Period.ANNUAL)
        assert new_hire == one_year


class TestPtu:
    def test_absent(self) -> None:
        assert ptu(None, Period.MONTHLY, Period.ANNUAL) == Decimal("0")

    def test_same_period(self) -> None:
        assert ptu(Decimal("1000"), Period.MONTHLY, Period.MONTHLY) == Decimal("1000")

    def test_annualized(self) -> None:
        assert ptu(Decimal("1000"), Period.MONTHLY, Period.ANNUAL) == Decimal("12000")

    def test_reprojected(self) -> None:
        assert ptu(Decimal("1200"), Period.MONTHLY, Period.BI_WEEKLY) == Decimal("600")
