"""Tests for the aggregation of optional additional benefits."""

from decimal import Decimal

from nominamx.mexico.payroll.additional import (
    BenefitKind,
    aggregate_benefits,
    build_breakdown,
    normalize_benefits,
)
from nominamx.mexico.payroll.periods import Period
from nominamx.models.calculation import AdditionalBenefits, CustomBenefit
from nominamx.models.result import BenefitAmounts

ZERO_AMOUNTS = BenefitAmounts(period=Decimal("0"), annual=Decimal("0"))


def _breakdown(benefits, period=Period.MONTHLY):
    return build_breakdown(
        aggregate_benefits(benefits, period),
        aguinaldo=ZERO_AMOUNTS,
        vacation_premium=ZERO_AMOUNTS,
        ptu=ZERO_AMOUNTS,
    )


class TestNormalize:
    def test_none(self) -> None:
        assert normalize_benefits(None) == ()

    def test_absent_slots_skipped(self) -> None:
        entries = normalize_benefits(AdditionalBenefits(transportation=Decimal("500")))
        assert len(entries) == 1
        assert entries[0].kind is BenefitKind.TRANSPORTATION
        assert entries[0].is_annual is False

    def test_bonuses_are_annual(self) -> None:
        entries = normalize_benefits(
            AdditionalBenefits(
                performance_bonus=Decimal("1"),
                signing_bonus=Decimal("1"),
                retention_bonus=Decimal("1"),
                meal_vouchers=Decimal("1"),
            )
        )
        flags = {e.kind: e.is_annual for e in entries}
        assert flags == {
            BenefitKind.PERFORMANCE_BONUS: True,
            BenefitKind.SIGNING_BONUS: True,
            BenefitKind.RETENTION_BONUS: True,
            BenefitKind.MEAL_VOUCHERS: False,
        }

    def test_custom_entries(self) -> None:
        entries = normalize_benefits(
            AdditionalBenefits(
                other=(CustomBenefit(name="Gimnasio", amount=Decimal("300")),)
            )
        )
        assert entries[0].kind is BenefitKind.OTHER
        assert entries[0].name == "Gimnasio"


class TestAggregate:
    def test_empty(self) -> None:
        aggregated = aggregate_benefits(None, Period.MONTHLY)
        assert aggregated.entries == ()
        assert aggregated.period_total == Decimal("0")
        assert aggregated.annual_total == Decimal("0")

    def test_period_amount_annualized(self) -> None:
        aggregated = aggregate_benefits(
            AdditionalBenefits(meal_vouchers=Decimal("1000")), Period.MONTHLY
        )
        assert aggregated.period_total == Decimal("1000")
        assert aggregated.annual_total == Decimal("12000")

    def test_annual_bonus_prorated(self) -> None:
        aggregated = aggregate_benefits(
            AdditionalBenefits(performance_bonus=Decimal("24000")), Period.BI_WEEKLY
        )
        assert aggregated.period_total == Decimal("1000")
        assert aggregated.annual_total == Decimal("24000")

    def test_custom_annual_and_period(self) -> None:
        aggregated = aggregate_benefits(
            AdditionalBenefits(
                other=(
                    CustomBenefit(name="Navidad", amount=Decimal("5200"), is_annual=True),
                    CustomBenefit(name="Gimnasio", amount=Decimal("50")),
                )
            ),
            Period.WEEKLY,
        )
        # 5,200 / 52 + 50 per week
        assert aggregated.period_total == Decimal("150")
        assert aggregated.annual_total == Decimal("7800")

    def test_total_in(self) -> None:
        aggregated = aggregate_benefits(
            AdditionalBenefits(transportation=Decimal("500")), Period.MONTHLY
        )
        assert aggregated.total_in(Period.MONTHLY) == Decimal("500")
        assert aggregated.total_in(Period.ANNUAL) == Decimal("6000")

    def test_totals_are_sums(self) -> None:
        aggregated = aggregate_benefits(
            AdditionalBenefits(
                signing_bonus=Decimal("10000"),
                health_insurance=Decimal("333.33"),
                life_insurance=Decimal("77.77"),
            ),
            Period.WEEKLY,
        )
        assert aggregated.period_total == sum(e.period for e in aggregated.entries)
        assert aggregated.annual_total == sum(e.annual for e in aggregated.entries)


class TestBreakdown:
    def test_transportation_only(self) -> None:
        breakdown = _breakdown(AdditionalBenefits(transportation=Decimal("500")))

        assert breakdown.transportation == BenefitAmounts(
            period=Decimal("500"), annual=Decimal("6000")
        )
        for name in (
            "performance_bonus",
            "signing_bonus",
            "retention_bonus",
            "meal_vouchers",
            "health_insurance",
            "life_insurance",
        ):
            assert getattr(breakdown, name) is None
        assert breakdown.other == ()
        # Mandatory benefits are present even at zero
        assert breakdown.aguinaldo == ZERO_AMOUNTS
        assert breakdown.vacation_premium == ZERO_AMOUNTS
        assert breakdown.ptu == ZERO_AMOUNTS

    def test_zero_amounts_omitted(self) -> None:
        breakdown = _breakdown(
            AdditionalBenefits(
                meal_vouchers=Decimal("0"),
                other=(CustomBenefit(name="Nada", amount=Decimal("0")),),
            )
        )
        assert breakdown.meal_vouchers is None
        assert breakdown.other == ()

    def test_items_order(self) -> None:
        breakdown = _breakdown(
            AdditionalBenefits(
                life_insurance=Decimal("100"),
                performance_bonus=Decimal("12000"),
                other=(CustomBenefit(name="Gimnasio", amount=Decimal("50")),),
            )
        )
        names = [name for name, _ in breakdown.items()]
        assert names == [
            "aguinaldo",
            "vacation_premium",
            "ptu",
            "performance_bonus",
            "life_insurance",
            "Gimnasio",
        ]
