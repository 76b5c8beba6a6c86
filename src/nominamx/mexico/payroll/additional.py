"""Aggregation of the optional additional benefits.

The sparse AdditionalBenefits bag is flattened into tagged entries
(kind, name, amount, is_annual) and every entry then goes through the same
loop: annualize if stated per period, project onto the pay period.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from nominamx.mexico.payroll.arithmetic import ZERO, decimal_sum, to_precision
from nominamx.mexico.payroll.periods import Period, from_annual, to_annual
from nominamx.models.calculation import AdditionalBenefits
from nominamx.models.result import (
    AdditionalBenefitsBreakdown,
    BenefitAmounts,
    NamedBenefitAmounts,
)


class BenefitKind(str, Enum):
    """Slot of a benefit in the AdditionalBenefits bag."""

    PERFORMANCE_BONUS = "performance_bonus"
    SIGNING_BONUS = "signing_bonus"
    RETENTION_BONUS = "retention_bonus"
    MEAL_VOUCHERS = "meal_vouchers"
    TRANSPORTATION = "transportation"
    HEALTH_INSURANCE = "health_insurance"
    LIFE_INSURANCE = "life_insurance"
    OTHER = "other"


# Named slots and whether their amount is annual (else per period)
NAMED_SLOTS: tuple[tuple[BenefitKind, bool], ...] = (
    (BenefitKind.PERFORMANCE_BONUS, True),
    (BenefitKind.SIGNING_BONUS, True),
    (BenefitKind.RETENTION_BONUS, True),
    (BenefitKind.MEAL_VOUCHERS, False),
    (BenefitKind.TRANSPORTATION, False),
    (BenefitKind.HEALTH_INSURANCE, False),
    (BenefitKind.LIFE_INSURANCE, False),
)


@dataclass(frozen=True)
class BenefitEntry:
    """One benefit, tagged with how its amount is stated."""

    kind: BenefitKind
    name: str
    amount: Decimal
    is_annual: bool

    def annual(self, period: Period) -> Decimal:
        if self.is_annual:
            return self.amount
        return to_annual(self.amount, period)


@dataclass(frozen=True)
class AggregatedBenefit:
    kind: BenefitKind
    name: str
    period: Decimal
    annual: Decimal


@dataclass(frozen=True)
class AggregatedBenefits:
    """Benefits normalized to the pay period and to the year."""

    entries: tuple[AggregatedBenefit, ...]
    period_total: Decimal
    annual_total: Decimal

    def total_in(self, target: Period) -> Decimal:
        """Total for the pay period, or for the year when target is annual."""
        if Period(target) is Period.ANNUAL:
            return self.annual_total
        return self.period_total


def normalize_benefits(benefits: AdditionalBenefits | None) -> tuple[BenefitEntry, ...]:
    """Flattens the bag into tagged entries; absent slots are skipped."""
    if benefits is None:
        return ()

    entries = []
    for kind, is_annual in NAMED_SLOTS:
        amount = getattr(benefits, kind.value)
        if amount is not None:
            entries.append(BenefitEntry(kind, kind.value, amount, is_annual))
    for custom in benefits.other:
        entries.append(
            BenefitEntry(BenefitKind.OTHER, custom.name, custom.amount, custom.is_annual)
        )
    return tuple(entries)


def aggregate_benefits(
    benefits: AdditionalBenefits | None,
    period: Period,
) -> AggregatedBenefits:
    """Normalizes every benefit to the pay period and to the year.

    Args:
        benefits: Optional bag of additional benefits.
        period: Pay period of the calculation (period-stated amounts use it).

    Returns:
        Per-entry amounts and the two totals.
    """
    aggregated = []
    for entry in normalize_benefits(benefits):
        annual = to_precision(entry.annual(period))
        aggregated.append(
            AggregatedBenefit(
                kind=entry.kind,
                name=entry.name,
                period=to_precision(from_annual(annual, period)),
                annual=annual,
            )
        )

    return AggregatedBenefits(
        entries=tuple(aggregated),
        period_total=decimal_sum(e.period for e in aggregated),
        annual_total=decimal_sum(e.annual for e in aggregated),
    )


def build_breakdown(
    aggregated: AggregatedBenefits,
    aguinaldo: BenefitAmounts,
    vacation_premium: BenefitAmounts,
    ptu: BenefitAmounts,
) -> AdditionalBenefitsBreakdown:
    """Itemized breakdown for display.

    Aguinaldo, vacation premium and PTU are part of the wage structure and
    always present, even at zero. Optional benefits appear only when their
    contribution is strictly positive.
    """
    slots: dict[str, BenefitAmounts] = {}
    others = []
    for entry in aggregated.entries:
        if entry.annual <= ZERO:
            continue
        amounts = BenefitAmounts(period=entry.period, annual=entry.annual)
        if entry.kind is BenefitKind.OTHER:
            others.append(NamedBenefitAmounts(name=entry.name, breakdown=amounts))
        else:
            slots[entry.kind.value] = amounts

    return AdditionalBenefitsBreakdown(
        aguinaldo=aguinaldo,
        vacation_premium=vacation_premium,
        ptu=ptu,
        other=tuple(others),
        **slots,
    )
