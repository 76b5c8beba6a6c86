"""Decimal helpers shared by every payroll calculator.

All values are Decimal -- never float (the models refuse them). Calculators
return amounts at the internal precision (10 decimal places) so that sums
of line items stay exact in the default 28-digit context. Cent rounding is
for display only.
"""

from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal
from typing import Iterable

ZERO = Decimal("0")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")
PRECISION = Decimal("1E-10")


def to_precision(value: Decimal) -> Decimal:
    """Quantizes to the internal precision (ROUND_HALF_EVEN)."""
    return value.quantize(PRECISION, rounding=ROUND_HALF_EVEN)


def round_cents(value: Decimal) -> Decimal:
    """Rounds to the cent (ROUND_HALF_UP)."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def decimal_sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)
