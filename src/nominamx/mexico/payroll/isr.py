"""Progressive income tax (ISR) on the annual salary.

1. Find the bracket with lower_limit <= salary < next bracket's lower_limit
2. ISR = (salary - lower_limit) * rate + fixed_amount

The declared upper_limit is not used for matching: a salary between two
cent-aligned brackets (8952.49 / 8952.50) still belongs to the lower one.
Bracket integrity (ordering, coverage of [0, inf), continuity) is checked
when the configuration is loaded, not here.
"""

import logging
from decimal import Decimal
from typing import Sequence

from nominamx.mexico.payroll.arithmetic import ZERO, to_precision
from nominamx.mexico.rates import IsrBracket

logger = logging.getLogger(__name__)


def find_bracket(
    annual_salary: Decimal,
    brackets: Sequence[IsrBracket],
) -> IsrBracket | None:
    """Returns the bracket containing the salary, or None below the first one."""
    for i, bracket in enumerate(brackets):
        if annual_salary < bracket.lower_limit:
            continue
        if i + 1 == len(brackets) or annual_salary < brackets[i + 1].lower_limit:
            return bracket
    return None


def calculate_isr(
    annual_salary: Decimal,
    brackets: Sequence[IsrBracket],
) -> Decimal:
    """Calculates the annual ISR for an annual salary.

    Args:
        annual_salary: Annual gross salary (>= 0).
        brackets: Ordered ISR brackets of the loaded configuration.

    Returns:
        Annual ISR. Zero when no bracket matches, which only happens for a
        salary below the first lower_limit.
    """
    bracket = find_bracket(annual_salary, brackets)
    if bracket is None:
        logger.error(
            "No ISR bracket matches an annual salary of %s: it is below the ISR "
            "table; ISR reported as 0",
            annual_salary,
        )
        return ZERO

    excess = annual_salary - bracket.lower_limit
    return to_precision(excess * bracket.rate + bracket.fixed_amount)
