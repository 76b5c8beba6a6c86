"""Display formatting: pesos, Spanish period labels and dates."""

from __future__ import annotations

import datetime
from decimal import Decimal

from nominamx.mexico.payroll.arithmetic import round_cents
from nominamx.mexico.payroll.periods import Period

PERIOD_LABELS: dict[Period, str] = {
    Period.WEEKLY: "Semanal",
    Period.BI_WEEKLY: "Quincenal",
    Period.MONTHLY: "Mensual",
    Period.ANNUAL: "Anual",
}

MONTHS = ("ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sep", "oct", "nov", "dic")

BENEFIT_LABELS: dict[str, str] = {
    "aguinaldo": "Aguinaldo",
    "vacation_premium": "Prima vacacional",
    "ptu": "PTU",
    "performance_bonus": "Bono de desempeño",
    "signing_bonus": "Bono de contratación",
    "retention_bonus": "Bono de retención",
    "meal_vouchers": "Vales de despensa",
    "transportation": "Transporte",
    "health_insurance": "Seguro de gastos médicos",
    "life_insurance": "Seguro de vida",
}


def format_currency(amount: Decimal) -> str:
    """Formats an amount in MXN: $15,000.00."""
    rounded = round_cents(amount)
    if rounded < 0:
        return f"-${-rounded:,.2f}"
    return f"${rounded:,.2f}"


def format_period(period: Period | str) -> str:
    """Spanish label of a pay period; unknown values are returned as is."""
    try:
        return PERIOD_LABELS[Period(period)]
    except ValueError:
        return str(period)


def format_date(moment: datetime.datetime) -> str:
    """Short Spanish date: 19 oct 2026 14:05."""
    return f"{moment.day} {MONTHS[moment.month - 1]} {moment.year} {moment:%H:%M}"


def benefit_label(name: str) -> str:
    """Label of a breakdown entry; custom benefits keep their own name."""
    return BENEFIT_LABELS.get(name, name)
