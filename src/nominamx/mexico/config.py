"""Loading and validation of the tax configuration documents.

A configuration document is a YAML file (ISR brackets, IMSS/SAR/INFONAVIT
rates, statutory benefits, state payroll taxes). It is validated once on
load and turned into an immutable TaxConfig which is then passed explicitly
to every calculator.

Invalid documents raise TaxConfigError: no calculation may run on them.
Inconsistencies that do not prevent a calculation (non-contiguous bracket
boundaries, fixed amounts off the continuity line) are only logged.
"""

from __future__ import annotations

import datetime
import functools
import logging
from decimal import Decimal
from pathlib import Path
from types import MappingProxyType
from typing import Annotated, Any

import yaml
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from nominamx.mexico.payroll.arithmetic import CENT, HUNDRED
from nominamx.mexico.rates import (
    BenefitRates,
    ImssRates,
    InfonavitRates,
    IsrBracket,
    Jurisdiction,
    RiskClass,
    SarRates,
    TaxConfig,
    VacationStep,
)

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"

ONE = Decimal("1")


class TaxConfigError(ValueError):
    """The tax configuration is missing or invalid."""


def _coerce_decimal(v: Any) -> Any:
    # YAML reads 0.0192 as a float; go through str to keep the written digits
    if isinstance(v, float):
        return Decimal(str(v))
    return v


def _coerce_str(v: Any) -> Any:
    if isinstance(v, (datetime.date, int)):
        return str(v)
    return v


ConfigDecimal = Annotated[Decimal, BeforeValidator(_coerce_decimal)]
ConfigStr = Annotated[str, BeforeValidator(_coerce_str)]


# ---------------------------------------------------------------------------
# Document schema
# ---------------------------------------------------------------------------


class _Document(BaseModel):
    model_config = ConfigDict(extra="forbid")


class BracketDocument(_Document):
    lower_limit: ConfigDecimal
    upper_limit: ConfigDecimal | None = None
    rate: ConfigDecimal
    fixed_amount: ConfigDecimal


class IsrDocument(_Document):
    tax_brackets: list[BracketDocument] = Field(default_factory=list)


class ImssDocument(_Document):
    risk_classifications: dict[RiskClass, ConfigDecimal] = Field(default_factory=dict)
    employee_rate: ConfigDecimal


class SarDocument(_Document):
    employer_rate: ConfigDecimal
    employee_rate: ConfigDecimal


class InfonavitDocument(_Document):
    rate: ConfigDecimal


class VacationStepDocument(_Document):
    years: ConfigDecimal
    days: int


class BenefitsDocument(_Document):
    aguinaldo_days: ConfigDecimal
    vacation_premium_rate: ConfigDecimal
    vacation_days_by_tenure: list[VacationStepDocument] = Field(default_factory=list)


class StateDocument(_Document):
    code: ConfigStr = ""
    name: str = ""
    payroll_tax_rate: ConfigDecimal


class TaxConfigDocument(_Document):
    """Raw configuration document, as written in YAML."""

    version: ConfigStr
    last_updated: ConfigStr = ""
    isr: IsrDocument
    imss: ImssDocument
    sar: SarDocument
    infonavit: InfonavitDocument
    benefits: BenefitsDocument
    states: list[StateDocument] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _check_percentage(value: Decimal, label: str) -> None:
    if value < 0 or value > HUNDRED:
        raise TaxConfigError(f"{label} must be a percentage between 0 and 100 (got {value})")


def _check_fraction(value: Decimal, label: str) -> None:
    if value < 0 or value > ONE:
        raise TaxConfigError(f"{label} must be between 0 and 1 (got {value})")


def _validate_brackets(brackets: list[BracketDocument]) -> None:
    if not brackets:
        raise TaxConfigError("ISR tax brackets are required")

    if brackets[0].lower_limit != 0:
        raise TaxConfigError(
            f"ISR bracket 0: lower_limit must be 0 (got {brackets[0].lower_limit})"
        )

    for i, bracket in enumerate(brackets):
        if bracket.lower_limit < 0:
            raise TaxConfigError(f"ISR bracket {i}: lower_limit must be >= 0")
        if bracket.upper_limit is not None and bracket.upper_limit <= bracket.lower_limit:
            raise TaxConfigError(f"ISR bracket {i}: upper_limit must be > lower_limit")
        _check_fraction(bracket.rate, f"ISR bracket {i}: rate")
        if bracket.fixed_amount < 0:
            raise TaxConfigError(f"ISR bracket {i}: fixed_amount must be >= 0")

        if i == len(brackets) - 1:
            if bracket.upper_limit is not None:
                raise TaxConfigError(
                    f"ISR bracket {i}: the last bracket must have no upper_limit"
                )
            continue

        if bracket.upper_limit is None:
            raise TaxConfigError(
                f"ISR bracket {i}: only the last bracket may have no upper_limit"
            )

        next_bracket = brackets[i + 1]
        if next_bracket.lower_limit <= bracket.upper_limit:
            raise TaxConfigError(
                f"ISR bracket {i + 1}: lower_limit ({next_bracket.lower_limit}) overlaps "
                f"previous upper_limit ({bracket.upper_limit})"
            )

        # Non-fatal: the evaluator still matches over the declared ranges
        if next_bracket.lower_limit != bracket.upper_limit + CENT:
            logger.warning(
                "ISR bracket %d: upper_limit (%s) should connect to next bracket's "
                "lower_limit (%s)",
                i, bracket.upper_limit, next_bracket.lower_limit,
            )

        tax_at_upper = (bracket.upper_limit - bracket.lower_limit) * bracket.rate
        tax_at_upper += bracket.fixed_amount
        gap = next_bracket.fixed_amount - tax_at_upper
        if abs(gap) > bracket.rate * CENT:
            logger.warning(
                "ISR bracket %d: fixed_amount (%s) is %s away from the tax at the "
                "previous upper_limit (%s)",
                i + 1, next_bracket.fixed_amount, gap, tax_at_upper,
            )


def _validate_document(doc: TaxConfigDocument) -> None:
    _validate_brackets(doc.isr.tax_brackets)

    if not doc.imss.risk_classifications:
        raise TaxConfigError("IMSS risk classifications are required")
    for risk_class in RiskClass:
        if risk_class not in doc.imss.risk_classifications:
            raise TaxConfigError(f"IMSS risk classification {risk_class.value} is missing")
        _check_percentage(
            doc.imss.risk_classifications[risk_class],
            f"IMSS risk classification {risk_class.value}",
        )
    _check_percentage(doc.imss.employee_rate, "IMSS employee rate")

    _check_percentage(doc.sar.employer_rate, "SAR employer rate")
    _check_percentage(doc.sar.employee_rate, "SAR employee rate")
    _check_percentage(doc.infonavit.rate, "INFONAVIT rate")

    if doc.benefits.aguinaldo_days < 0:
        raise TaxConfigError("Aguinaldo days must be >= 0")
    _check_fraction(doc.benefits.vacation_premium_rate, "Vacation premium rate")

    steps = doc.benefits.vacation_days_by_tenure
    if not steps:
        raise TaxConfigError("Vacation days by tenure must be a non-empty list")
    for i, step in enumerate(steps):
        if step.years < 0 or step.days < 0:
            raise TaxConfigError(f"Vacation step {i}: years and days must be >= 0")
        if i > 0 and step.years <= steps[i - 1].years:
            raise TaxConfigError(
                f"Vacation step {i}: years must be sorted ascending "
                f"({steps[i - 1].years} then {step.years})"
            )
        if i > 0 and step.days < steps[i - 1].days:
            raise TaxConfigError(f"Vacation step {i}: days may not decrease with tenure")

    if not doc.states:
        raise TaxConfigError("States configuration is required")
    codes: set[str] = set()
    for state in doc.states:
        if not state.code or not state.name:
            raise TaxConfigError("Each state must have a code and name")
        if state.code in codes:
            raise TaxConfigError(f"State {state.code}: duplicate code")
        codes.add(state.code)
        _check_percentage(state.payroll_tax_rate, f"State {state.code}: payroll_tax_rate")


def _build_config(doc: TaxConfigDocument) -> TaxConfig:
    return TaxConfig(
        version=doc.version,
        last_updated=doc.last_updated,
        isr_brackets=tuple(
            IsrBracket(
                lower_limit=b.lower_limit,
                upper_limit=b.upper_limit,
                rate=b.rate,
                fixed_amount=b.fixed_amount,
            )
            for b in doc.isr.tax_brackets
        ),
        imss=ImssRates(
            risk_classes=MappingProxyType(
                {rc: doc.imss.risk_classifications[rc] for rc in RiskClass}
            ),
            employee_rate=doc.imss.employee_rate,
        ),
        sar=SarRates(
            employer_rate=doc.sar.employer_rate,
            employee_rate=doc.sar.employee_rate,
        ),
        infonavit=InfonavitRates(rate=doc.infonavit.rate),
        benefits=BenefitRates(
            aguinaldo_days=doc.benefits.aguinaldo_days,
            vacation_premium_rate=doc.benefits.vacation_premium_rate,
            vacation_days_by_tenure=tuple(
                VacationStep(years=s.years, days=s.days)
                for s in doc.benefits.vacation_days_by_tenure
            ),
        ),
        jurisdictions=tuple(
            Jurisdiction(code=s.code, name=s.name, payroll_tax_rate=s.payroll_tax_rate)
            for s in doc.states
        ),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_tax_config(data: Any) -> TaxConfig:
    """Validates a configuration document already parsed from YAML.

    Raises:
        TaxConfigError: If the document is structurally or semantically invalid.
    """
    if not isinstance(data, dict):
        raise TaxConfigError("The tax configuration document must be a mapping")

    try:
        doc = TaxConfigDocument.model_validate(data)
    except ValidationError as e:
        raise TaxConfigError(f"Invalid tax configuration: {e}") from e

    _validate_document(doc)
    return _build_config(doc)


def load_tax_config(path: Path | str) -> TaxConfig:
    """Loads and validates a tax configuration from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        TaxConfigError: If the YAML is unreadable or the document invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Tax configuration file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise TaxConfigError(f"Unreadable tax configuration ({path}): {e}") from e

    try:
        config = parse_tax_config(data)
    except TaxConfigError as e:
        raise TaxConfigError(f"{path}: {e}") from e

    logger.info(
        "Tax configuration %s loaded from %s (%d ISR brackets, %d states)",
        config.version, path, len(config.isr_brackets), len(config.jurisdictions),
    )
    return config


def available_versions() -> list[str]:
    """Versions of the bundled configuration documents, oldest first."""
    return sorted(p.stem for p in DATA_DIR.glob("*.yaml"))


@functools.lru_cache(maxsize=None)
def get_tax_config(version: str | None = None) -> TaxConfig:
    """Returns a bundled configuration, loaded once per process.

    Args:
        version: Version of the tables (e.g. "2024"); latest when None.

    Raises:
        ValueError: If no bundled document exists for that version.
    """
    versions = available_versions()
    if version is None:
        if not versions:
            raise TaxConfigError(f"No tax configuration found in {DATA_DIR}")
        version = versions[-1]
    if version not in versions:
        raise ValueError(
            f"Tax configuration not available for version {version}. "
            f"Available versions: {versions}"
        )
    return load_tax_config(DATA_DIR / f"{version}.yaml")
