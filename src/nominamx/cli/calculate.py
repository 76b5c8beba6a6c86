"""CLI command for salary cost calculations.

Usage:
    nmx calcular 15000 --periodo monthly --estado CDMX --riesgo III --antiguedad 1
    nmx calcular 8000 --periodo bi-weekly --vales 500 --otro "Bono navideño=3000:anual"
"""

from __future__ import annotations

from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from nominamx.cli.formatting import (
    benefit_label,
    format_currency,
    format_date,
    format_period,
)
from nominamx.mexico.payroll.engine import calculate_salary_costs
from nominamx.mexico.payroll.periods import Period
from nominamx.mexico.rates import RiskClass
from nominamx.models.result import CalculationResult

console = Console()

EMPLOYER_LABELS = {
    "imss": "IMSS patronal",
    "sar": "SAR patronal",
    "infonavit": "INFONAVIT",
    "payroll_tax": "Impuesto sobre nómina",
    "aguinaldo": "Aguinaldo",
    "vacation_premium": "Prima vacacional",
    "ptu": "PTU",
    "additional_benefits": "Prestaciones adicionales",
}

DEDUCTION_LABELS = {
    "isr": "ISR",
    "imss": "IMSS obrero",
    "sar": "SAR obrero",
}

ANNUAL_SUFFIX = ":anual"


def _parse_custom_benefit(raw: str) -> dict:
    """Parses NOMBRE=MONTO or NOMBRE=MONTO:anual into a custom benefit."""
    name, sep, amount = raw.partition("=")
    if not sep or not name.strip() or not amount.strip():
        raise ValueError(f"Prestación inválida '{raw}': formato esperado NOMBRE=MONTO[:anual]")
    is_annual = amount.endswith(ANNUAL_SUFFIX)
    if is_annual:
        amount = amount[: -len(ANNUAL_SUFFIX)]
    return {"name": name.strip(), "amount": amount.strip(), "is_annual": is_annual}


def calcular(
    salario: str = typer.Argument(..., help="Salario bruto del periodo"),
    periodo: Period = typer.Option(
        Period.MONTHLY, "--periodo", "-p", help="Periodo de pago",
    ),
    estado: str = typer.Option(
        "CDMX", "--estado", "-e", help="Clave del estado (ISN)",
    ),
    riesgo: RiskClass = typer.Option(
        RiskClass.I, "--riesgo", "-r", help="Clase de riesgo de trabajo IMSS",
    ),
    antiguedad: str = typer.Option(
        "0", "--antiguedad", "-a", help="Antigüedad en años",
    ),
    ptu: Optional[str] = typer.Option(
        None, "--ptu", help="PTU, expresada en el mismo periodo",
    ),
    bono_desempeno: Optional[str] = typer.Option(
        None, "--bono-desempeno", help="Bono de desempeño anual",
    ),
    bono_firma: Optional[str] = typer.Option(
        None, "--bono-firma", help="Bono de contratación anual",
    ),
    bono_retencion: Optional[str] = typer.Option(
        None, "--bono-retencion", help="Bono de retención anual",
    ),
    vales: Optional[str] = typer.Option(
        None, "--vales", help="Vales de despensa por periodo",
    ),
    transporte: Optional[str] = typer.Option(
        None, "--transporte", help="Apoyo de transporte por periodo",
    ),
    seguro_medico: Optional[str] = typer.Option(
        None, "--seguro-medico", help="Seguro de gastos médicos por periodo",
    ),
    seguro_vida: Optional[str] = typer.Option(
        None, "--seguro-vida", help="Seguro de vida por periodo",
    ),
    otro: Optional[list[str]] = typer.Option(
        None, "--otro", help="Prestación personalizada NOMBRE=MONTO[:anual] (repetible)",
    ),
    guardar: bool = typer.Option(
        True, "--guardar/--no-guardar", help="Guardar el resultado en el historial",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Imprimir el resultado completo en JSON",
    ),
) -> None:
    """Calcular el costo patronal total y el salario neto de un empleado."""
    from nominamx.cli.app import get_config, get_history

    config = get_config()

    try:
        others = [_parse_custom_benefit(raw) for raw in otro or []]
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    benefits = {
        "performance_bonus": bono_desempeno,
        "signing_bonus": bono_firma,
        "retention_bonus": bono_retencion,
        "meal_vouchers": vales,
        "transportation": transporte,
        "health_insurance": seguro_medico,
        "life_insurance": seguro_vida,
    }
    benefits = {name: amount for name, amount in benefits.items() if amount is not None}
    if others:
        benefits["other"] = others

    data = {
        "gross_salary": salario,
        "period": periodo,
        "jurisdiction": estado.upper(),
        "risk_class": riesgo,
        "ptu_amount": ptu,
        "tenure_years": antiguedad,
        "additional_benefits": benefits or None,
    }

    try:
        result = calculate_salary_costs(data, config)
    except ValidationError as e:
        console.print("[red]Datos de entrada inválidos:[/red]")
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            console.print(f"[red]  {location}: {error['msg']}[/red]")
        raise typer.Exit(code=1)

    if not json_output and config.jurisdiction(result.input.jurisdiction) is None:
        console.print(
            f"[yellow]Estado '{result.input.jurisdiction}' desconocido: "
            f"se aplica la tasa de ISN por defecto[/yellow]"
        )

    if json_output:
        typer.echo(result.model_dump_json(indent=2))
    else:
        display_result(result)

    if guardar:
        get_history().save(result)
        if not json_output:
            console.print(f"\n[dim]Guardado en el historial: {result.id}[/dim]")


def display_result(result: CalculationResult) -> None:
    """Displays the complete calculation with Rich."""
    period_label = format_period(result.period)
    calc_input = result.input

    table = Table(
        title=(
            f"{period_label} - Bruto: {format_currency(result.gross_salary)} MXN "
            f"({calc_input.jurisdiction}, clase {calc_input.risk_class.value})"
        ),
        caption=f"{format_date(result.timestamp)} - {result.id}",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Concepto", style="cyan")
    table.add_column(period_label, justify="right")
    if result.period is not Period.ANNUAL:
        table.add_column("Anual", justify="right")

    def row(label: str, period_amount, annual_amount, style: str | None = None) -> None:
        cells = [format_currency(period_amount)]
        if result.period is not Period.ANNUAL:
            cells.append(format_currency(annual_amount))
        if style:
            label = f"[{style}]{label}[/{style}]"
            cells = [f"[{style}]{cell}[/{style}]" for cell in cells]
        table.add_row(label, *cells)

    row("Salario bruto", result.gross_salary, result.gross_salary_annual, "bold")

    # Costos patronales
    table.add_section()
    table.add_row("[bold]Costos patronales[/bold]")
    annual_costs = result.employer_costs_annual.lines()
    for name, amount in result.employer_costs.lines().items():
        row(f"  {EMPLOYER_LABELS[name]}", amount, annual_costs[name])
    row(
        "Total costos patronales",
        result.employer_costs.total,
        result.employer_costs_annual.total,
        "bold",
    )

    # Deducciones del empleado
    table.add_section()
    table.add_row("[bold]Deducciones del empleado[/bold]")
    annual_deductions = result.employee_deductions_annual.lines()
    for name, amount in result.employee_deductions.lines().items():
        row(f"  {DEDUCTION_LABELS[name]}", amount, annual_deductions[name])
    row(
        "Total deducciones",
        result.employee_deductions.total,
        result.employee_deductions_annual.total,
        "bold red",
    )

    table.add_section()
    row("Salario neto", result.net_salary, result.net_salary_annual, "bold green")
    row(
        "Costo total para la empresa",
        result.total_company_cost,
        result.total_company_cost_annual,
        "bold yellow",
    )

    console.print(table)

    if result.additional_benefits_breakdown is not None:
        _display_breakdown(result)


def _display_breakdown(result: CalculationResult) -> None:
    """Displays the itemized benefits."""
    period_label = format_period(result.period)
    table = Table(title="Desglose de prestaciones", show_header=True)
    table.add_column("Prestación", style="cyan")
    table.add_column(period_label, justify="right")
    table.add_column("Anual", justify="right")

    for name, amounts in result.additional_benefits_breakdown.items():
        table.add_row(
            benefit_label(name),
            format_currency(amounts.period),
            format_currency(amounts.annual),
        )

    console.print(table)
