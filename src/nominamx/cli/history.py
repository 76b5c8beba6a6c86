"""Subcommands for the calculation history."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from nominamx.cli.calculate import display_result
from nominamx.cli.formatting import format_currency, format_date, format_period
from nominamx.history.store import CalculationHistory
from nominamx.models.result import CalculationResult

history_app = typer.Typer(no_args_is_help=True)
console = Console()

SHORT_ID = 8


def _get_history() -> CalculationHistory:
    from nominamx.cli.app import get_history

    return get_history()


def _resolve(history: CalculationHistory, result_id: str) -> CalculationResult:
    """Finds a result by full id or unique id prefix, or exits with code 1."""
    result = history.get(result_id)
    if result is not None:
        return result

    matches = [r for r in history.list() if r.id.startswith(result_id)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        console.print(f"[red]Identificador ambiguo: {result_id}[/red]")
    else:
        console.print(f"[red]Cálculo no encontrado: {result_id}[/red]")
    raise typer.Exit(code=1)


@history_app.command("listar")
def listar() -> None:
    """Listar los cálculos guardados, del más reciente al más antiguo."""
    results = _get_history().list()
    if not results:
        console.print("[yellow]El historial está vacío.[/yellow]")
        return

    table = Table(title=f"Historial ({len(results)} cálculos)")
    table.add_column("ID", style="cyan")
    table.add_column("Fecha")
    table.add_column("Periodo")
    table.add_column("Estado")
    table.add_column("Bruto", justify="right")
    table.add_column("Neto", justify="right")
    table.add_column("Costo empresa", justify="right")

    for r in results:
        table.add_row(
            r.id[:SHORT_ID],
            format_date(r.timestamp),
            format_period(r.period),
            r.input.jurisdiction,
            format_currency(r.gross_salary),
            format_currency(r.net_salary),
            format_currency(r.total_company_cost),
        )

    console.print(table)


@history_app.command("ver")
def ver(
    result_id: str = typer.Argument(..., help="ID del cálculo (o su prefijo)"),
) -> None:
    """Mostrar un cálculo guardado."""
    result = _resolve(_get_history(), result_id)
    display_result(result)


@history_app.command("borrar")
def borrar(
    result_id: str = typer.Argument(..., help="ID del cálculo (o su prefijo)"),
) -> None:
    """Borrar un cálculo del historial."""
    history = _get_history()
    result = _resolve(history, result_id)
    history.delete(result.id)
    console.print(f"[green]Cálculo {result.id} borrado.[/green]")


@history_app.command("limpiar")
def limpiar(
    si: bool = typer.Option(False, "--si", help="No pedir confirmación"),
) -> None:
    """Borrar todo el historial."""
    if not si and not typer.confirm("¿Borrar todo el historial?"):
        console.print("[yellow]Operación cancelada.[/yellow]")
        raise typer.Exit()

    _get_history().clear()
    console.print("[green]Historial borrado.[/green]")
