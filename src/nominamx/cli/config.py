"""Subcommands for the tax configuration."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from nominamx.cli.formatting import format_currency
from nominamx.mexico.config import available_versions, load_tax_config

config_app = typer.Typer(no_args_is_help=True)
console = Console()


@config_app.command("validar")
def validar(
    ruta: Optional[str] = typer.Argument(
        None, help="Archivo YAML a validar (por defecto: la configuración activa)",
    ),
) -> None:
    """Validar un archivo de configuración fiscal."""
    from nominamx.cli.app import get_config

    if ruta is None:
        config = get_config()
    else:
        try:
            config = load_tax_config(ruta)
        except (FileNotFoundError, ValueError) as e:
            console.print(f"[red]Configuración fiscal inválida: {e}[/red]")
            raise typer.Exit(code=1)

    console.print(
        f"[green]Configuración {config.version} válida[/green] "
        f"(actualizada {config.last_updated}): "
        f"{len(config.isr_brackets)} tramos ISR, "
        f"{len(config.jurisdictions)} estados"
    )


@config_app.command("versiones")
def versiones() -> None:
    """Listar las versiones de tablas incluidas."""
    for version in available_versions():
        console.print(version)


@config_app.command("estados")
def estados() -> None:
    """Listar los estados y su tasa de impuesto sobre nómina."""
    from nominamx.cli.app import get_config

    config = get_config()
    table = Table(title=f"Impuesto sobre nómina ({config.version})")
    table.add_column("Clave", style="cyan")
    table.add_column("Estado")
    table.add_column("Tasa ISN", justify="right")

    for jurisdiction in config.jurisdictions:
        table.add_row(
            jurisdiction.code,
            jurisdiction.name,
            f"{jurisdiction.payroll_tax_rate}%",
        )

    console.print(table)


@config_app.command("isr")
def isr() -> None:
    """Mostrar la tarifa anual de ISR."""
    from nominamx.cli.app import get_config

    config = get_config()
    table = Table(title=f"Tarifa ISR anual ({config.version})")
    table.add_column("Límite inferior", justify="right")
    table.add_column("Límite superior", justify="right")
    table.add_column("Cuota fija", justify="right")
    table.add_column("Tasa excedente", justify="right")

    for bracket in config.isr_brackets:
        upper = (
            format_currency(bracket.upper_limit)
            if bracket.upper_limit is not None
            else "En adelante"
        )
        table.add_row(
            format_currency(bracket.lower_limit),
            upper,
            format_currency(bracket.fixed_amount),
            f"{bracket.rate * 100:.2f}%",
        )

    console.print(table)
