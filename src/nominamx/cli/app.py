"""Main NominaMX CLI application."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

import nominamx
from nominamx.history.store import CalculationHistory
from nominamx.mexico.config import get_tax_config, load_tax_config
from nominamx.mexico.rates import TaxConfig

app = typer.Typer(
    name="nmx",
    help="NominaMX - Costo patronal y salario neto en México",
    no_args_is_help=True,
)

console = Console()
logger = logging.getLogger(__name__)

# Global options stored by the callback
_config_path: Path | None = None
_history_path: Path = Path("data/historial.yaml")
_config: TaxConfig | None = None


def get_config() -> TaxConfig:
    """Returns the tax configuration, loaded and validated once per invocation.

    Exits with code 1 when the configuration is missing or invalid: no
    calculation runs on an unvalidated table.
    """
    global _config
    if _config is None:
        try:
            if _config_path is not None:
                _config = load_tax_config(_config_path)
            else:
                _config = get_tax_config()
        except (FileNotFoundError, ValueError) as e:
            console.print(f"[red]Configuración fiscal inválida: {e}[/red]")
            raise typer.Exit(1)
        logger.debug("Using tax configuration %s", _config.version)
    return _config


def get_history() -> CalculationHistory:
    """Returns the calculation history of the current invocation."""
    return CalculationHistory(_history_path)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.environ.get("LOG_LEVEL", "WARNING").upper()
        level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"NominaMX version {nominamx.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        envvar="NOMINAMX_CONFIG",
        help="Archivo YAML de configuración fiscal (por defecto: tablas incluidas más recientes)",
    ),
    historial: str = typer.Option(
        "data/historial.yaml",
        "--historial",
        envvar="NOMINAMX_HISTORIAL",
        help="Archivo del historial de cálculos",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", help="Mostrar mensajes de depuración",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Mostrar la versión de NominaMX",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """NominaMX - Costo total de un empleado y su salario neto en México."""
    global _config_path, _history_path, _config
    _configure_logging(verbose)
    _config_path = Path(config) if config else None
    _history_path = Path(historial)
    _config = None


# Import and registration of the subcommands
from nominamx.cli.calculate import calcular  # noqa: E402
from nominamx.cli.config import config_app  # noqa: E402
from nominamx.cli.history import history_app  # noqa: E402

app.command(name="calcular", help="Calcular el costo patronal y el salario neto")(calcular)
app.add_typer(history_app, name="historial", help="Historial de cálculos")
app.add_typer(config_app, name="config", help="Configuración fiscal")
