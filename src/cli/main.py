"""CLI principal (Typer).

Comandos:
- `convert`: envía la conversión a Signaloid, espera y muestra el resultado.
- `doctor`: diagnóstico de entorno/configuración.

Es la única capa que traduce errores (`UxConvertError`) a códigos de salida.
"""

from __future__ import annotations

import asyncio
import signal
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from adapters.json_exporter import export_outcome_json, outcome_to_json
from adapters.signaloid_client import SignaloidTaskClient
from cli import doctor
from cli.logging_setup import setup_logging
from cli.ui_components import print_conversion, print_error
from core.config import AppSettings, load_settings
from core.domain.models import ConversionOutcome, ConversionRequest
from core.errors import UxConvertError
from core.resources_loader import load_program
from core.services.conversion_pipeline import PipelineHooks, run_conversion

app = typer.Typer(
    no_args_is_help=True,
    help="Uncertainty-aware currency conversion on the Signaloid compute API.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _install_interrupt(loop: asyncio.AbstractEventLoop, cancel_event: asyncio.Event) -> bool:
    # add_signal_handler no existe en Windows ni fuera del hilo principal.
    try:
        loop.add_signal_handler(signal.SIGINT, cancel_event.set)
    except (NotImplementedError, RuntimeError, ValueError):
        return False
    return True


async def _run_conversion(
    settings: AppSettings,
    request: ConversionRequest,
    program: str,
) -> ConversionOutcome:
    cancel_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    installed = _install_interrupt(loop, cancel_event)
    try:
        async with SignaloidTaskClient(settings) as api:
            with _err_console.status("Submitting task...") as spinner:
                hooks = PipelineHooks(
                    submitted=lambda task_id: spinner.update(f"Task {task_id} submitted"),
                    status=lambda status: spinner.update(f"Task status: {status}"),
                )
                return await run_conversion(
                    request,
                    api=api,
                    program=program,
                    cancel_event=cancel_event,
                    hooks=hooks,
                )
    finally:
        if installed:
            loop.remove_signal_handler(signal.SIGINT)


@app.command()
def convert(
    source: str = typer.Option(..., "--source", "-s", help="Source currency code."),
    target: str = typer.Option(..., "--target", "-t", help="Target currency code."),
    amount: float = typer.Option(..., "--amount", "-a", help="Amount to convert."),
    rate_min: float = typer.Option(..., "--rate-min", help="Minimum conversion rate."),
    rate_max: float = typer.Option(..., "--rate-max", help="Maximum conversion rate."),
    json_output: bool = typer.Option(False, "--json", help="Print the outcome as JSON."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write the outcome to a JSON file."),
) -> None:
    """Convert AMOUNT from SOURCE to TARGET with a rate sampled in [rate-min, rate-max]."""

    try:
        settings = load_settings()
        setup_logging(settings.log_level, console=_err_console)

        request = ConversionRequest.create(
            source_currency=source,
            target_currency=target,
            amount=amount,
            rate_min=rate_min,
            rate_max=rate_max,
        )
        program = load_program(settings)
        outcome = asyncio.run(_run_conversion(settings, request, program))
    except UxConvertError as exc:
        print_error(_err_console, exc)
        raise typer.Exit(code=exc.exit_code) from exc

    if json_output:
        typer.echo(outcome_to_json(outcome))
    else:
        print_conversion(_console, outcome)

    if output is not None:
        path = export_outcome_json(outcome=outcome, output_path=output)
        _err_console.print(f"[green]Saved outcome to:[/green] {path}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
