"""Componentes de UI para CLI (Rich).

Separa los detalles visuales de la lógica de comandos.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from core.domain.models import ConversionOutcome, format_number
from core.errors import RemoteApiError, UxConvertError


def format_conversion_lines(outcome: ConversionOutcome) -> list[str]:
    """Las dos líneas de resultado: importe convertido (2 decimales) y tasa."""

    req = outcome.request
    res = outcome.result
    return [
        f"Converted {format_number(req.amount)} {req.source_currency} to "
        f"{res.converted_amount:.2f} {req.target_currency}.",
        f"Conversion Rate: {format_number(res.rate)}",
    ]


def print_conversion(console: Console, outcome: ConversionOutcome) -> None:
    for line in format_conversion_lines(outcome):
        console.print(Text(line))


def print_error(console: Console, exc: UxConvertError) -> None:
    """Diagnóstico en una línea; añade el código HTTP si lo hay."""

    message = Text("Error: ", style="bold red")
    message.append(str(exc))
    if isinstance(exc, RemoteApiError) and exc.status_code is not None:
        message.append(f" (HTTP {exc.status_code})", style="dim")
    console.print(message)


def build_doctor_table() -> Table:
    table = Table(title="uxconvert Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
