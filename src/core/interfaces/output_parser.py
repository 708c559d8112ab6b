"""Contrato de parsers de salida.

El formato del stdout remoto es una caja negra: el pipeline solo depende de
este Protocol, así que cambiar texto libre por JSON no toca el polling ni el
envío de tareas.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import ConversionResult


@runtime_checkable
class OutputParser(Protocol):
    """Convierte el stdout crudo de una tarea en un `ConversionResult`.

    Reglas de diseño:
    - Nunca devuelve resultados parciales: o ambos valores o `OutputParseError`.
    """

    def parse(self, raw: str) -> ConversionResult:
        ...
