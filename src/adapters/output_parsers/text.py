"""Parser del stdout en texto libre (formato por defecto de `conversion.c`).

El entorno de Signaloid añade a cada valor incierto un sufijo que empieza por
`Ux` (datos de la distribución). Se descarta cada segmento `Ux...` hasta el
final de su línea antes de buscar los valores.
"""

from __future__ import annotations

import re

from core.domain.models import ConversionResult
from core.errors import OutputParseError

_NUMBER = r"([-+]?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?)"

_UX_SENTINEL_RE = re.compile(r"Ux[^\n]*")
_RATE_RE = re.compile(r"Uncertain conversion rate: " + _NUMBER)
_AMOUNT_RE = re.compile(r"Converted Amount: " + _NUMBER)


def strip_ux_sentinel(stdout: str) -> str:
    return _UX_SENTINEL_RE.sub("", stdout)


class TextOutputParser:
    """Extrae `rate` y `converted_amount` con dos regex independientes."""

    def parse(self, raw: str) -> ConversionResult:
        clean = strip_ux_sentinel(raw or "")
        rate_match = _RATE_RE.search(clean)
        amount_match = _AMOUNT_RE.search(clean)

        if not rate_match or not amount_match:
            raise OutputParseError("Failed to extract conversion rate or converted amount")

        return ConversionResult(
            rate=float(rate_match.group(1)),
            converted_amount=float(amount_match.group(1)),
        )
