"""Parser para programas que imprimen un objeto JSON en stdout.

Formato aceptado: `{"rate": <num>, "convertedAmount": <num>}` (también
`converted_amount`).
"""

from __future__ import annotations

import json

from core.domain.models import ConversionResult
from core.errors import OutputParseError


def _as_number(value: object) -> float | None:
    # bool es subclase de int: no es un número válido aquí.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


class JsonOutputParser:
    def parse(self, raw: str) -> ConversionResult:
        text = (raw or "").strip()
        if not text:
            raise OutputParseError("Task output is empty")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise OutputParseError(f"Task output is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise OutputParseError("Task output must be a JSON object")

        rate = _as_number(data.get("rate"))
        amount = _as_number(data.get("convertedAmount", data.get("converted_amount")))
        if rate is None or amount is None:
            raise OutputParseError("Failed to extract conversion rate or converted amount")
        return ConversionResult(rate=rate, converted_amount=amount)
