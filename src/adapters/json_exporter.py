"""Exportación JSON de una conversión.

Permite encadenar la CLI con otras herramientas sin parsear el texto de la
consola.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import ConversionOutcome


def outcome_to_json(outcome: ConversionOutcome) -> str:
    payload = outcome.model_dump(mode="json")
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def export_outcome_json(*, outcome: ConversionOutcome, output_path: Path) -> Path:
    """Exporta `ConversionOutcome` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(outcome_to_json(outcome) + "\n", encoding="utf-8")
    return output_path
