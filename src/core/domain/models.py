"""Modelos del dominio (Pydantic v2).

Nota:
- `ConversionRequest`/`ConversionResult` describen *qué* se convierte.
- Los modelos `Task*` reflejan el contrato JSON de la API de Signaloid
  (claves PascalCase vía alias); no contienen lógica de I/O.
"""

from __future__ import annotations

import math
from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.errors import InputValidationError


def format_number(value: float) -> str:
    # 100.0 -> "100", 0.85 -> "0.85" (repr conserva toda la precisión)
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def validate_input(
    source_currency: str,
    target_currency: str,
    rate_min: float,
    rate_max: float,
    amount: float,
) -> None:
    """Valida los parámetros de conversión antes de cualquier llamada remota.

    Lanza `InputValidationError` con el primer problema encontrado.
    """

    if source_currency == target_currency:
        raise InputValidationError("Source and target currencies cannot be the same.")

    if not all(math.isfinite(value) for value in (rate_min, rate_max, amount)):
        raise InputValidationError("Rates and amount must be finite numbers.")

    if rate_min >= rate_max:
        raise InputValidationError("Minimum rate must be less than maximum rate.")

    if amount <= 0:
        raise InputValidationError("Amount must be a positive number.")

    if rate_min <= 0 or rate_max <= 0:
        raise InputValidationError("Rates must be positive numbers.")


class ConversionRequest(BaseModel):
    """Parámetros validados de una invocación de la CLI.

    Se construye con `ConversionRequest.create`, que aplica `validate_input`.
    """

    model_config = ConfigDict(frozen=True)

    source_currency: str = Field(..., min_length=1, max_length=16, description="Código de moneda origen.")
    target_currency: str = Field(..., min_length=1, max_length=16, description="Código de moneda destino.")
    amount: float = Field(..., description="Importe a convertir.")
    rate_min: float = Field(..., description="Límite inferior de la tasa.")
    rate_max: float = Field(..., description="Límite superior de la tasa.")

    @classmethod
    def create(
        cls,
        *,
        source_currency: str,
        target_currency: str,
        amount: float,
        rate_min: float,
        rate_max: float,
    ) -> "ConversionRequest":
        source = source_currency.strip().upper()
        target = target_currency.strip().upper()
        if not source or not target:
            raise InputValidationError("Currency codes cannot be empty.")
        validate_input(source, target, rate_min, rate_max, amount)
        return cls(
            source_currency=source,
            target_currency=target,
            amount=amount,
            rate_min=rate_min,
            rate_max=rate_max,
        )

    @property
    def program_arguments(self) -> str:
        """Argumentos de línea de comandos del programa remoto."""

        return " ".join(format_number(v) for v in (self.rate_min, self.rate_max, self.amount))


class ConversionResult(BaseModel):
    """Valores extraídos del stdout de una tarea completada."""

    model_config = ConfigDict(frozen=True)

    rate: float = Field(..., description="Tasa de conversión muestreada.")
    converted_amount: float = Field(..., description="Importe convertido.")


class TaskStatus(str, Enum):
    """Estados de tarea conocidos. La API puede devolver otros."""

    ACCEPTED = "Accepted"
    INITIALISING = "Initialising"
    QUEUED = "Queued"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    STOPPED = "Stopped"

    @classmethod
    def failure_statuses(cls) -> frozenset[str]:
        return frozenset({cls.CANCELLED.value, cls.STOPPED.value})


class SourceCodePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    object: str = Field(default="SourceCode", alias="Object")
    code: str = Field(..., alias="Code")
    arguments: str = Field(default="", alias="Arguments")
    language: str = Field(default="C", alias="Language")


class TaskRequest(BaseModel):
    """Cuerpo de `POST /tasks` para una ejecución de código fuente."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(default="SourceCode", alias="Type")
    source_code: SourceCodePayload = Field(..., alias="SourceCode")

    @classmethod
    def for_source(cls, code: str, arguments: str) -> "TaskRequest":
        return cls(source_code=SourceCodePayload(code=code, arguments=arguments))


class TaskSubmissionResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    task_id: str = Field(..., min_length=1, alias="TaskID")


class TaskStatusResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    status: str = Field(..., alias="Status")


class TaskOutputsResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    stdout: str | None = Field(default=None, alias="Stdout", description="URL del artefacto stdout.")
    stderr: str | None = Field(default=None, alias="Stderr", description="URL del artefacto stderr.")


class ConversionOutcome(BaseModel):
    """Agregado de una conversión completa (para presentación/exportación)."""

    request: ConversionRequest
    task_id: str = Field(..., min_length=1)
    result: ConversionResult
    statuses: list[str] = Field(
        default_factory=list,
        description="Estados observados durante el polling, en orden.",
    )
