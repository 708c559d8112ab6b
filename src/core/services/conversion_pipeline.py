"""Orquestación de una conversión remota.

Encadena Submitter → Poller → Extractor sobre un `RemoteTaskApi`. La CLI
delega aquí todo el flujo y se queda solo con la presentación (spinner,
impresión, códigos de salida).
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Callable

from core.domain.models import ConversionOutcome, ConversionRequest, ConversionResult
from core.interfaces.task_api import RemoteTaskApi


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress)."""

    submitted: Callable[[str], None] | None = None
    status: Callable[[str], None] | None = None


@dataclass
class TaskExecution:
    """Output of a single submit → poll → fetch run."""

    task_id: str
    result: ConversionResult
    statuses: list[str] = field(default_factory=list)


async def execute_task(
    api: RemoteTaskApi,
    code: str,
    arguments: str,
    *,
    cancel_event: asyncio.Event | None = None,
    hooks: PipelineHooks | None = None,
) -> TaskExecution:
    """Envía la tarea, espera a que termine y devuelve su salida parseada.

    Las llamadas son estrictamente secuenciales; un estado terminal de fallo
    propaga `TaskTerminatedError` sin llegar a descargar la salida.
    """

    hooks = hooks or PipelineHooks()

    task_id = await api.submit_task(code, arguments)
    if hooks.submitted:
        hooks.submitted(task_id)

    statuses = await api.wait_for_completion(
        task_id,
        cancel_event=cancel_event,
        on_status=hooks.status,
    )
    result = await api.get_task_output(task_id)
    return TaskExecution(task_id=task_id, result=result, statuses=statuses)


async def run_conversion(
    request: ConversionRequest,
    *,
    api: RemoteTaskApi,
    program: str,
    cancel_event: asyncio.Event | None = None,
    hooks: PipelineHooks | None = None,
) -> ConversionOutcome:
    execution = await execute_task(
        api,
        program,
        request.program_arguments,
        cancel_event=cancel_event,
        hooks=hooks,
    )
    return ConversionOutcome(
        request=request,
        task_id=execution.task_id,
        result=execution.result,
        statuses=execution.statuses,
    )
