"""Contrato del cliente de tareas remotas.

El pipeline (`core.services`) depende de este Protocol, no del adaptador
HTTP concreto; los tests pueden inyectar un fake.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Protocol, runtime_checkable

from core.domain.models import ConversionResult


@runtime_checkable
class RemoteTaskApi(Protocol):
    """Ciclo de vida de una tarea: submit → poll → output.

    Todas las operaciones son asíncronas y se encadenan de forma secuencial.
    """

    async def submit_task(self, code: str, arguments: str) -> str:
        """Envía la tarea y devuelve su identificador."""

        ...

    async def wait_for_completion(
        self,
        task_id: str,
        *,
        cancel_event: asyncio.Event | None = None,
        on_status: Callable[[str], None] | None = None,
    ) -> list[str]:
        """Espera a `Completed` y devuelve los estados observados."""

        ...

    async def get_task_output(self, task_id: str) -> ConversionResult:
        """Descarga y parsea el stdout de una tarea completada."""

        ...
