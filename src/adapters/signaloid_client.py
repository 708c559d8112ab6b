"""Adaptador de la API de tareas de Signaloid.

Responsabilidad:
- Enviar una tarea de código fuente (`POST /tasks`).
- Consultar su estado hasta un estado terminal (`GET /tasks/{id}`).
- Descargar el stdout (`GET /tasks/{id}/outputs` + URL del artefacto) y
  delegar el parseo en un `OutputParser`.

Política: un solo intento por llamada. Cualquier respuesta no-2xx o fallo de
red se traduce a `RemoteApiError` sin reintentos.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

import httpx

from adapters.http_client import build_async_client, build_download_client
from adapters.output_parsers import build_output_parser
from core.config import AppSettings, require_api_key
from core.domain.models import (
    ConversionResult,
    TaskOutputsResponse,
    TaskRequest,
    TaskStatus,
    TaskStatusResponse,
    TaskSubmissionResponse,
)
from core.errors import (
    MissingOutputError,
    PollingCancelledError,
    PollingTimeoutError,
    RemoteApiError,
    TaskTerminatedError,
)
from core.interfaces.output_parser import OutputParser

logger = logging.getLogger(__name__)


def _response_detail(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        return response.text


class SignaloidTaskClient:
    """Cliente del ciclo de vida de una tarea (implementa `RemoteTaskApi`).

    Acepta clientes httpx ya construidos (`api_client`, `download_client`);
    si no, los crea con `transport` (tests con `httpx.MockTransport`).
    `aclose()` solo cierra los clientes que creó esta instancia.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        parser: OutputParser | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        api_client: httpx.AsyncClient | None = None,
        download_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        require_api_key(self._settings)

        self._owned: list[httpx.AsyncClient] = []
        if api_client is None:
            api_client = build_async_client(self._settings, transport=transport)
            self._owned.append(api_client)
        if download_client is None:
            download_client = build_download_client(self._settings, transport=transport)
            self._owned.append(download_client)
        self._api = api_client
        self._download = download_client
        self._closed = False
        self._parser = parser or build_output_parser(self._settings.output_format)

    async def __aenter__(self) -> "SignaloidTaskClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        for client in self._owned:
            await client.aclose()

    async def _send(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        *,
        error_message: str,
        **kwargs: object,
    ) -> httpx.Response:
        try:
            response = await client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            detail = _response_detail(exc.response)
            logger.debug("%s %s -> HTTP %s: %r", method, url, exc.response.status_code, detail)
            raise RemoteApiError(
                error_message,
                status_code=exc.response.status_code,
                detail=detail,
            ) from exc
        except httpx.RequestError as exc:
            logger.debug("%s %s failed: %s", method, url, exc)
            raise RemoteApiError(error_message, detail=str(exc) or type(exc).__name__) from exc
        return response

    # ---- Task Submitter ----

    async def submit_task(self, code: str, arguments: str) -> str:
        """Envía el código fuente con sus argumentos y devuelve el `TaskID`."""

        body = TaskRequest.for_source(code, arguments).model_dump(by_alias=True)
        response = await self._send(
            self._api,
            "POST",
            "/tasks",
            json=body,
            error_message="Error submitting task",
        )
        try:
            task_id = TaskSubmissionResponse.model_validate(response.json()).task_id
        except ValueError as exc:
            raise RemoteApiError("Error submitting task", detail="response has no TaskID") from exc

        logger.info("Task submitted. Task ID: %s", task_id)
        return task_id

    # ---- Status Poller ----

    async def fetch_task_status(self, task_id: str) -> str:
        response = await self._send(
            self._api,
            "GET",
            f"/tasks/{task_id}",
            error_message="Error checking task status",
        )
        try:
            return TaskStatusResponse.model_validate(response.json()).status
        except ValueError as exc:
            raise RemoteApiError("Error checking task status", detail="response has no Status") from exc

    async def _wait_interval(self, cancel_event: asyncio.Event | None) -> None:
        interval = self._settings.poll_interval_seconds
        if cancel_event is None:
            await asyncio.sleep(interval)
            return
        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=interval)
        except asyncio.TimeoutError:
            return
        raise PollingCancelledError("Polling cancelled.")

    async def wait_for_completion(
        self,
        task_id: str,
        *,
        cancel_event: asyncio.Event | None = None,
        on_status: Callable[[str], None] | None = None,
    ) -> list[str]:
        """Consulta el estado hasta `Completed`, `Cancelled` o `Stopped`.

        Devuelve la secuencia de estados observados (el último es `Completed`).
        Cualquier otro estado se registra y se vuelve a consultar tras
        `poll_interval_seconds`.
        """

        max_attempts = self._settings.poll_max_attempts
        observed: list[str] = []
        while True:
            if cancel_event is not None and cancel_event.is_set():
                raise PollingCancelledError("Polling cancelled.")

            status = await self.fetch_task_status(task_id)
            observed.append(status)
            if on_status is not None:
                on_status(status)

            if status in TaskStatus.failure_statuses():
                logger.error("Task is %s.", status)
                raise TaskTerminatedError(task_id, status)
            logger.info("Task status: %s", status)
            if status == TaskStatus.COMPLETED.value:
                return observed

            if max_attempts is not None and len(observed) >= max_attempts:
                raise PollingTimeoutError(
                    f"Task {task_id} not finished after {max_attempts} status checks (last: {status})."
                )
            await self._wait_interval(cancel_event)

    # ---- Output Extractor ----

    async def fetch_task_outputs(self, task_id: str) -> TaskOutputsResponse:
        response = await self._send(
            self._api,
            "GET",
            f"/tasks/{task_id}/outputs",
            error_message="Error getting task output",
        )
        try:
            return TaskOutputsResponse.model_validate(response.json())
        except ValueError as exc:
            raise RemoteApiError("Error getting task output", detail="malformed outputs response") from exc

    async def fetch_output_stream(self, output_url: str) -> str:
        response = await self._send(
            self._download,
            "GET",
            output_url,
            error_message="Error fetching output stream",
        )
        return response.text

    async def get_task_output(self, task_id: str) -> ConversionResult:
        """Descarga el stdout de la tarea y extrae tasa e importe convertido."""

        outputs = await self.fetch_task_outputs(task_id)
        if not outputs.stdout:
            raise MissingOutputError("No output found for the task.")

        stdout = await self.fetch_output_stream(outputs.stdout)
        return self._parser.parse(stdout)
