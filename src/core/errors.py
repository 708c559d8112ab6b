"""Taxonomía de errores.

Las funciones de librería lanzan estas excepciones; solo la CLI decide el
código de salida (hoy siempre 1, ver `UxConvertError.exit_code`).
"""

from __future__ import annotations


class UxConvertError(Exception):
    """Base de todos los errores esperados de la aplicación."""

    exit_code: int = 1


class ConfigurationError(UxConvertError):
    """Falta configuración obligatoria (p.ej. la API key)."""


class ResourceLoadError(ConfigurationError):
    """No se pudo leer el programa que se envía a la API."""


class InputValidationError(UxConvertError):
    """Parámetros de conversión inválidos o contradictorios."""


class RemoteApiError(UxConvertError):
    """Respuesta no-2xx, respuesta malformada o fallo de red."""

    def __init__(self, message: str, *, status_code: int | None = None, detail: object | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail

    def __str__(self) -> str:
        base = super().__str__()
        if self.detail in (None, ""):
            return base
        return f"{base}: {self.detail}"


class TaskTerminatedError(UxConvertError):
    """La tarea remota terminó en `Cancelled` o `Stopped`."""

    def __init__(self, task_id: str, status: str) -> None:
        super().__init__(f"Task is {status}.")
        self.task_id = task_id
        self.status = status


class PollingCancelledError(UxConvertError):
    """El llamador pidió abortar la espera."""


class PollingTimeoutError(UxConvertError):
    """Se agotó `poll_max_attempts` sin estado terminal."""


class OutputParseError(UxConvertError):
    """El stdout de la tarea no contiene los valores esperados."""


class MissingOutputError(OutputParseError):
    """La tarea no expone un artefacto `Stdout`."""
