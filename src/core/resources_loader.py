"""Cargador del programa que se ejecuta en Signaloid.

El programa C (`resources/conversion.c`) viaja dentro del paquete; se puede
sustituir con `SIGNALOID_PROGRAM_PATH` o `AppSettings.program_path`.
"""

from __future__ import annotations

from pathlib import Path

from core.config import AppSettings
from core.errors import ResourceLoadError

DEFAULT_PROGRAM_NAME = "conversion.c"


def _resources_dir() -> Path:
    # core/resources_loader.py -> core/resources
    return Path(__file__).resolve().parent / "resources"


def get_default_program_path() -> Path:
    return _resources_dir() / DEFAULT_PROGRAM_NAME


def resolve_program_path(settings: AppSettings | None = None) -> Path:
    """Ruta efectiva del programa.

    Orden:
    1) `settings.program_path` (si está definido)
    2) el recurso incluido en el paquete
    """

    settings = settings or AppSettings()
    if settings.program_path is not None:
        return settings.program_path.expanduser()
    return get_default_program_path()


def load_program(settings: AppSettings | None = None) -> str:
    """Lee el código fuente a enviar. Lanza `ResourceLoadError` si no existe o está vacío."""

    path = resolve_program_path(settings)
    try:
        code = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ResourceLoadError(f"Cannot read program source {path}: {exc}") from exc
    if not code.strip():
        raise ResourceLoadError(f"Program source {path} is empty.")
    return code
