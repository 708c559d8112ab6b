"""Configuración del Core.

Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
Los adaptadores (HTTP/Signaloid) reciben el `AppSettings` de forma explícita;
nada se valida en tiempo de import.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import ConfigurationError


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "uxconvert"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "uxconvert"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "uxconvert"
    return Path.home() / ".config" / "uxconvert"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# uxconvert user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class OutputFormat(str, Enum):
    """Formato del stdout que produce el programa remoto."""

    TEXT = "text"
    JSON = "json"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Un único contrato de configuración para CLI/adapters. La API key es
    opcional a nivel de settings: quien la necesita llama a `require_api_key`.
    """

    model_config = SettingsConfigDict(
        env_prefix="SIGNALOID_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_key: str | None = Field(
        default=None,
        description="API key de Signaloid (header Authorization).",
    )
    api_base_url: str = Field(
        default="https://api.signaloid.io",
        min_length=8,
        description="Base URL de la API de tareas.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="uxconvert/1.0",
        min_length=1,
        description="User-Agent para las peticiones a la API.",
    )

    poll_interval_seconds: float = Field(
        default=2.0,
        ge=0,
        description="Espera fija entre consultas de estado (segundos).",
    )
    poll_max_attempts: int | None = Field(
        default=None,
        ge=1,
        description="Máximo de consultas de estado; None = sin límite.",
    )

    output_format: OutputFormat = Field(
        default=OutputFormat.TEXT,
        description="Parser a usar sobre el stdout de la tarea (text/json).",
    )
    program_path: Path | None = Field(
        default=None,
        description="Ruta a un programa C alternativo al incluido en el paquete.",
    )

    log_level: str = Field(
        default="INFO",
        min_length=1,
        description="Nivel de logging de la CLI.",
    )


def load_settings(**overrides: object) -> AppSettings:
    """Construye `AppSettings` traduciendo errores de validación a `ConfigurationError`."""

    try:
        return AppSettings(**overrides)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


def require_api_key(settings: AppSettings) -> str:
    """Devuelve la API key o lanza `ConfigurationError` si no está definida."""

    key = (settings.api_key or "").strip()
    if not key:
        raise ConfigurationError("SIGNALOID_API_KEY environment variable not set.")
    return key
