"""Wrapper de httpx.

Estandariza timeouts, headers y autenticación para que todas las llamadas a
la API de tareas se comporten igual. Los tests sustituyen el transporte con
`httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings, require_api_key


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` autenticado contra `settings.api_base_url`.

    Lanza `ConfigurationError` si no hay API key.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
        "Content-Type": "application/json",
        "Authorization": require_api_key(settings),
    }
    return httpx.AsyncClient(
        base_url=settings.api_base_url.rstrip("/"),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def build_download_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Cliente sin `Authorization` para artefactos pre-firmados (stdout/stderr).

    Nota: las URLs de salida apuntan a otro host; no se les envía la API key.
    """

    settings = settings or AppSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent},
        transport=transport,
    )
