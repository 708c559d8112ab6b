"""Logging de la CLI (Rich).

Se configura una sola vez desde el entrypoint; los módulos de librería solo
usan `logging.getLogger(__name__)`.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(level: str | int = "INFO", *, console: Console | None = None) -> None:
    """Instala un único `RichHandler` en stderr sobre el root logger."""

    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    # Evita handlers duplicados si se llama más de una vez (tests).
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
