"""Configuración de logging.

Consola vía `rich.logging.RichHandler` (stderr) para no mezclar logs con la
salida de la CLI (tablas/JSON en stdout).
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


class _ThirdPartyNoiseFilter(logging.Filter):
    """Deja pasar nuestros logs; de terceros solo WARNING+."""

    _OWN_PREFIXES = ("core", "adapters", "cli")

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.split(".", 1)[0] in self._OWN_PREFIXES:
            return True
        return record.levelno >= logging.WARNING


def setup_logging(level: str | int = logging.WARNING, *, console: Console | None = None) -> None:
    """Configura el root logger.

    Llamar UNA vez, al arrancar la CLI (callback de typer).
    """

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    handler.addFilter(_ThirdPartyNoiseFilter())
    root.addHandler(handler)

    logging.captureWarnings(True)
