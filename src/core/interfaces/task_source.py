"""Contrato de fuentes de tareas.

Por qué Protocol:
- La capa de presentación (CLI) solo necesita "dame todas las tareas".
- Permite sustituir el cliente HTTP por un fake en tests sin herencia.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Task


@runtime_checkable
class TaskSource(Protocol):
    """Contrato mínimo para obtener el listado agregado de tareas.

    Reglas de diseño:
    - `fetch_all_tasks` es asíncrono porque hace I/O (HTTP).
    - Falla con `RequestFailure` ante cualquier respuesta no-2xx.
    """

    async def fetch_all_tasks(self) -> list[Task]:
        """Devuelve todas las tareas de todos los proyectos, en orden de proyecto."""

        ...
