"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El API habla camelCase; los modelos exponen snake_case vía alias.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
- Son inmutables: una vez construidos no se modifican.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class TaskStatus(str, Enum):
    """Estados posibles de una tarea según el API."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    def label(self) -> str:
        """Human readable label for badges."""

        return _STATUS_LABELS[self]

    def color(self) -> str:
        """Rich color used for the status badge."""

        return _STATUS_COLORS[self]


_STATUS_LABELS: dict[TaskStatus, str] = {
    TaskStatus.TODO: "To do",
    TaskStatus.IN_PROGRESS: "In progress",
    TaskStatus.DONE: "Done",
}

_STATUS_COLORS: dict[TaskStatus, str] = {
    TaskStatus.TODO: "grey70",
    TaskStatus.IN_PROGRESS: "yellow",
    TaskStatus.DONE: "green",
}


_RECORD_CONFIG = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class Project(BaseModel):
    """Proyecto tal y como lo devuelve `GET /projects`."""

    model_config = _RECORD_CONFIG

    id: str = Field(..., min_length=1, description="Identificador del proyecto.")
    name: str = Field(..., description="Nombre visible del proyecto.")
    created_at: str = Field(
        ...,
        alias="createdAt",
        description="Timestamp de creación (string opaco, formato date-time).",
    )
    updated_at: str = Field(
        ...,
        alias="updatedAt",
        description="Timestamp de última modificación.",
    )


class Task(BaseModel):
    """Tarea de un proyecto (`GET /projects/{id}/tasks`).

    `project_id` referencia un `Project` de la misma pasada de agregación;
    el cliente confía en el servidor y no lo verifica.
    """

    model_config = _RECORD_CONFIG

    id: str = Field(..., min_length=1, description="Identificador de la tarea.")
    project_id: str = Field(
        ...,
        alias="projectId",
        description="Proyecto al que pertenece la tarea.",
    )
    title: str = Field(..., description="Título de la tarea.")
    description: str | None = Field(
        default=None,
        description="Descripción opcional (puede venir ausente o null).",
    )
    status: TaskStatus = Field(..., description="TODO | IN_PROGRESS | DONE.")
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")
