"""Cliente de agregación de tareas.

Flujo de una pasada de agregación:
1. `GET /projects`.
2. Sin proyectos (o cuerpo que no es lista) -> `[]` sin más requests.
3. `GET /projects/{id}/tasks` para todos los proyectos a la vez (fan-out) y
   espera a que terminen todos (fan-in).
4. Cualquier respuesta no-2xx -> un único `RequestFailure`; nunca se
   devuelven resultados parciales.
5. Concatenación en el orden de los proyectos, no en el de llegada.

Este módulo vive en adapters porque es I/O puro (HTTP).
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx
from pydantic import TypeAdapter

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import RequestFailure
from core.domain.models import Project, Task

logger = logging.getLogger(__name__)

_PROJECTS = TypeAdapter(list[Project])
_TASKS = TypeAdapter(list[Task])


def build_request_failure(response: httpx.Response) -> RequestFailure:
    """Construye el `RequestFailure` de una respuesta no-2xx.

    El detalle (`message` del cuerpo JSON) es best-effort: si el cuerpo no se
    puede parsear, el error queda solo con el status original.
    """

    details: str | None = None
    try:
        data = response.json()
    except Exception:  # cuerpo ilegible: nos quedamos con el status
        data = None
    if isinstance(data, dict) and "message" in data:
        message = data.get("message")
        details = "" if message is None else str(message)
    return RequestFailure(response.status_code, details)


class TaskApiClient:
    """Agrega las tareas de todos los proyectos del API.

    Si se inyecta `client`, se usa tal cual y no se cierra; si no, cada
    operación abre y cierra su propio `httpx.AsyncClient`.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with build_async_client(self._settings) as client:
            yield client

    async def _get_json(self, client: httpx.AsyncClient, path: str) -> Any:
        response = await client.get(path)
        if not response.is_success:
            logger.debug("GET %s -> %s", path, response.status_code)
            raise build_request_failure(response)
        return response.json()

    async def _project_tasks(self, client: httpx.AsyncClient, project_id: str) -> list[Task]:
        data = await self._get_json(client, f"/projects/{project_id}/tasks")
        return _TASKS.validate_python(data)

    async def fetch_projects(self) -> list[Project]:
        """Lista los proyectos; un cuerpo que no es lista se trata como vacío."""

        async with self._session() as client:
            data = await self._get_json(client, "/projects")
        if not isinstance(data, list):
            return []
        return _PROJECTS.validate_python(data)

    async def fetch_project_tasks(self, project_id: str) -> list[Task]:
        async with self._session() as client:
            return await self._project_tasks(client, project_id)

    async def fetch_all_tasks(self) -> list[Task]:
        """Tareas de todos los proyectos, en orden de proyecto y luego de servidor.

        Si fallan varios proyectos a la vez, gana el de menor índice.
        """

        async with self._session() as client:
            data = await self._get_json(client, "/projects")
            if not isinstance(data, list) or not data:
                return []
            projects = _PROJECTS.validate_python(data)
            logger.debug("Fetching tasks for %d projects", len(projects))

            results = await asyncio.gather(
                *(self._project_tasks(client, project.id) for project in projects),
                return_exceptions=True,
            )

        tasks: list[Task] = []
        for result in results:
            if isinstance(result, BaseException):
                raise result
            tasks.extend(result)
        return tasks
