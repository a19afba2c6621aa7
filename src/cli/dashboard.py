"""Dashboard de tareas en consola.

Estados: cargando (spinner), vacío, error y listado. El refresco es manual:
en modo `watch` se pregunta al usuario tras cada render.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable

import httpx
from pydantic import ValidationError
from rich.console import Console

from cli.ui_components import build_empty_panel, build_error_panel, build_tasks_table
from core.domain.errors import RequestFailure
from core.domain.models import Task
from core.interfaces.task_source import TaskSource

logger = logging.getLogger(__name__)

# Fallos que el dashboard muestra como panel de error en vez de traceback.
LOAD_ERRORS: tuple[type[Exception], ...] = (
    RequestFailure,
    httpx.HTTPError,
    ValidationError,
    ValueError,
)


@dataclass
class DashboardState:
    """Resultado de una carga: tareas o error, nunca ambos."""

    tasks: list[Task] = field(default_factory=list)
    error: Exception | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def is_empty(self) -> bool:
        return self.error is None and not self.tasks


async def load_tasks(source: TaskSource) -> DashboardState:
    try:
        tasks = await source.fetch_all_tasks()
    except LOAD_ERRORS as exc:
        logger.info("Task load failed: %s", exc)
        return DashboardState(error=exc)
    return DashboardState(tasks=tasks)


def render_state(console: Console, state: DashboardState) -> None:
    if state.is_error:
        console.print(build_error_panel(state.error))
    elif state.is_empty:
        console.print(build_empty_panel())
    else:
        console.print(build_tasks_table(state.tasks))


def fetch_with_spinner(console: Console, source: TaskSource) -> DashboardState:
    with console.status("Loading tasks...", spinner="dots"):
        return asyncio.run(load_tasks(source))


def run_dashboard(
    *,
    console: Console,
    source: TaskSource,
    watch: bool = False,
    confirm: Callable[[str], bool] | None = None,
) -> DashboardState:
    """Carga y renderiza; con `watch`, repite mientras el usuario confirme.

    Devuelve el último estado mostrado.
    """

    state = fetch_with_spinner(console, source)
    render_state(console, state)

    if not watch or confirm is None:
        return state

    while True:
        prompt = "Try again?" if state.is_error else "Refresh?"
        if not confirm(prompt):
            return state
        state = fetch_with_spinner(console, source)
        render_state(console, state)
