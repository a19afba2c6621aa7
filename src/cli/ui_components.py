"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `tasks` y en el modo `--watch`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Task

EMPTY_STATE_MESSAGE = "There are no tasks yet. Create a project task to get started."
DEFAULT_ERROR_MESSAGE = "Failed to load tasks."


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("taskboard", style="bold cyan")
    subtitle = Text("Tasks across all projects", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def format_timestamp(value: str) -> str:
    """Fecha local legible; si no se puede parsear, el string tal cual."""

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


def status_badge(task: Task) -> Text:
    return Text(f" {task.status.label()} ", style=f"bold {task.status.color()} reverse")


def build_tasks_table(tasks: Sequence[Task]) -> Table:
    """Tabla Rich con una fila por tarea, en el orden recibido."""

    table = Table(title="Tasks", show_lines=True)
    table.add_column("Title", style="bold white")
    table.add_column("Status", no_wrap=True)
    table.add_column("Project ID", style="cyan", no_wrap=True)
    table.add_column("Updated", style="dim", no_wrap=True)

    for task in tasks:
        title = Text(task.title)
        if task.description:
            title.append("\n" + task.description, style="dim")
        table.add_row(title, status_badge(task), task.project_id, format_timestamp(task.updated_at))
    return table


def build_empty_panel() -> Panel:
    return Panel(Align.center(Text(EMPTY_STATE_MESSAGE, style="dim")), border_style="dim", padding=(1, 2))


def build_error_panel(error: BaseException | None) -> Panel:
    """Panel de error ("Something went wrong") con el mensaje de la excepción."""

    message = str(error) if error is not None and str(error) else DEFAULT_ERROR_MESSAGE
    return Panel(
        Text(message),
        title=Text("Something went wrong", style="bold red"),
        border_style="red",
    )
