"""CLI principal (Typer + Rich).

Comandos:
- `tasks`: dashboard de tareas (spinner, vacío, error, tabla; `--watch`).
- `export`: vuelca el listado agregado a un fichero JSON.
- `doctor`: diagnóstico y configuración.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from adapters.json_exporter import dumps_tasks, export_tasks_json
from adapters.task_api import TaskApiClient
from cli import doctor
from cli.dashboard import LOAD_ERRORS, run_dashboard
from cli.ui_components import build_error_panel, print_banner
from core.config import AppSettings
from core.interfaces.task_source import TaskSource
from core.logging_setup import setup_logging

app = typer.Typer(no_args_is_help=True, help="Read-only dashboard of tasks across all projects.")
app.add_typer(doctor.app, name="doctor")

console = Console()
err_console = Console(stderr=True)


def build_source(settings: AppSettings) -> TaskSource:
    return TaskApiClient(settings)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Override TASKBOARD_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    settings = AppSettings()
    setup_logging(log_level or settings.log_level, console=err_console)
    ctx.obj = settings


def _settings(ctx: typer.Context) -> AppSettings:
    return ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()


@app.command()
def tasks(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print tasks as JSON instead of a table."),
    watch: bool = typer.Option(False, "--watch/--no-watch", help="Offer manual refresh after each load."),
    banner: bool = typer.Option(True, "--banner/--no-banner", help="Show the banner in table mode."),
) -> None:
    """Show every task of every project."""

    source = build_source(_settings(ctx))

    if as_json:
        try:
            result = asyncio.run(source.fetch_all_tasks())
        except LOAD_ERRORS as exc:
            err_console.print(build_error_panel(exc))
            raise typer.Exit(code=1) from exc
        console.print_json(dumps_tasks(result))
        return

    if banner:
        print_banner(console)

    state = run_dashboard(console=console, source=source, watch=watch, confirm=typer.confirm)
    if state.is_error:
        raise typer.Exit(code=1)


@app.command()
def export(
    ctx: typer.Context,
    output: Path = typer.Argument(..., help="Destination JSON file."),
) -> None:
    """Fetch all tasks and write them to a JSON file."""

    source = build_source(_settings(ctx))
    try:
        result = asyncio.run(source.fetch_all_tasks())
    except LOAD_ERRORS as exc:
        err_console.print(build_error_panel(exc))
        raise typer.Exit(code=1) from exc

    path = export_tasks_json(tasks=result, output_path=output)
    console.print(f"[green]Exported {len(result)} tasks to:[/green] {path}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
