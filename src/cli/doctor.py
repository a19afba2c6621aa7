"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get("/projects")
    except Exception as exc:
        return False, str(exc)
    return response.is_success, f"HTTP {response.status_code}"


@app.command()
def run() -> None:
    """Show the effective configuration and check the tasks API."""

    settings = AppSettings()

    table = Table(title="taskboard doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API base_url", "OK", settings.api_base_url)
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("GET /projects", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api:
        _console.print(
            "\n[yellow]Note:[/yellow] set TASKBOARD_API_BASE_URL or run `taskboard doctor setup`."
        )
        raise typer.Exit(code=1)


@app.command()
def setup() -> None:
    """Store the API base URL in the user config .env."""

    current = AppSettings().api_base_url
    base_url = typer.prompt("API base URL", default=current, show_default=True).strip()
    if not base_url.startswith(("http://", "https://")):
        raise typer.BadParameter("base URL must start with http:// or https://")

    env_path = write_user_env_vars({"TASKBOARD_API_BASE_URL": base_url.rstrip("/")})
    _console.print(f"[green]Saved API config to:[/green] {env_path}")
