"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from core.config import AppSettings, get_user_env_file

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


@app.command()
def run() -> None:
    """Show the effective settings and where they come from."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        _console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(code=2) from exc

    table = Table(title="cpmodel Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    env_file = get_user_env_file()
    table.add_row("User .env", "OK" if env_file.exists() else "OPTIONAL", str(env_file))
    table.add_row("Log level", "OK", settings.log_level.upper())
    table.add_row(
        "Strict consistency",
        "ON" if settings.strict_consistency else "OFF",
        "Inconsistent payloads are rejected" if settings.strict_consistency else "Inconsistent payloads are reported",
    )
    table.add_row("JSON indent", "OK", str(settings.json_indent))
    table.add_row("API base URL", "OK", settings.api_base_url)

    _console.print(table)
