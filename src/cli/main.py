"""cpmodel command line interface.

Offline tooling around the control plane resource model: inspect and check
saved API payloads, print the lifecycle tables and encode creation bodies.
"""

from __future__ import annotations

import logging
from pathlib import Path
from uuid import UUID

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import export_model_json
from adapters.payload_loader import load_payload
from cli import doctor
from cli.ui_components import (
    build_configuration_table,
    build_control_plane_table,
    build_control_planes_table,
    build_issues_panel,
    build_page_caption,
    build_transition_table,
)
from core.codec import MODEL_KINDS, encode_json
from core.config import AppSettings
from core.domain.consistency import check_response_tree
from core.domain.errors import ResourceModelError
from core.domain.models import (
    ControlPlane,
    ControlPlaneConfiguration,
    ControlPlaneCreateParameters,
    ControlPlaneListResponse,
    ControlPlaneResponse,
    WireModel,
)
from core.domain.status import ConfigurationStatus, Status, transition_table

app = typer.Typer(no_args_is_help=True, help="Inspect and validate control plane API payloads.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

_KIND_HELP = f"Payload kind: {', '.join(MODEL_KINDS)}."


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def _load(path: Path, kind: str, strict: bool) -> WireModel:
    try:
        return load_payload(path, kind, strict=strict)
    except OSError as exc:
        _err_console.print(f"[red]Cannot read {path}:[/red] {exc}")
        raise typer.Exit(code=2) from exc
    except ResourceModelError as exc:
        _err_console.print(f"[red]{type(exc).__name__}:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _render(model: WireModel) -> None:
    if isinstance(model, ControlPlaneListResponse):
        _console.print(build_control_planes_table(model.control_planes))
        _console.print(build_page_caption(model), style="dim")
    elif isinstance(model, ControlPlaneResponse):
        _console.print(build_control_planes_table([model], title="Control Plane"))
    elif isinstance(model, ControlPlane):
        _console.print(build_control_plane_table(model))
        _console.print(build_configuration_table(model.configuration))
    elif isinstance(model, ControlPlaneConfiguration):
        _console.print(build_configuration_table(model))
    else:
        _console.print_json(encode_json(model))


@app.callback()
def main(
    log_level: str | None = typer.Option(None, "--log-level", help="Overrides CPMODEL_LOG_LEVEL."),
) -> None:
    settings = AppSettings()
    _configure_logging(log_level or settings.log_level)


@app.command()
def inspect(
    path: Path = typer.Argument(..., help="JSON file with the payload."),
    kind: str = typer.Option("response", "--kind", "-k", help=_KIND_HELP),
    export: Path | None = typer.Option(None, "--export", help="Write the normalized wire JSON here."),
) -> None:
    """Decode a payload and render it."""

    settings = AppSettings()
    model = _load(path, kind, settings.strict_consistency)
    _render(model)
    if export is not None:
        out = export_model_json(model=model, output_path=export, indent=settings.json_indent)
        _console.print(f"[green]Exported to:[/green] {out}")


@app.command()
def check(
    path: Path = typer.Argument(..., help="JSON file with the payload."),
    kind: str = typer.Option("response", "--kind", "-k", help=_KIND_HELP),
) -> None:
    """Decode a payload and report consistency issues (exit 1 if any)."""

    model = _load(path, kind, strict=False)
    issues = check_response_tree(model)
    _console.print(build_issues_panel(issues))
    if issues:
        raise typer.Exit(code=1)


@app.command()
def transitions() -> None:
    """Print the lifecycle transition tables."""

    _console.print(build_transition_table("Control plane status", transition_table(Status)))
    _console.print(build_transition_table("Configuration status", transition_table(ConfigurationStatus)))


@app.command(name="create-body")
def create_body(
    configuration_id: str = typer.Option(..., "--configuration-id", help="Configuration UUID."),
    name: str = typer.Option(..., "--name"),
    description: str = typer.Option("", "--description"),
) -> None:
    """Print the JSON body for a control plane creation request."""

    try:
        params = ControlPlaneCreateParameters(
            configuration_id=UUID(configuration_id),
            name=name,
            description=description,
        )
    except ValueError as exc:
        # Covers both malformed UUIDs and pydantic's ValidationError.
        raise typer.BadParameter(str(exc)) from exc

    logger.debug("encoded creation body for %s", params.name)
    typer.echo(encode_json(params, indent=AppSettings().json_indent or None))


def run() -> None:
    app()
