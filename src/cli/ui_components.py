"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Tables/panels are reused by `inspect` and `check`.
"""

from __future__ import annotations

from typing import Iterable, assert_never

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import (
    ControlPlane,
    ControlPlaneConfiguration,
    ControlPlaneListResponse,
    ControlPlaneResponse,
)
from core.domain.status import ConfigurationStatus, PermissionGroup, Status


def status_style(status: Status) -> str:
    if status is Status.READY:
        return "green"
    elif status is Status.PROVISIONING or status is Status.UPDATING:
        return "yellow"
    elif status is Status.DELETING:
        return "red"
    else:
        assert_never(status)


def configuration_style(status: ConfigurationStatus) -> str:
    if status is ConfigurationStatus.READY:
        return "green"
    elif status is ConfigurationStatus.INSTALLATION_QUEUED or status is ConfigurationStatus.UPGRADE_QUEUED:
        return "dim"
    elif status is ConfigurationStatus.INSTALLING or status is ConfigurationStatus.UPGRADING:
        return "yellow"
    else:
        assert_never(status)


def permission_label(permission: PermissionGroup | None) -> str:
    if permission is None:
        return "-"
    elif permission is PermissionGroup.OWNER:
        return "owner (read/write/delete)"
    elif permission is PermissionGroup.MEMBER:
        return "member (read-only)"
    elif permission is PermissionGroup.NONE:
        return "none"
    else:
        assert_never(permission)


def _fmt(value: object) -> str:
    if value is None:
        return "-"
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def build_control_planes_table(items: Iterable[ControlPlaneResponse], *, title: str = "Control Planes") -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Status")
    table.add_column("Permission", style="magenta")
    table.add_column("Configuration")
    table.add_column("Expires", style="dim")
    for item in items:
        cp = item.control_plane
        cfg = cp.configuration
        table.add_row(
            str(cp.id),
            cp.name or "-",
            Text(item.status.value, style=status_style(item.status)),
            permission_label(item.permission),
            Text(cfg.status.value, style=configuration_style(cfg.status)),
            _fmt(cp.expires_at),
        )
    return table


def build_configuration_table(cfg: ControlPlaneConfiguration) -> Table:
    table = Table(title="Configuration", show_header=False)
    table.add_column("Field", style="bright_green", no_wrap=True)
    table.add_column("Value")
    table.add_row("id", str(cfg.id))
    table.add_row("name", _fmt(cfg.name))
    table.add_row("status", Text(cfg.status.value, style=configuration_style(cfg.status)))
    table.add_row("currentVersion", _fmt(cfg.current_version))
    table.add_row("desiredVersion", _fmt(cfg.desired_version))
    table.add_row("syncedAt", _fmt(cfg.synced_at))
    table.add_row("deployedAt", _fmt(cfg.deployed_at))
    return table


def build_control_plane_table(cp: ControlPlane) -> Table:
    table = Table(title=f"Control Plane {cp.name or cp.id}", show_header=False)
    table.add_column("Field", style="bright_green", no_wrap=True)
    table.add_column("Value")
    table.add_row("id", str(cp.id))
    table.add_row("name", cp.name or "-")
    table.add_row("description", cp.description or "-")
    table.add_row("creatorId", str(cp.creator_id) if cp.creator_id else "-")
    table.add_row("reserved", "yes" if cp.reserved else "no")
    table.add_row("createdAt", _fmt(cp.created_at))
    table.add_row("updatedAt", _fmt(cp.updated_at))
    table.add_row("expiresAt", _fmt(cp.expires_at))
    return table


def build_page_caption(resp: ControlPlaneListResponse) -> str:
    return f"page {resp.page} of {resp.page_count} (size {resp.size}, {resp.count} total)"


def build_transition_table(title: str, rows: Iterable[tuple[str, str]]) -> Table:
    table = Table(title=title)
    table.add_column("From", style="cyan", no_wrap=True)
    table.add_column("To", style="white")
    for source, target in rows:
        table.add_row(source, target)
    return table


def build_issues_panel(issues: list[str]) -> Panel:
    if not issues:
        return Panel(Text("No consistency issues found.", style="green"), border_style="green")
    body = Text()
    for issue in issues:
        body.append(f"- {issue}\n")
    return Panel(body, title=Text("Consistency issues", style="bold yellow"), border_style="yellow")
