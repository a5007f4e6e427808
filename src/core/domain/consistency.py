"""Consistency checks that go beyond structural validation.

A payload can be perfectly decodable and still describe an impossible state,
e.g. a configuration reported as `ready` that has no deployed version. Those
cases are reported here instead of being rejected by the models, so a client
can still display what the server sent.
"""

from __future__ import annotations

from core.domain.errors import InconsistentConfiguration
from core.domain.models import (
    ControlPlane,
    ControlPlaneConfiguration,
    ControlPlaneListResponse,
    ControlPlaneResponse,
)
from core.domain.status import ConfigurationStatus


def configuration_issues(cfg: ControlPlaneConfiguration) -> list[str]:
    issues: list[str] = []
    if cfg.status is ConfigurationStatus.READY:
        if cfg.current_version is None:
            issues.append(f"configuration {cfg.id} is ready but has no currentVersion")
        elif cfg.desired_version is not None and cfg.desired_version != cfg.current_version:
            issues.append(
                f"configuration {cfg.id} is ready but currentVersion {cfg.current_version!r} "
                f"differs from desiredVersion {cfg.desired_version!r}"
            )
    return issues


def ensure_consistent(cfg: ControlPlaneConfiguration) -> ControlPlaneConfiguration:
    issues = configuration_issues(cfg)
    if issues:
        raise InconsistentConfiguration(issues)
    return cfg


def response_issues(resp: ControlPlaneResponse) -> list[str]:
    return configuration_issues(resp.control_plane.configuration)


def list_response_issues(resp: ControlPlaneListResponse) -> list[str]:
    issues: list[str] = []
    for item in resp.control_planes:
        issues.extend(response_issues(item))
    return issues


def check_response_tree(
    obj: ControlPlaneListResponse | ControlPlaneResponse | ControlPlane | ControlPlaneConfiguration,
) -> list[str]:
    """Collect findings for any envelope or entity."""

    if isinstance(obj, ControlPlaneListResponse):
        return list_response_issues(obj)
    if isinstance(obj, ControlPlaneResponse):
        return response_issues(obj)
    if isinstance(obj, ControlPlane):
        return configuration_issues(obj.configuration)
    if isinstance(obj, ControlPlaneConfiguration):
        return configuration_issues(obj)
    return []
