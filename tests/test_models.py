from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest
from pydantic import ValidationError

from conftest import CFG_ID, CP_ID, make_control_plane, make_response
from core.codec import decode_control_plane
from core.domain.errors import InvalidExpiry, InvalidTransition
from core.domain.models import (
    ControlPlane,
    ControlPlaneConfiguration,
    ControlPlaneCreateParameters,
    ControlPlaneListResponse,
    ControlPlaneResponse,
)
from core.domain.status import ConfigurationStatus, Status

EXPIRY = datetime(2030, 1, 1, tzinfo=timezone.utc)


def _configuration(**kwargs) -> ControlPlaneConfiguration:
    return ControlPlaneConfiguration(id=UUID(CFG_ID), status=ConfigurationStatus.READY, **kwargs)


def _control_plane(**kwargs) -> ControlPlane:
    return ControlPlane(
        id=UUID(CP_ID),
        expires_at=EXPIRY,
        configuration=_configuration(current_version="1.0.0"),
        **kwargs,
    )


def test_models_are_frozen() -> None:
    cp = _control_plane(name="prod")
    with pytest.raises(ValidationError):
        cp.id = UUID(CFG_ID)  # type: ignore[misc]
    with pytest.raises(ValidationError):
        cp.name = "staging"  # type: ignore[misc]


def test_identifiers_compare_by_value() -> None:
    a = _control_plane(name="prod")
    b = _control_plane(name="prod")
    assert a == b
    assert a.id == UUID(str(b.id))


def test_omit_when_empty_fields_are_dropped() -> None:
    data = _control_plane().model_dump(mode="json", by_alias=True)
    assert "name" not in data
    assert "description" not in data
    assert "creatorId" not in data
    assert "createdAt" not in data
    assert data["reserved"] is False
    assert data["expiresAt"] == "2030-01-01T00:00:00Z"


def test_nullable_fields_keep_explicit_null_only() -> None:
    explicit = _configuration(name=None, current_version="1.0.0")
    data = explicit.model_dump(mode="json", by_alias=True)
    assert data["name"] is None
    assert data["currentVersion"] == "1.0.0"
    assert "desiredVersion" not in data
    assert "syncedAt" not in data
    assert explicit.has("name") and not explicit.has("desired_version")


def test_response_permission_is_optional() -> None:
    resp = ControlPlaneResponse(control_plane=_control_plane(), status=Status.READY)
    data = resp.model_dump(mode="json", by_alias=True)
    assert data["controlPlanestatus"] == "ready"
    assert "controlPlanePermission" not in data


def test_response_with_status_checks_transition() -> None:
    resp = ControlPlaneResponse(control_plane=_control_plane(), status=Status.READY)
    updating = resp.with_status("updating")
    assert updating.status is Status.UPDATING
    assert resp.status is Status.READY
    with pytest.raises(InvalidTransition):
        updating.with_status(Status.DELETING)


def test_configuration_with_status_returns_new_value() -> None:
    cfg = ControlPlaneConfiguration(id=UUID(CFG_ID), status=ConfigurationStatus.INSTALLATION_QUEUED)
    installing = cfg.with_status(ConfigurationStatus.INSTALLING)
    assert installing.status is ConfigurationStatus.INSTALLING
    assert cfg.status is ConfigurationStatus.INSTALLATION_QUEUED
    with pytest.raises(InvalidTransition):
        cfg.with_status(ConfigurationStatus.UPGRADING)


def test_pending_change() -> None:
    assert _configuration(current_version="1.0.0", desired_version="1.1.0").has_pending_change
    assert not _configuration(current_version="1.0.0", desired_version="1.0.0").has_pending_change
    assert not _configuration(current_version="1.0.0").has_pending_change


def test_expiry_is_informational_and_only_extends() -> None:
    cp = _control_plane()
    assert not cp.is_expired(at=EXPIRY - timedelta(seconds=1))
    assert cp.is_expired(at=EXPIRY)

    later = cp.extend_expiry(EXPIRY + timedelta(days=30))
    assert later.expires_at == EXPIRY + timedelta(days=30)
    assert later.id == cp.id
    assert cp.expires_at == EXPIRY
    with pytest.raises(InvalidExpiry):
        cp.extend_expiry(EXPIRY - timedelta(days=1))


def test_list_response_bounds() -> None:
    items = [ControlPlaneResponse.model_validate(make_response(i)) for i in range(10)]
    page = ControlPlaneListResponse(control_planes=items, size=10, page=1, count=23)
    assert page.page_count == 3

    with pytest.raises(ValidationError):
        ControlPlaneListResponse(control_planes=items + items[:1], size=10, page=1, count=23)
    with pytest.raises(ValidationError):
        ControlPlaneListResponse(control_planes=items, size=10, page=1, count=5)


def test_empty_page() -> None:
    page = ControlPlaneListResponse(size=0, page=1, count=0)
    assert page.control_planes == []
    assert page.page_count == 0


def test_create_parameters_always_emit_every_field() -> None:
    params = ControlPlaneCreateParameters(configuration_id=UUID(CFG_ID), name="prod")
    assert params.model_dump(mode="json", by_alias=True) == {
        "configurationId": CFG_ID,
        "name": "prod",
        "description": "",
    }
    unnamed = ControlPlaneCreateParameters(configuration_id=UUID(CFG_ID), name="")
    assert unnamed.model_dump(mode="json", by_alias=True)["name"] == ""


def test_naive_datetimes_are_taken_as_utc() -> None:
    cp = decode_control_plane(make_control_plane())
    assert cp.is_expired(at=datetime(2031, 1, 1))
    later = cp.extend_expiry(datetime(2031, 1, 1))
    assert later.expires_at == datetime(2031, 1, 1, tzinfo=timezone.utc)
    with pytest.raises(InvalidExpiry):
        cp.extend_expiry(datetime(2029, 12, 31))


def test_response_cannot_be_copied_into_removal() -> None:
    resp = ControlPlaneResponse(control_plane=_control_plane(), status=Status.DELETING)
    with pytest.raises(InvalidTransition, match="removal is not a status"):
        resp.with_status(None)  # type: ignore[arg-type]
