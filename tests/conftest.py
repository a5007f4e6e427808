from __future__ import annotations

from typing import Any

import pytest

CP_ID = "3fa85f64-5717-4562-b3fc-2c963f66afa6"
CFG_ID = "6f1c2a0e-9d7b-4c1e-8a52-0b8f0a3d2e11"


def make_control_plane(i: int = 0, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": f"3fa85f64-5717-4562-b3fc-2c963f66a{i:03d}",
        "name": f"cp-{i}",
        "reserved": False,
        "expiresAt": "2030-01-01T00:00:00Z",
        "configuration": {
            "id": CFG_ID,
            "status": "ready",
            "name": "platform-ref",
            "currentVersion": "1.2.0",
            "desiredVersion": "1.2.0",
        },
    }
    payload.update(overrides)
    return payload


def make_response(i: int = 0, status: str = "ready", permission: str | None = "owner") -> dict[str, Any]:
    body: dict[str, Any] = {"controlPlane": make_control_plane(i), "controlPlanestatus": status}
    if permission is not None:
        body["controlPlanePermission"] = permission
    return body


@pytest.fixture
def control_plane_payload() -> dict[str, Any]:
    return {
        "id": CP_ID,
        "name": "prod",
        "reserved": False,
        "expiresAt": "2030-01-01T00:00:00Z",
        "configuration": {
            "id": CFG_ID,
            "status": "installationQueued",
            "name": None,
            "currentVersion": None,
            "desiredVersion": "1.2.0",
        },
    }


@pytest.fixture
def full_control_plane_payload() -> dict[str, Any]:
    return {
        "id": CP_ID,
        "name": "prod",
        "description": "production environment",
        "creatorId": 42,
        "reserved": True,
        "createdAt": "2024-05-01T10:00:00Z",
        "updatedAt": "2024-05-02T11:30:00Z",
        "expiresAt": "2030-01-01T00:00:00Z",
        "configuration": {
            "id": CFG_ID,
            "name": "platform-ref",
            "currentVersion": "1.1.0",
            "desiredVersion": "1.2.0",
            "status": "upgradeQueued",
            "syncedAt": "2024-05-02T11:00:00Z",
            "deployedAt": "2024-05-01T10:05:00Z",
        },
    }


@pytest.fixture
def list_payload() -> dict[str, Any]:
    return {
        "controlPlanes": [make_response(i) for i in range(10)],
        "size": 10,
        "page": 1,
        "count": 23,
    }
