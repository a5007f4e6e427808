"""Domain models (Pydantic v2) for the control plane API.

Why Pydantic in the domain:
- Strict validation at the wire boundary and self-documenting fields (Field)
  without coupling the core to any I/O library.
- Aliases keep the Python names snake_case while the JSON stays camelCase.

Notes:
- Models are frozen: a decoded response may be shared by many callers, so
  changes always go through `model_copy` and produce a new value.
- Presence matters. Fields listed in `_omit_when_empty` are dropped on encode
  when they hold no value; fields listed in `_nullable` are emitted (as null if
  needed) only when they were supplied, so "not sent", "sent as null" and
  "sent with a value" all round-trip.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, ClassVar
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_serializer, model_validator
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict

from core.domain.errors import InvalidExpiry, InvalidTransition, PageBoundsError
from core.domain.status import (
    ConfigurationStatus,
    PermissionGroup,
    Status,
    check_transition,
)


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are taken as UTC.
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


class WireModel(BaseModel):
    """Base for every model exchanged with the API."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    _omit_when_empty: ClassVar[frozenset[str]] = frozenset()
    _nullable: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def _apply_presence(self, handler: Any) -> Any:
        data = handler(self)
        if not isinstance(data, dict):
            return data
        for name, field in type(self).model_fields.items():
            key = field.alias if field.alias in data else name
            if key not in data:
                continue
            if name in self._omit_when_empty and not getattr(self, name):
                del data[key]
            elif name in self._nullable and name not in self.model_fields_set:
                del data[key]
        return data

    def has(self, name: str) -> bool:
        """True when `name` was supplied explicitly (even as null)."""

        return name in self.model_fields_set


class ControlPlaneConfiguration(WireModel):
    """A configuration instance associated with a control plane."""

    _omit_when_empty: ClassVar[frozenset[str]] = frozenset({"synced_at", "deployed_at"})
    _nullable: ClassVar[frozenset[str]] = frozenset({"name", "current_version", "desired_version"})

    id: UUID = Field(
        ...,
        description="Configuration identifier, independent of the control plane id.",
    )
    name: str | None = Field(
        default=None,
        description="Human readable label; null when unnamed or not resolved yet.",
    )
    current_version: str | None = Field(
        default=None,
        description="Version currently deployed; null before the first install.",
    )
    desired_version: str | None = Field(
        default=None,
        description="Version being converged to; null when nothing is pending.",
    )
    status: ConfigurationStatus = Field(
        ...,
        description="Installation/upgrade phase.",
    )
    synced_at: datetime | None = Field(
        default=None,
        description="Last successful reconciliation.",
    )
    deployed_at: datetime | None = Field(
        default=None,
        description="Last successful deployment.",
    )

    @property
    def has_pending_change(self) -> bool:
        return self.desired_version is not None and self.desired_version != self.current_version

    def with_status(self, status: ConfigurationStatus | str) -> ControlPlaneConfiguration:
        check_transition(self.status, status)
        return self.model_copy(update={"status": ConfigurationStatus.parse(status)})


class ControlPlane(WireModel):
    """A managed control plane.

    `expires_at` is always present. What happens once it has passed is up to
    the service that owns the control plane; `is_expired` only reports it.
    """

    _omit_when_empty: ClassVar[frozenset[str]] = frozenset(
        {"name", "description", "creator_id", "created_at", "updated_at"}
    )

    id: UUID = Field(..., description="Globally unique identifier.")
    name: str = Field(default="")
    description: str = Field(default="")
    creator_id: int = Field(
        default=0,
        ge=0,
        description="Numeric identifier of the creating user.",
    )
    reserved: bool = Field(
        default=False,
        description="Held for internal/system use rather than general allocation.",
    )
    created_at: datetime | None = Field(default=None)
    updated_at: datetime | None = Field(default=None)
    expires_at: datetime = Field(...)
    configuration: ControlPlaneConfiguration = Field(...)

    def is_expired(self, at: datetime | None = None) -> bool:
        at = at or datetime.now(timezone.utc)
        return _as_utc(self.expires_at) <= _as_utc(at)

    def extend_expiry(self, new_expiry: datetime) -> ControlPlane:
        """Return a copy expiring at `new_expiry`; expiry never moves backwards."""

        if _as_utc(new_expiry) < _as_utc(self.expires_at):
            raise InvalidExpiry(
                f"new expiry {new_expiry.isoformat()} is earlier than {self.expires_at.isoformat()}"
            )
        return self.model_copy(update={"expires_at": _as_utc(new_expiry)})


class ControlPlaneResponse(WireModel):
    """Body returned when fetching a control plane.

    Assembled by the server per request: the permission depends on who asked.
    """

    _omit_when_empty: ClassVar[frozenset[str]] = frozenset({"permission"})

    control_plane: ControlPlane = Field(...)
    status: Status = Field(..., alias="controlPlanestatus")
    permission: PermissionGroup | None = Field(default=None, alias="controlPlanePermission")

    def with_status(self, status: Status | str) -> ControlPlaneResponse:
        if status is None:
            raise InvalidTransition(
                self.status, None, detail="removal is not a status; drop the response instead of copying it"
            )
        check_transition(self.status, status)
        return self.model_copy(update={"status": Status.parse(status)})


class ControlPlaneListResponse(WireModel):
    """One page of control planes.

    `page` follows the server's convention (1-based for the hosted API);
    `count` is the total across all pages.
    """

    control_planes: list[ControlPlaneResponse] = Field(default_factory=list)
    size: int = Field(..., ge=0)
    page: int = Field(..., ge=0)
    count: int = Field(..., ge=0)

    @field_validator("control_planes", mode="before")
    @classmethod
    def _null_means_empty(cls, value: Any) -> Any:
        # An empty page may be encoded as `null` rather than `[]`.
        return [] if value is None else value

    @model_validator(mode="after")
    def _check_bounds(self) -> ControlPlaneListResponse:
        items = len(self.control_planes)
        if items > self.size:
            raise PageBoundsError(f"page holds {items} control planes but size is {self.size}")
        if self.count < items:
            raise PageBoundsError(f"count {self.count} is smaller than the {items} control planes on the page")
        return self

    @property
    def page_count(self) -> int:
        if self.size == 0:
            return 0
        return -(-self.count // self.size)


class ControlPlaneCreateParameters(WireModel):
    """Body sent to create a control plane. Id and status are assigned by the server."""

    configuration_id: UUID = Field(...)
    name: str = Field(...)
    description: str = Field(default="")
