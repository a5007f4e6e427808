"""Closed enumerations of the control plane API.

Every enumeration here is closed: `parse` rejects anything outside the listed
values with `UnknownEnumValue` instead of falling back to a default, so a
server that starts sending a new status shows up as an error on the client.

The transition tables mirror the lifecycle the server drives. `None` as a
target stands for "the entity was removed".
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from core.domain.errors import InvalidTransition, UnknownEnumValue


class WireEnum(str, Enum):
    """String enumeration as it travels on the wire."""

    @classmethod
    def parse(cls, value: Any, *, location: str | None = None):
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownEnumValue(
                location or cls.__name__,
                value,
                [member.value for member in cls],
            ) from None

    def __str__(self) -> str:
        return self.value


class Status(WireEnum):
    """Phase of a control plane. Exactly one applies at any time."""

    PROVISIONING = "provisioning"
    UPDATING = "updating"
    READY = "ready"
    DELETING = "deleting"

    @classmethod
    def initial(cls) -> "Status":
        return cls.PROVISIONING

    def successors(self) -> frozenset[Status | None]:
        return _STATUS_TRANSITIONS[self]

    def can_transition_to(self, target: Status | None) -> bool:
        return target in _STATUS_TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        return self is Status.DELETING

    @property
    def is_stable(self) -> bool:
        return self is Status.READY


_STATUS_TRANSITIONS: dict[Status, frozenset[Status | None]] = {
    Status.PROVISIONING: frozenset({Status.READY}),
    Status.READY: frozenset({Status.UPDATING, Status.DELETING}),
    Status.UPDATING: frozenset({Status.READY}),
    Status.DELETING: frozenset({None}),
}


class PermissionGroup(WireEnum):
    """Access level of the requesting identity on one control plane."""

    # Can modify any object in the control plane, including deleting it.
    OWNER = "owner"
    # Can read the basic environment.
    MEMBER = "member"
    NONE = "none"

    @property
    def can_read(self) -> bool:
        return self in (PermissionGroup.OWNER, PermissionGroup.MEMBER)

    @property
    def can_write(self) -> bool:
        return self is PermissionGroup.OWNER

    @property
    def can_delete(self) -> bool:
        return self is PermissionGroup.OWNER


class ConfigurationStatus(WireEnum):
    """Phase of a configuration installed into a control plane.

    An install has to reach `ready` before an upgrade can be queued; there is no
    terminal phase, the configuration cycles through upgrades for its whole life.
    """

    INSTALLATION_QUEUED = "installationQueued"
    INSTALLING = "installing"
    UPGRADE_QUEUED = "upgradeQueued"
    UPGRADING = "upgrading"
    READY = "ready"

    @classmethod
    def initial(cls) -> "ConfigurationStatus":
        return cls.INSTALLATION_QUEUED

    def successors(self) -> frozenset[ConfigurationStatus]:
        return _CONFIGURATION_TRANSITIONS[self]

    def can_transition_to(self, target: ConfigurationStatus | None) -> bool:
        return target in _CONFIGURATION_TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        return False

    @property
    def is_stable(self) -> bool:
        return self is ConfigurationStatus.READY

    @property
    def is_queued(self) -> bool:
        return self in (ConfigurationStatus.INSTALLATION_QUEUED, ConfigurationStatus.UPGRADE_QUEUED)


_CONFIGURATION_TRANSITIONS: dict[ConfigurationStatus, frozenset[ConfigurationStatus]] = {
    ConfigurationStatus.INSTALLATION_QUEUED: frozenset({ConfigurationStatus.INSTALLING}),
    ConfigurationStatus.INSTALLING: frozenset({ConfigurationStatus.READY}),
    ConfigurationStatus.READY: frozenset({ConfigurationStatus.UPGRADE_QUEUED}),
    ConfigurationStatus.UPGRADE_QUEUED: frozenset({ConfigurationStatus.UPGRADING}),
    ConfigurationStatus.UPGRADING: frozenset({ConfigurationStatus.READY}),
}


def check_transition(current: Status | ConfigurationStatus, target: Any) -> None:
    """Raise `InvalidTransition` unless `current -> target` is in the table.

    `target` may be a raw wire string; it is parsed against the enumeration of
    `current` first, so unknown values surface as `UnknownEnumValue`.
    """

    if target is not None:
        target = type(current).parse(target)
    if not current.can_transition_to(target):
        raise InvalidTransition(current, target)


def transition_table(enum_cls: type[Status] | type[ConfigurationStatus]) -> list[tuple[str, str]]:
    """Flatten the transition table of `enum_cls` into `(from, to)` pairs."""

    rows: list[tuple[str, str]] = []
    for member in enum_cls:
        targets = sorted(member.successors(), key=lambda t: "~" if t is None else t.value)
        for target in targets:
            rows.append((member.value, "(removed)" if target is None else target.value))
    return rows
