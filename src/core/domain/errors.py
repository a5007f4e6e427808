"""Errors raised while decoding or manipulating resource models.

All of them derive from `ResourceModelError`, which is a `ValueError` so that
pydantic validators can raise them directly and callers can catch the whole
family with a single `except`.
"""

from __future__ import annotations

from typing import Any, Iterable


class ResourceModelError(ValueError):
    """Base class for every resource model failure."""


class UnknownEnumValue(ResourceModelError):
    """A closed enumeration received a value outside its set."""

    def __init__(self, location: str, value: Any, allowed: Iterable[str] = ()) -> None:
        self.location = location
        self.value = value
        self.allowed = tuple(allowed)
        expected = ", ".join(repr(a) for a in self.allowed)
        msg = f"{location}: unknown value {value!r}"
        if expected:
            msg += f" (expected one of {expected})"
        super().__init__(msg)


class MissingRequiredField(ResourceModelError):
    def __init__(self, location: str) -> None:
        self.location = location
        super().__init__(f"{location}: required field is missing")


class MalformedIdentifier(ResourceModelError):
    def __init__(self, location: str, value: Any) -> None:
        self.location = location
        self.value = value
        super().__init__(f"{location}: {value!r} is not a valid UUID")


class MalformedPayload(ResourceModelError):
    """Any other structural problem (bad JSON, wrong types, bad timestamps)."""

    def __init__(self, model: str, detail: str) -> None:
        self.model = model
        self.detail = detail
        super().__init__(f"{model}: {detail}")


class PageBoundsError(ResourceModelError):
    """A list envelope breaks `len(items) <= size` or `count >= len(items)`."""


class InvalidTransition(ResourceModelError):
    def __init__(self, current: Any, target: Any, detail: str | None = None) -> None:
        self.current = current
        self.target = target
        source = getattr(current, "value", current)
        dest = "removed" if target is None else getattr(target, "value", target)
        msg = f"invalid transition {source} -> {dest}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class InvalidExpiry(ResourceModelError):
    """An expiry update would move `expiresAt` backwards."""


class InconsistentConfiguration(ResourceModelError):
    def __init__(self, issues: Iterable[str]) -> None:
        self.issues = list(issues)
        super().__init__("; ".join(self.issues) or "inconsistent configuration")


class UnexpectedResponse(ResourceModelError):
    """An HTTP response cannot be decoded into a resource envelope."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"HTTP {status_code}: {detail}")
