"""Decode/encode entry points for the wire format.

Responsibility:
- Turn JSON text, bytes or already-parsed mappings into domain models.
- Translate pydantic's `ValidationError` into the resource model error
  taxonomy, keeping the original error chained as `__cause__`.
- Encode models back to their wire dict/JSON (aliases, presence rules).

Nothing here is silently recovered: an unknown status or a malformed id is
always surfaced, since coercing it could hide a client/server version skew.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, TypeVar

from pydantic import ValidationError

from core.domain.consistency import check_response_tree
from core.domain.errors import (
    InconsistentConfiguration,
    MalformedIdentifier,
    MalformedPayload,
    MissingRequiredField,
    ResourceModelError,
    UnknownEnumValue,
)
from core.domain.models import (
    ControlPlane,
    ControlPlaneConfiguration,
    ControlPlaneCreateParameters,
    ControlPlaneListResponse,
    ControlPlaneResponse,
    WireModel,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=WireModel)

Payload = str | bytes | bytearray | Mapping[str, Any]

_IDENTIFIER_ERRORS = frozenset({"uuid_parsing", "uuid_type", "uuid_version"})

# Name used on the CLI and in `decode_http_response` for each envelope.
MODEL_KINDS: dict[str, type[WireModel]] = {
    "controlplane": ControlPlane,
    "configuration": ControlPlaneConfiguration,
    "response": ControlPlaneResponse,
    "list": ControlPlaneListResponse,
    "create": ControlPlaneCreateParameters,
}


def _location(loc: tuple[Any, ...]) -> str:
    parts: list[str] = []
    for part in loc:
        if isinstance(part, int):
            parts.append(f"[{part}]")
        else:
            parts.append(("." if parts else "") + str(part))
    return "".join(parts) or "$"


def translate_validation_error(exc: ValidationError, model: type[WireModel]) -> ResourceModelError:
    """Map the first pydantic error onto the taxonomy."""

    for err in exc.errors():
        kind = err.get("type")
        location = _location(tuple(err.get("loc", ())))
        if kind == "missing":
            return MissingRequiredField(location)
        if kind == "enum":
            expected = (err.get("ctx") or {}).get("expected", "")
            allowed = [part.strip(" '") for part in expected.replace(" or ", ",").split(",") if part.strip(" '")]
            return UnknownEnumValue(location, err.get("input"), allowed)
        if kind in _IDENTIFIER_ERRORS:
            return MalformedIdentifier(location, err.get("input"))
        if kind == "value_error":
            original = (err.get("ctx") or {}).get("error")
            if isinstance(original, ResourceModelError):
                return original
    return MalformedPayload(model.__name__, str(exc))


def decode(model: type[M], payload: Payload, *, strict: bool = False) -> M:
    """Decode `payload` into `model`.

    With `strict=True` the consistency checker also runs and its findings are
    raised as `InconsistentConfiguration`.
    """

    try:
        if isinstance(payload, (str, bytes, bytearray)):
            obj = model.model_validate_json(payload)
        else:
            obj = model.model_validate(payload)
    except ValidationError as exc:
        error = translate_validation_error(exc, model)
        logger.debug("decoding %s failed: %s", model.__name__, error)
        raise error from exc

    issues = check_response_tree(obj)
    if issues:
        logger.warning("%s decoded with %d consistency issue(s)", model.__name__, len(issues))
        if strict:
            raise InconsistentConfiguration(issues)
    return obj


def decode_control_plane(payload: Payload, *, strict: bool = False) -> ControlPlane:
    return decode(ControlPlane, payload, strict=strict)


def decode_configuration(payload: Payload, *, strict: bool = False) -> ControlPlaneConfiguration:
    return decode(ControlPlaneConfiguration, payload, strict=strict)


def decode_response(payload: Payload, *, strict: bool = False) -> ControlPlaneResponse:
    return decode(ControlPlaneResponse, payload, strict=strict)


def decode_list_response(payload: Payload, *, strict: bool = False) -> ControlPlaneListResponse:
    return decode(ControlPlaneListResponse, payload, strict=strict)


def decode_create_parameters(payload: Payload) -> ControlPlaneCreateParameters:
    return decode(ControlPlaneCreateParameters, payload)


def decode_kind(kind: str, payload: Payload, *, strict: bool = False) -> WireModel:
    try:
        model = MODEL_KINDS[kind]
    except KeyError:
        raise UnknownEnumValue("kind", kind, MODEL_KINDS) from None
    return decode(model, payload, strict=strict)


def encode(model: WireModel) -> dict[str, Any]:
    """Wire dict for `model` (camelCase keys, RFC 3339 timestamps)."""

    return model.model_dump(mode="json", by_alias=True)


def encode_json(model: WireModel, *, indent: int | None = None) -> str:
    return json.dumps(encode(model), ensure_ascii=False, indent=indent)
