"""Load JSON payloads from disk.

Accepts any of the envelopes the API returns (see `core.codec.MODEL_KINDS`),
e.g. a saved `GET /v1/controlPlanes` body for offline inspection.
"""

from __future__ import annotations

from pathlib import Path

from core.codec import decode_kind
from core.domain.models import WireModel


def load_payload(path: Path, kind: str, *, strict: bool = False) -> WireModel:
    raw = path.read_bytes()
    return decode_kind(kind, raw, strict=strict)
