"""JSON export of resource models.

Why JSON:
- The output is exactly what the API accepts/returns, so it can be replayed
  against the service or fed back into `load_payload`.
"""

from __future__ import annotations

from pathlib import Path

from core.codec import encode_json
from core.domain.models import WireModel


def export_model_json(*, model: WireModel, output_path: Path, indent: int = 2) -> Path:
    """Export `model` as UTF-8 wire JSON."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(encode_json(model, indent=indent) + "\n", encoding="utf-8")
    return output_path
