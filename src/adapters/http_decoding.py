"""httpx glue for API clients.

Why a separate adapter:
- The domain stays free of HTTP types; this module is the single place that
  knows about `httpx.Response` / `httpx.Request`.
- Nothing here sends traffic. Transport, auth and retries belong to the
  client that owns the `httpx.Client`; these helpers only decode what it
  received and build what it will send.
"""

from __future__ import annotations

from urllib.parse import urljoin

import httpx

from core.codec import Payload, decode_kind, encode
from core.config import AppSettings
from core.domain.errors import UnexpectedResponse
from core.domain.models import ControlPlaneCreateParameters, WireModel

CONTROL_PLANES_PATH = "/v1/controlPlanes"


def decode_http_response(response: httpx.Response, kind: str, *, strict: bool | None = None) -> WireModel:
    """Decode the body of `response` as the envelope named by `kind`.

    Raises `UnexpectedResponse` for non-2xx statuses and non-JSON bodies, and
    the usual decoding errors otherwise.
    """

    if strict is None:
        strict = AppSettings().strict_consistency

    if not response.is_success:
        raise UnexpectedResponse(response.status_code, response.text[:500] or response.reason_phrase)

    content_type = response.headers.get("content-type", "")
    if "json" not in content_type.lower():
        raise UnexpectedResponse(response.status_code, f"expected a JSON body, got {content_type or 'no content type'}")

    payload: Payload = response.content
    return decode_kind(kind, payload, strict=strict)


def build_create_request(
    params: ControlPlaneCreateParameters,
    *,
    base_url: str | None = None,
) -> httpx.Request:
    base_url = base_url or AppSettings().api_base_url
    url = urljoin(base_url.rstrip("/") + "/", CONTROL_PLANES_PATH.lstrip("/"))
    return httpx.Request(
        "POST",
        url,
        json=encode(params),
        headers={"Accept": "application/json"},
    )
