"""HTTP helpers shared by the Zoom clients."""

from __future__ import annotations

from typing import Any, Dict

import httpx


def response_payload(response: httpx.Response) -> Dict[str, Any]:
    """Decode a JSON object body, keeping anything else as raw text."""
    try:
        body = response.json()
    except ValueError:
        return {"status": response.status_code, "body": response.text}
    if isinstance(body, dict):
        return body
    return {"status": response.status_code, "body": body}


__all__ = ["response_payload"]
