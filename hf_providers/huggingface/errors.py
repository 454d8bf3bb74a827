"""Mapping of Hugging Face error bodies onto ``ProviderError``.

The router and the inference API answer failures with several shapes::

    {"error": "Model is overloaded"}
    {"error": {"message": "...", "type": "..."}}
    {"error": ["field required", "..."]}
    {"message": "..."}

``message`` is preferred when present, then ``error``; an undecodable body
falls back to a fixed prefix plus a truncated copy of the body.
"""
from __future__ import annotations

import json
from typing import Any, Optional, Union

from ..base.errors import ErrorCode, ProviderError, is_retryable_status
from ..config.defaults import ERROR_BODY_PREVIEW_CHARS

UNEXPECTED_RESPONSE_PREFIX = "unexpected Hugging Face response: "


def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, dict):
        return _as_text(value.get("message"))
    if isinstance(value, list):
        parts = [p for p in (_as_text(v) for v in value) if p]
        return "; ".join(parts) or None
    return None


def extract_error_message(body: Union[bytes, str, Any]) -> Optional[str]:
    """Return the human-readable message carried by an error body, if any."""
    data = body
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        try:
            data = json.loads(body)
        except json.JSONDecodeError:
            return None
    if not isinstance(data, dict):
        return None
    return _as_text(data.get("message")) or _as_text(data.get("error"))


def _preview(body: Union[bytes, str, Any]) -> str:
    if isinstance(body, (bytes, bytearray)):
        text = body.decode("utf-8", errors="replace")
    elif isinstance(body, str):
        text = body
    else:
        text = json.dumps(body, ensure_ascii=False, default=str)
    return text[:ERROR_BODY_PREVIEW_CHARS]


def map_upstream_error(
    status: Optional[int],
    body: Union[bytes, str, Any],
    *,
    provider: str,
    model: Optional[str] = None,
    request_kind: Optional[Any] = None,
) -> ProviderError:
    """Build the canonical error for a non-2xx upstream reply.

    Args:
        status: HTTP status code of the reply (``None`` for in-stream errors).
        body: Raw body bytes/text or an already decoded JSON value.
        provider: Provider key to attribute the failure to.
        model: Model the caller requested, when known.
        request_kind: Operation tag of the failed call.

    Returns:
        ProviderError: code ``UPSTREAM_API``, never raised here.
    """
    message = extract_error_message(body) or f"{UNEXPECTED_RESPONSE_PREFIX}{_preview(body)}"
    return ProviderError(
        code=ErrorCode.UPSTREAM_API,
        message=message,
        provider=provider,
        model=model,
        request_kind=request_kind,
        status_code=status,
        retryable=is_retryable_status(status),
    )


__all__ = ["map_upstream_error", "extract_error_message", "UNEXPECTED_RESPONSE_PREFIX"]
