"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Transport exceptions from ``httpx`` and decode failures from ``json`` and
pydantic are recognized by type; anything carrying an HTTP status is treated
as an upstream reply.
"""
from __future__ import annotations

import json
from typing import Optional

import httpx
from pydantic import ValidationError

from .error_code import ErrorCode
from .provider_error import ProviderError

_RETRYABLE_STATUSES = frozenset({408, 425, 429})


def _extract_status(exc: Exception) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    val = getattr(exc, "status_code", None)
    if isinstance(val, int) and 100 <= val < 600:
        return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def is_retryable_status(status: Optional[int]) -> bool:
    """Return ``True`` for timeouts, rate limits and server errors (5xx)."""
    if status is None:
        return False
    return status in _RETRYABLE_STATUSES or 500 <= status < 600


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. ``httpx`` timeouts and transport errors.
        3. JSON / pydantic decode failures.
        4. Anything exposing an HTTP status.
        5. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (httpx.TimeoutException, httpx.TransportError, TimeoutError, ConnectionError)):
        return ErrorCode.TRANSPORT
    if isinstance(exc, (json.JSONDecodeError, ValidationError, httpx.DecodingError)):
        return ErrorCode.DECODE
    if _extract_status(exc) is not None:
        return ErrorCode.UPSTREAM_API
    return ErrorCode.UNKNOWN


__all__ = [
    "classify_exception",
    "is_retryable_status",
    "_extract_status",
]
